"""
Centralized domain types for Mythos & Canvas.

All dataclasses that are used across multiple modules are defined here
to make data flow explicit and avoid circular imports. Records that are
persisted serialize to the camelCase JSON shape the studio has always
stored, via to_dict() / from_dict().
"""

import re
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from mythos.config import STUDIO_CONSTANTS


def now_ms() -> int:
    """Milliseconds since the epoch, used for timestamps."""
    return int(time.time() * 1000)


def new_id(prefix: str = "") -> str:
    """Short unique id, optionally prefixed."""
    return f"{prefix}{uuid.uuid4().hex[:12]}"


# =============================================================================
# Story Configuration
# =============================================================================


LORE_CATEGORIES = ("Character", "Location", "Item", "Rule")


@dataclass(frozen=True)
class LoreEntry:
    """A user-authored world fact injected into generation prompts."""

    id: str
    name: str
    category: str
    description: str

    def __post_init__(self):
        if self.category not in LORE_CATEGORIES:
            raise ValueError(f"Unknown lore category: {self.category}")

    def to_prompt_line(self) -> str:
        return f"- [{self.category}] {self.name}: {self.description}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LoreEntry":
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            category=data.get("category", "Character"),
            description=data.get("description", ""),
        )


@dataclass(frozen=True)
class StoryConfig:
    """Answers collected by the story wizard. Immutable input to generation."""

    core_premise: str = ""
    genre: str = ""
    tone: str = ""
    narrative_style: str = ""
    target_audience: str = ""
    length_structure: str = ""
    chapter_count: str = ""
    key_elements: str = ""
    complexity: str = ""
    ending_type: str = ""
    constraints: str = ""
    existing_content: Optional[str] = None
    lore: tuple[LoreEntry, ...] = ()

    @property
    def is_continuation(self) -> bool:
        return bool(self.existing_content)

    def to_dict(self) -> dict:
        data = {
            "corePremise": self.core_premise,
            "genre": self.genre,
            "tone": self.tone,
            "narrativeStyle": self.narrative_style,
            "targetAudience": self.target_audience,
            "lengthStructure": self.length_structure,
            "chapterCount": self.chapter_count,
            "keyElements": self.key_elements,
            "complexity": self.complexity,
            "endingType": self.ending_type,
            "constraints": self.constraints,
            "lore": [entry.to_dict() for entry in self.lore],
        }
        if self.existing_content is not None:
            data["existingContent"] = self.existing_content
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "StoryConfig":
        return cls(
            core_premise=data.get("corePremise", ""),
            genre=data.get("genre", ""),
            tone=data.get("tone", ""),
            narrative_style=data.get("narrativeStyle", ""),
            target_audience=data.get("targetAudience", ""),
            length_structure=data.get("lengthStructure", ""),
            chapter_count=str(data.get("chapterCount", "")),
            key_elements=data.get("keyElements", ""),
            complexity=data.get("complexity", ""),
            ending_type=data.get("endingType", ""),
            constraints=data.get("constraints", ""),
            existing_content=data.get("existingContent"),
            lore=tuple(LoreEntry.from_dict(e) for e in data.get("lore") or []),
        )


# =============================================================================
# Publishing Configuration
# =============================================================================


@dataclass
class LayoutSettings:
    heading_font: str = "Playfair Display"
    body_font: str = "Merriweather"
    font_size: int = 12
    drop_caps: bool = True
    divider_style: str = "ornament"


@dataclass
class BookMetadata:
    author: str = ""
    dedication: str = ""
    copyright: str = field(default_factory=lambda: str(datetime.now().year))
    isbn: str = ""



@dataclass
class ExtraSection:
    """Front or back matter added in the publisher."""

    id: str
    title: str
    content: str
    type: str = "custom"

    @property
    def is_front_matter(self) -> bool:
        return self.type == "preface"


DEFAULT_BLURB = (
    "A gripping tale that defies expectations. Dive into a world where "
    "mystery and emotion collide."
)


@dataclass
class PublishingConfig:
    """Book design, metadata and export settings for one story."""

    layout: LayoutSettings = field(default_factory=LayoutSettings)
    metadata: BookMetadata = field(default_factory=BookMetadata)
    cover_resolution: str = "2K"
    cover_style: str = "Cinematic Fantasy"
    cover_image: Optional[str] = None
    back_cover_blurb: str = DEFAULT_BLURB
    include_toc: bool = True
    paper_size: str = "6x9"
    margins: str = "normal"
    extra_sections: list[ExtraSection] = field(default_factory=list)

    @property
    def front_matter(self) -> list[ExtraSection]:
        return [s for s in self.extra_sections if s.is_front_matter]

    @property
    def back_matter(self) -> list[ExtraSection]:
        return [s for s in self.extra_sections if not s.is_front_matter]

    def to_dict(self) -> dict:
        return {
            "layout": {
                "headingFont": self.layout.heading_font,
                "bodyFont": self.layout.body_font,
                "fontSize": self.layout.font_size,
                "dropCaps": self.layout.drop_caps,
                "dividerStyle": self.layout.divider_style,
            },
            "metadata": {
                "author": self.metadata.author,
                "dedication": self.metadata.dedication,
                "copyright": self.metadata.copyright,
                "isbn": self.metadata.isbn,
            },
            "coverResolution": self.cover_resolution,
            "coverStyle": self.cover_style,
            "coverImage": self.cover_image,
            "backCoverBlurb": self.back_cover_blurb,
            "includeTOC": self.include_toc,
            "paperSize": self.paper_size,
            "margins": self.margins,
            "extraSections": [
                {"id": s.id, "title": s.title, "content": s.content, "type": s.type}
                for s in self.extra_sections
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PublishingConfig":
        layout = data.get("layout") or {}
        metadata = data.get("metadata") or {}
        defaults = cls()
        return cls(
            layout=LayoutSettings(
                heading_font=layout.get("headingFont", defaults.layout.heading_font),
                body_font=layout.get("bodyFont", defaults.layout.body_font),
                font_size=int(layout.get("fontSize", defaults.layout.font_size)),
                drop_caps=bool(layout.get("dropCaps", defaults.layout.drop_caps)),
                divider_style=layout.get("dividerStyle", defaults.layout.divider_style),
            ),
            metadata=BookMetadata(
                author=metadata.get("author", ""),
                dedication=metadata.get("dedication", ""),
                copyright=str(metadata.get("copyright", defaults.metadata.copyright)),
                isbn=metadata.get("isbn", ""),
            ),
            cover_resolution=data.get("coverResolution", defaults.cover_resolution),
            cover_style=data.get("coverStyle", defaults.cover_style),
            cover_image=data.get("coverImage"),
            back_cover_blurb=data.get("backCoverBlurb", defaults.back_cover_blurb),
            include_toc=bool(data.get("includeTOC", defaults.include_toc)),
            paper_size=data.get("paperSize", defaults.paper_size),
            margins=data.get("margins", defaults.margins),
            extra_sections=[
                ExtraSection(
                    id=str(s.get("id", "")),
                    title=s.get("title", ""),
                    content=s.get("content", ""),
                    type=s.get("type", "custom"),
                )
                for s in data.get("extraSections") or []
            ],
        )


# =============================================================================
# History Types
# =============================================================================


def derive_title(content: str) -> str:
    """First '# ' heading in the content, or the untitled placeholder."""
    for line in content.split("\n"):
        if line.startswith("# "):
            return line.replace("# ", "", 1).strip()
    return STUDIO_CONSTANTS["untitled_story"]


def derive_excerpt(content: str) -> str:
    excerpt = content[: STUDIO_CONSTANTS["excerpt_length"]]
    return re.sub(r"[#*]", "", excerpt) + "..."


@dataclass
class HistoryItem:
    """A finished story as kept in the story history."""

    id: str
    timestamp: int
    title: str
    excerpt: str
    content: str
    config: StoryConfig
    lore: list[LoreEntry] = field(default_factory=list)
    publishing_config: Optional[PublishingConfig] = None

    @classmethod
    def from_content(cls, content: str, config: StoryConfig) -> "HistoryItem":
        """Build a new history entry, deriving title and excerpt from the text."""
        ts = now_ms()
        return cls(
            id=new_id(),
            timestamp=ts,
            title=derive_title(content),
            excerpt=derive_excerpt(content),
            content=content,
            config=config,
            lore=list(config.lore),
        )

    def with_content(self, content: str) -> None:
        """Replace the text in place, refreshing derived fields."""
        self.content = content
        self.title = derive_title(content)
        self.excerpt = derive_excerpt(content)
        self.timestamp = now_ms()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "title": self.title,
            "excerpt": self.excerpt,
            "content": self.content,
            "config": self.config.to_dict(),
            "lore": [entry.to_dict() for entry in self.lore],
            "publishingConfig": (
                self.publishing_config.to_dict() if self.publishing_config else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryItem":
        content = data.get("content", "")
        publishing = data.get("publishingConfig")
        return cls(
            id=str(data["id"]),
            timestamp=int(data.get("timestamp", 0)),
            title=data.get("title") or derive_title(content),
            excerpt=data.get("excerpt") or derive_excerpt(content),
            content=content,
            config=StoryConfig.from_dict(data.get("config") or {}),
            lore=[LoreEntry.from_dict(e) for e in data.get("lore") or []],
            publishing_config=PublishingConfig.from_dict(publishing) if publishing else None,
        )



@dataclass
class ImageHistoryItem:
    """One generated or edited image in the studio history."""

    id: str
    timestamp: int
    prompt: str
    image_data: str  # base64 data URI
    mode: str = "create"
    aspect_ratio: str = "1:1"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "prompt": self.prompt,
            "imageData": self.image_data,
            "mode": self.mode,
            "aspectRatio": self.aspect_ratio,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ImageHistoryItem":
        return cls(
            id=str(data["id"]),
            timestamp=int(data.get("timestamp", 0)),
            prompt=data.get("prompt", ""),
            image_data=data.get("imageData", ""),
            mode=data.get("mode", "create"),
            aspect_ratio=data.get("aspectRatio", "1:1"),
        )


# =============================================================================
# Infographic Types
# =============================================================================


class TileStatus(str, Enum):
    PENDING = "pending"
    GENERATING = "generating"
    DONE = "done"
    FAILED = "failed"


@dataclass
class InfographicItem:
    """One tile of an infographic deck. Lives only in studio state."""

    id: str
    title: str
    summary: str
    visual_prompt: str
    status: TileStatus = TileStatus.PENDING
    image_data: Optional[str] = None
    aspect_ratio: str = "4:3"
    chart: dict = field(default_factory=dict)


# =============================================================================
# Reader Types
# =============================================================================


@dataclass(frozen=True)
class PageData:
    """One reader page: a slice of lines under a chapter title."""

    content: str
    chapter_title: str
    page_number: int


# =============================================================================
# Chat Types
# =============================================================================


@dataclass
class ChatMessage:
    role: str  # "user" or "model"
    text: str
    timestamp: int = field(default_factory=now_ms)
    attachments: list[str] = field(default_factory=list)
    generated_image: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"role": self.role, "text": self.text, "timestamp": self.timestamp}
        if self.attachments:
            data["attachments"] = list(self.attachments)
        if self.generated_image:
            data["generatedImage"] = self.generated_image
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ChatMessage":
        return cls(
            role=data.get("role", "user"),
            text=data.get("text", ""),
            timestamp=int(data.get("timestamp", 0)),
            attachments=list(data.get("attachments") or []),
            generated_image=data.get("generatedImage"),
        )


@dataclass
class ChatSession:
    id: str
    title: str
    timestamp: int
    messages: list[ChatMessage] = field(default_factory=list)

    @staticmethod
    def title_for(message: ChatMessage) -> str:
        limit = STUDIO_CONSTANTS["chat_title_length"]
        if len(message.text) > limit:
            return message.text[:limit] + "..."
        if message.attachments:
            return "Image Analysis"
        return message.text

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "timestamp": self.timestamp,
            "messages": [m.to_dict() for m in self.messages],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ChatSession":
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            timestamp=int(data.get("timestamp", 0)),
            messages=[ChatMessage.from_dict(m) for m in data.get("messages") or []],
        )


@dataclass
class ChatReply:
    """Result of one chat turn."""

    text: str
    generated_image: Optional[str] = None
