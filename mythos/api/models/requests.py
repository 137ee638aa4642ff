"""Pydantic models for API requests."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from mythos.config import IMAGE_CONSTANTS
from mythos.core.types import (
    BookMetadata,
    ExtraSection,
    LayoutSettings,
    LoreEntry,
    PublishingConfig,
    StoryConfig,
    new_id,
)


class LoreEntryModel(BaseModel):
    """A world fact to keep consistent across the story."""

    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1, max_length=200)
    category: Literal["Character", "Location", "Item", "Rule"]
    description: str = Field(..., max_length=2000)

    def to_domain(self) -> LoreEntry:
        return LoreEntry(id=self.id, name=self.name, category=self.category, description=self.description)


class StoryConfigRequest(BaseModel):
    """Wizard answers. Supplying existing_content continues that story."""

    core_premise: str = Field(
        "",
        max_length=5000,
        description="What the story is about",
        examples=["A lighthouse keeper discovers the light is keeping something out"],
    )
    genre: str = Field("", examples=["Gothic Horror"])
    tone: str = Field("", examples=["Melancholic"])
    narrative_style: str = Field("", examples=["First person, present tense"])
    target_audience: str = Field("", examples=["Adult"])
    length_structure: str = Field("", examples=["Novella"])
    chapter_count: str = Field("", examples=["5"])
    key_elements: str = ""
    complexity: str = ""
    ending_type: str = Field("", examples=["Bittersweet"])
    constraints: str = ""
    existing_content: Optional[str] = Field(
        None,
        description="Story text to continue; omitted for a new story",
    )
    lore: list[LoreEntryModel] = Field(default_factory=list)

    def to_domain(self) -> StoryConfig:
        return StoryConfig(
            core_premise=self.core_premise,
            genre=self.genre,
            tone=self.tone,
            narrative_style=self.narrative_style,
            target_audience=self.target_audience,
            length_structure=self.length_structure,
            chapter_count=self.chapter_count,
            key_elements=self.key_elements,
            complexity=self.complexity,
            ending_type=self.ending_type,
            constraints=self.constraints,
            existing_content=self.existing_content,
            lore=tuple(entry.to_domain() for entry in self.lore),
        )

    @classmethod
    def from_domain(cls, config: StoryConfig) -> "StoryConfigRequest":
        data = {k: v for k, v in vars(config).items() if k != "lore"}
        return cls(**data, lore=[LoreEntryModel(**vars(e)) for e in config.lore])


class UpdateContentRequest(BaseModel):
    content: str = Field(..., description="Full replacement story text")


class RewriteRequest(BaseModel):
    """Request body for rewriting a passage."""

    text: str = Field(..., min_length=1, max_length=20000)
    instruction: str = Field(
        ...,
        min_length=1,
        max_length=500,
        examples=["Make it more suspenseful", "Tighten the dialogue"],
    )


class AnalyzeRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=5000, description="A story concept to critique")


class ImageGenerateRequest(BaseModel):
    """Request body for generating image variations from a prompt."""

    prompt: str = Field(..., min_length=1, max_length=4000)
    aspect_ratio: str = Field(
        IMAGE_CONSTANTS["default_aspect_ratio"],
        description="One of the supported aspect ratios",
        examples=["1:1", "16:9"],
    )
    count: int = Field(IMAGE_CONSTANTS["variation_count"], ge=1, le=8)


class ImageEditRequest(ImageGenerateRequest):
    image: str = Field(..., description="Source image as a base64 data URI")


class ImageAdjustRequest(BaseModel):
    """Bake brightness, contrast and saturation into an image. 100 leaves a channel unchanged."""

    image: str = Field(..., description="Source image as a base64 data URI")
    brightness: float = Field(100, ge=0, le=200)
    contrast: float = Field(100, ge=0, le=200)
    saturation: float = Field(100, ge=0, le=200)


class InfographicPlanRequest(BaseModel):
    """Request body for turning text into an illustrated tile deck."""

    text: str = Field(..., min_length=1, description="Source text; long input is truncated")
    use_case: Optional[str] = Field(None, examples=["linkedin", "recipe"], description="Preset that prefixes the text")
    style: Optional[str] = Field(None, examples=["Swiss", "Hand Drawn"], description="Defaults to the use case style")
    aspect_ratio: str = Field("4:3", examples=["4:3", "16:9", "9:16"])
    include_overlay: bool = Field(True, description="Composite the title and summary onto each tile")


class ChatRequest(BaseModel):
    """A chat turn. Omit session_id to start a new conversation."""

    text: str = Field(..., max_length=20000)
    session_id: Optional[str] = None
    attachments: list[str] = Field(default_factory=list, description="Images as base64 data URIs")
    model: Optional[str] = Field(None, description="Override the default chat model")


class CoverRequest(BaseModel):
    concept: Optional[str] = Field(None, description="Defaults to the story premise")
    style: Optional[str] = Field(None, description="Defaults to the saved cover style")
    count: int = Field(IMAGE_CONSTANTS["variation_count"], ge=1, le=8)


class SetCoverRequest(BaseModel):
    image: str = Field(..., description="Chosen cover as a base64 data URI")


class NavigateRequest(BaseModel):
    view: str = Field(..., examples=["DASHBOARD", "IMAGE_STUDIO"])


# =============================================================================
# Publishing
# =============================================================================


class LayoutSettingsModel(BaseModel):
    heading_font: str = "Playfair Display"
    body_font: str = "Merriweather"
    font_size: int = Field(12, ge=6, le=36)
    drop_caps: bool = True
    divider_style: Literal["ornament", "asterism", "stars", "rule"] = "ornament"


class BookMetadataModel(BaseModel):
    author: str = ""
    dedication: str = ""
    copyright: Optional[str] = None
    isbn: str = ""


class ExtraSectionModel(BaseModel):
    id: str = Field(default_factory=new_id)
    title: str
    content: str = ""
    type: Literal["preface", "epilogue", "custom"] = "custom"


class PublishingConfigModel(BaseModel):
    """Book design, metadata and export settings."""

    layout: LayoutSettingsModel = Field(default_factory=LayoutSettingsModel)
    metadata: BookMetadataModel = Field(default_factory=BookMetadataModel)
    cover_resolution: Literal["1K", "2K", "4K"] = "2K"
    cover_style: str = "Cinematic Fantasy"
    cover_image: Optional[str] = None
    back_cover_blurb: Optional[str] = None
    include_toc: bool = True
    paper_size: Literal["5x8", "6x9", "A5", "A4", "Letter"] = "6x9"
    margins: Literal["narrow", "normal", "wide"] = "normal"
    extra_sections: list[ExtraSectionModel] = Field(default_factory=list)

    def to_domain(self) -> PublishingConfig:
        metadata = BookMetadata(
            author=self.metadata.author,
            dedication=self.metadata.dedication,
            isbn=self.metadata.isbn,
        )
        if self.metadata.copyright is not None:
            metadata.copyright = self.metadata.copyright

        config = PublishingConfig(
            layout=LayoutSettings(**self.layout.model_dump()),
            metadata=metadata,
            cover_resolution=self.cover_resolution,
            cover_style=self.cover_style,
            cover_image=self.cover_image,
            include_toc=self.include_toc,
            paper_size=self.paper_size,
            margins=self.margins,
            extra_sections=[ExtraSection(**s.model_dump()) for s in self.extra_sections],
        )
        if self.back_cover_blurb is not None:
            config.back_cover_blurb = self.back_cover_blurb
        return config

    @classmethod
    def from_domain(cls, config: PublishingConfig) -> "PublishingConfigModel":
        return cls(
            layout=LayoutSettingsModel(**vars(config.layout)),
            metadata=BookMetadataModel(**vars(config.metadata)),
            cover_resolution=config.cover_resolution,
            cover_style=config.cover_style,
            cover_image=config.cover_image,
            back_cover_blurb=config.back_cover_blurb,
            include_toc=config.include_toc,
            paper_size=config.paper_size,
            margins=config.margins,
            extra_sections=[ExtraSectionModel(**vars(s)) for s in config.extra_sections],
        )
