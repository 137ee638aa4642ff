"""Pydantic models for API responses."""

from typing import Optional

from pydantic import BaseModel, Field

from mythos.core.layout import LayoutPreview
from mythos.core.types import (
    ChatMessage,
    ChatSession,
    HistoryItem,
    ImageHistoryItem,
    InfographicItem,
    PageData,
)

from .requests import ExtraSectionModel, LoreEntryModel, PublishingConfigModel, StoryConfigRequest


class StorySummaryResponse(BaseModel):
    """A history entry without its full text."""

    id: str
    timestamp: int
    title: str
    excerpt: str

    @classmethod
    def from_domain(cls, item: HistoryItem) -> "StorySummaryResponse":
        return cls(id=item.id, timestamp=item.timestamp, title=item.title, excerpt=item.excerpt)


class StoryResponse(StorySummaryResponse):
    """Full story with the settings it was generated from."""

    content: str
    config: StoryConfigRequest
    lore: list[LoreEntryModel] = Field(default_factory=list)
    publishing_config: Optional[PublishingConfigModel] = None

    @classmethod
    def from_domain(cls, item: HistoryItem) -> "StoryResponse":
        return cls(
            id=item.id,
            timestamp=item.timestamp,
            title=item.title,
            excerpt=item.excerpt,
            content=item.content,
            config=StoryConfigRequest.from_domain(item.config),
            lore=[LoreEntryModel(**vars(e)) for e in item.lore],
            publishing_config=(
                PublishingConfigModel.from_domain(item.publishing_config)
                if item.publishing_config
                else None
            ),
        )


class StoryListResponse(BaseModel):
    stories: list[StorySummaryResponse]
    total: int


class PageResponse(BaseModel):
    content: str
    chapter_title: str
    page_number: int

    @classmethod
    def from_domain(cls, page: PageData) -> "PageResponse":
        return cls(content=page.content, chapter_title=page.chapter_title, page_number=page.page_number)


class PagesResponse(BaseModel):
    story_id: str
    pages: list[PageResponse]
    total: int


class TextResponse(BaseModel):
    text: str


class TemplateResponse(BaseModel):
    title: str
    genre: str
    config: StoryConfigRequest


class ImageResponse(BaseModel):
    """An image kept in the studio history."""

    id: str
    timestamp: int
    prompt: str
    image_data: str
    mode: str
    aspect_ratio: str

    @classmethod
    def from_domain(cls, item: ImageHistoryItem) -> "ImageResponse":
        return cls(**vars(item))


class ImageListResponse(BaseModel):
    images: list[ImageResponse]


class AdjustedImageResponse(BaseModel):
    image: str


class InfographicTileResponse(BaseModel):
    """One tile of the deck. status is pending, generating, done or failed."""

    id: str
    title: str
    summary: str
    visual_prompt: str
    status: str
    image_data: Optional[str] = None
    aspect_ratio: str
    error: Optional[str] = None

    @classmethod
    def from_domain(cls, item: InfographicItem) -> "InfographicTileResponse":
        return cls(
            id=item.id,
            title=item.title,
            summary=item.summary,
            visual_prompt=item.visual_prompt,
            status=item.status.value,
            image_data=item.image_data,
            aspect_ratio=item.aspect_ratio,
            error=item.chart.get("error"),
        )


class InfographicDeckResponse(BaseModel):
    tiles: list[InfographicTileResponse]
    style: str
    include_overlay: bool


class UseCaseResponse(BaseModel):
    id: str
    prefix: str
    style: str


class InfographicPresetsResponse(BaseModel):
    use_cases: list[UseCaseResponse]
    styles: list[str]


class ChatMessageResponse(BaseModel):
    role: str
    text: str
    timestamp: int
    attachments: list[str] = Field(default_factory=list)
    generated_image: Optional[str] = None

    @classmethod
    def from_domain(cls, message: ChatMessage) -> "ChatMessageResponse":
        return cls(**vars(message))


class ChatSessionResponse(BaseModel):
    id: str
    title: str
    timestamp: int
    messages: list[ChatMessageResponse]

    @classmethod
    def from_domain(cls, session: ChatSession) -> "ChatSessionResponse":
        return cls(
            id=session.id,
            title=session.title,
            timestamp=session.timestamp,
            messages=[ChatMessageResponse.from_domain(m) for m in session.messages],
        )


class ChatSessionListResponse(BaseModel):
    sessions: list[ChatSessionResponse]
    last_session_id: Optional[str] = None


class ChatReplyResponse(BaseModel):
    session: ChatSessionResponse
    text: str
    generated_image: Optional[str] = None


class CoverResponse(BaseModel):
    images: list[str]


class BoxResponse(BaseModel):
    x: float
    y: float
    width: float
    height: float


class GeometryResponse(BaseModel):
    """Pixel geometry of one preview page at the requested zoom."""

    paper: str
    margin: str
    zoom: float
    page_width: float
    page_height: float
    margin_px: float
    content: BoxResponse
    heading: BoxResponse
    body: BoxResponse
    footer: BoxResponse
    font_px: float


class ChapterEntryResponse(BaseModel):
    title: str
    page_number: int


class DropCapResponse(BaseModel):
    letter: str
    remainder: str


class PreviewResponse(BaseModel):
    """Everything needed to draw the print preview."""

    geometry: GeometryResponse
    title: str
    author: str
    dedication: str
    heading_font: str
    body_font: str
    toc: list[ChapterEntryResponse]
    front_matter: list[ExtraSectionModel]
    back_matter: list[ExtraSectionModel]
    drop_cap: Optional[DropCapResponse] = None
    pages: list[PageResponse]

    @classmethod
    def from_domain(cls, preview: LayoutPreview) -> "PreviewResponse":
        g = preview.geometry
        return cls(
            geometry=GeometryResponse(
                paper=g.paper,
                margin=g.margin,
                zoom=g.zoom,
                page_width=g.page_width,
                page_height=g.page_height,
                margin_px=g.margin_px,
                content=BoxResponse(**vars(g.content)),
                heading=BoxResponse(**vars(g.heading)),
                body=BoxResponse(**vars(g.body)),
                footer=BoxResponse(**vars(g.footer)),
                font_px=g.font_px,
            ),
            title=preview.title,
            author=preview.author,
            dedication=preview.dedication,
            heading_font=preview.heading_font,
            body_font=preview.body_font,
            toc=[ChapterEntryResponse(title=c.title, page_number=c.page_number) for c in preview.toc],
            front_matter=[ExtraSectionModel(**vars(s)) for s in preview.front_matter],
            back_matter=[ExtraSectionModel(**vars(s)) for s in preview.back_matter],
            drop_cap=(
                DropCapResponse(letter=preview.drop_cap.letter, remainder=preview.drop_cap.remainder)
                if preview.drop_cap
                else None
            ),
            pages=[PageResponse.from_domain(p) for p in preview.pages],
        )


class StudioStateResponse(BaseModel):
    view: str
    active_story_id: Optional[str] = None
    is_generating: bool
    has_generated_story: bool
    infographic_tiles: int


class ImportResponse(BaseModel):
    filename: str
    text: str
    characters: int
