"""Pydantic models for API requests and responses."""

from .requests import (
    AnalyzeRequest,
    ChatRequest,
    CoverRequest,
    ImageAdjustRequest,
    ImageEditRequest,
    ImageGenerateRequest,
    InfographicPlanRequest,
    LoreEntryModel,
    NavigateRequest,
    PublishingConfigModel,
    RewriteRequest,
    SetCoverRequest,
    StoryConfigRequest,
    UpdateContentRequest,
)
from .responses import (
    AdjustedImageResponse,
    ChatReplyResponse,
    ChatSessionListResponse,
    ChatSessionResponse,
    CoverResponse,
    ImageListResponse,
    ImageResponse,
    ImportResponse,
    InfographicDeckResponse,
    InfographicPresetsResponse,
    InfographicTileResponse,
    PagesResponse,
    PreviewResponse,
    StoryListResponse,
    StoryResponse,
    StudioStateResponse,
    StorySummaryResponse,
    TemplateResponse,
    TextResponse,
)

__all__ = [
    "AnalyzeRequest",
    "ChatRequest",
    "CoverRequest",
    "ImageAdjustRequest",
    "ImageEditRequest",
    "ImageGenerateRequest",
    "InfographicPlanRequest",
    "LoreEntryModel",
    "NavigateRequest",
    "PublishingConfigModel",
    "RewriteRequest",
    "SetCoverRequest",
    "StoryConfigRequest",
    "UpdateContentRequest",
    "AdjustedImageResponse",
    "ChatReplyResponse",
    "ChatSessionListResponse",
    "ChatSessionResponse",
    "CoverResponse",
    "ImageListResponse",
    "ImageResponse",
    "ImportResponse",
    "InfographicDeckResponse",
    "InfographicPresetsResponse",
    "InfographicTileResponse",
    "PagesResponse",
    "PreviewResponse",
    "StoryListResponse",
    "StoryResponse",
    "StudioStateResponse",
    "StorySummaryResponse",
    "TemplateResponse",
    "TextResponse",
]
