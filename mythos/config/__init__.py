"""
Configuration module for Mythos & Canvas.

Re-exports all configuration.
"""

from .llm import (
    TEXT_CONSTANTS,
    get_editor_lm,
    get_fast_model,
    get_story_model,
)
from .studio import STUDIO_CONSTANTS, STORAGE_KEYS
from .image import (
    IMAGE_CONSTANTS,
    get_genai_client,
    get_image_model,
    get_cover_model,
    get_image_config,
    extract_image_from_response,
)

__all__ = [
    # LLM
    "TEXT_CONSTANTS",
    "get_editor_lm",
    "get_fast_model",
    "get_story_model",
    # Studio
    "STUDIO_CONSTANTS",
    "STORAGE_KEYS",
    # Image
    "IMAGE_CONSTANTS",
    "get_genai_client",
    "get_image_model",
    "get_cover_model",
    "get_image_config",
    "extract_image_from_response",
]
