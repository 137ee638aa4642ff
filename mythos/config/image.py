"""
Image generation configuration for Mythos & Canvas.

Uses Nano Banana (Gemini 2.5 Flash Image) for studio images and Nano Banana
Pro (Gemini 3 Pro Image) for book covers.
"""

import base64
import os

from dotenv import load_dotenv
from google import genai
from google.genai.types import GenerateContentConfig, ImageConfig

# Load environment variables from .env file
load_dotenv()

# Image generation constants
IMAGE_CONSTANTS = {
    "model": "gemini-2.5-flash-image",  # Nano Banana
    "cover_model": "gemini-3-pro-image-preview",  # Nano Banana Pro
    "default_aspect_ratio": "1:1",
    "cover_aspect_ratio": "2:3",
    "variation_count": 4,
    "aspect_ratios": ["1:1", "16:9", "9:16", "4:3", "3:4", "2:3"],
    "cover_resolutions": ["1K", "2K", "4K"],
}


def get_genai_client() -> genai.Client:
    """
    Get the Gemini client shared by text and image generation.

    Uses GOOGLE_API_KEY from environment.
    """
    api_key = os.getenv("GOOGLE_API_KEY")
    if not api_key:
        raise ValueError("GOOGLE_API_KEY not found in environment. Set it in .env file.")

    return genai.Client(api_key=api_key)


def get_image_model() -> str:
    """Get the image model ID."""
    return IMAGE_CONSTANTS["model"]


def get_cover_model() -> str:
    """Get the cover art model ID."""
    return IMAGE_CONSTANTS["cover_model"]


def get_image_config(aspect_ratio: str = "1:1", image_size: str = None) -> GenerateContentConfig:
    """Get the config for an image request at the given aspect ratio."""
    if image_size:
        image_config = ImageConfig(aspect_ratio=aspect_ratio, image_size=image_size)
    else:
        image_config = ImageConfig(aspect_ratio=aspect_ratio)
    return GenerateContentConfig(image_config=image_config)


def extract_image_from_response(response) -> tuple[bytes, str]:
    """
    Extract image bytes and MIME type from a Gemini API response.

    Args:
        response: The response from client.models.generate_content()

    Returns:
        (image bytes, mime type)

    Raises:
        ValueError: If no image found in response
    """
    candidates = getattr(response, "candidates", None) or []
    if candidates and candidates[0].content and candidates[0].content.parts:
        for part in candidates[0].content.parts:
            if getattr(part, "inline_data", None):
                data = part.inline_data.data
                mime_type = getattr(part.inline_data, "mime_type", None) or "image/png"
                if isinstance(data, str):
                    data = base64.b64decode(data)
                return data, mime_type

    raise ValueError("No image generated.")
