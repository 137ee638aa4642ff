"""
LLM configuration for Mythos & Canvas.

Uses two text tiers:
- story_model: Gemini 3 Pro with a large thinking budget for long-form prose,
  structured infographic planning and image-aware chat
- fast_model: Gemini 2.5 Flash for chat, rewrites and quick analysis

Rewrites and quick analysis run through DSPy; everything else calls the
google-genai SDK directly.
"""

import os

from dotenv import load_dotenv
import dspy

# Load environment variables from .env file
load_dotenv()


# Timeout for LLM calls (seconds)
LLM_TIMEOUT = 120

TEXT_CONSTANTS = {
    "story_model": "gemini-3-pro-preview",
    "fast_model": "gemini-2.5-flash",
    "thinking_budget": 32768,
    "infographic_input_limit": 15000,
    "min_tiles": 4,
    "max_tiles": 8,
}


def get_story_model() -> str:
    """Get the model ID used for story generation."""
    return TEXT_CONSTANTS["story_model"]


def get_fast_model() -> str:
    """Get the model ID used for quick text tasks."""
    return TEXT_CONSTANTS["fast_model"]


def get_editor_lm() -> dspy.LM:
    """
    Get the DSPy LM for rewrites and quick analysis.

    Uses Gemini 2.5 Flash (GOOGLE_API_KEY). Includes 120s timeout per call.
    """
    api_key = os.getenv("GOOGLE_API_KEY")
    if not api_key:
        raise ValueError("GOOGLE_API_KEY not found in environment. Set it in .env file.")

    return dspy.LM(
        f"gemini/{get_fast_model()}",
        api_key=api_key,
        max_tokens=4096,
        temperature=1.0,
        timeout=LLM_TIMEOUT,
    )
