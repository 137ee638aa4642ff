"""Markdown download of a story, with scene dividers optionally rendered."""

import re
from typing import Optional

from ..layout import render_dividers
from ..types import HistoryItem


def story_filename(story: HistoryItem, extension: str) -> str:
    """Filesystem-safe download name derived from the story title."""
    slug = re.sub(r"[^A-Za-z0-9]+", "_", story.title).strip("_").lower()
    return f"{slug or 'mythos_story'}.{extension}"


def export_markdown(story: HistoryItem, divider_style: Optional[str] = None) -> bytes:
    content = story.content
    if divider_style:
        content = render_dividers(content, divider_style)
    return content.encode("utf-8")
