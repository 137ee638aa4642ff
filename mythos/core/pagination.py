"""
Reader pagination: split story markdown into book pages.

Lines accumulate into a running buffer. A heading line flushes the buffer
as a finished page; a '## ' heading also becomes the chapter title carried
by every following page until the next one. A page also breaks when the
next line would push the buffer past the character budget. Lines are never
split, so joining all page contents gives back the input plus one trailing
newline.
"""

from dataclasses import dataclass
from typing import Optional

from mythos.config import STUDIO_CONSTANTS
from .types import PageData

CHAPTER_PREFIX = "## "
TITLE_PREFIX = "# "


@dataclass(frozen=True)
class ChapterEntry:
    """A '## ' heading and the reader page it opens on."""

    title: str
    page_number: int


def _is_heading(line: str) -> bool:
    return line.startswith(CHAPTER_PREFIX) or line.startswith(TITLE_PREFIX)


def paginate(content: str, chars_per_page: Optional[int] = None) -> list[PageData]:
    """
    Split content into pages of roughly chars_per_page characters.

    Args:
        content: Story text using '# ' for the title and '## ' for chapters
        chars_per_page: Advisory budget; defaults to the studio setting

    Returns:
        At least one PageData, numbered from 1
    """
    budget = chars_per_page or STUDIO_CONSTANTS["chars_per_page"]

    if not content.strip():
        return [PageData(content=content, chapter_title="", page_number=1)]

    pages: list[PageData] = []
    chapter_title = STUDIO_CONSTANTS["default_chapter_title"]
    buffer = ""
    buffer_len = 0

    def flush() -> None:
        nonlocal buffer, buffer_len
        pages.append(PageData(content=buffer, chapter_title=chapter_title, page_number=len(pages) + 1))
        buffer = ""
        buffer_len = 0

    for line in content.split("\n"):
        if _is_heading(line):
            if buffer.strip():
                flush()
            if line.startswith(CHAPTER_PREFIX):
                chapter_title = line[len(CHAPTER_PREFIX):].strip()

        # Soft limit: break before the line, never inside it
        if buffer_len + len(line) > budget and buffer.strip():
            flush()

        buffer += line + "\n"
        buffer_len += len(line)

    if buffer.strip():
        flush()
    elif buffer:
        # Trailing blank lines ride on the last page
        last = pages[-1]
        pages[-1] = PageData(
            content=last.content + buffer,
            chapter_title=last.chapter_title,
            page_number=last.page_number,
        )

    return pages


def extract_story_title(content: str) -> str:
    """Return the first '# ' heading, or the untitled placeholder."""
    for line in content.split("\n"):
        if line.startswith(TITLE_PREFIX):
            return line[len(TITLE_PREFIX):].strip()
    return STUDIO_CONSTANTS["untitled_story"]


def extract_chapters(content: str, chars_per_page: Optional[int] = None) -> list[ChapterEntry]:
    """List every '## ' chapter heading with the page it starts on."""
    chapters = []
    for page in paginate(content, chars_per_page):
        for line in page.content.split("\n"):
            if line.startswith(CHAPTER_PREFIX):
                chapters.append(ChapterEntry(title=line[len(CHAPTER_PREFIX):].strip(), page_number=page.page_number))
    return chapters
