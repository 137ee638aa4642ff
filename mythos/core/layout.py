"""
Print layout previewer.

Converts physical paper and margin presets into pixel geometry for an
on-screen preview (96 px per inch, scaled by zoom) and into twips for
print documents (1440 per inch). Everything here is a pure function of
(paper, margin, zoom, content).
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from .errors import LayoutError
from .pagination import ChapterEntry, extract_chapters, paginate
from .types import ExtraSection, HistoryItem, PageData, PublishingConfig

PIXELS_PER_INCH = 96
POINTS_PER_INCH = 72
TWIPS_PER_INCH = 1440

# (width, height) in inches
PAPER_SIZES = {
    "5x8": (5.0, 8.0),
    "6x9": (6.0, 9.0),
    "A5": (5.83, 8.27),
    "A4": (8.27, 11.69),
    "Letter": (8.5, 11.0),
}

MARGIN_INCHES = {
    "narrow": 0.5,
    "normal": 0.8,
    "wide": 1.0,
}

# Metric papers use their exact twip sizes rather than rounded inches
PAPER_TWIPS = {
    "A5": (8391, 11906),
    "A4": (11906, 16838),
    "Letter": (12240, 15840),
}

MARGIN_TWIPS = {
    "narrow": 720,
    "normal": 1440,
    "wide": 2160,
}

# Region bands, in multiples of the scaled font size
HEADING_BAND = 3.0
FOOTER_BAND = 2.0

DIVIDER_TOKENS = ("---", "***", "* * *", "~~~")

DIVIDER_STYLES = {
    "ornament": "❖ ❖ ❖",
    "asterism": "⁂",
    "stars": "✦ ✦ ✦",
    "rule": "────",
}


# =============================================================================
# Geometry
# =============================================================================


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class PageGeometry:
    """Pixel layout of one preview page."""

    paper: str
    margin: str
    zoom: float
    page_width: float
    page_height: float
    margin_px: float
    content: Box
    heading: Box
    body: Box
    footer: Box
    font_px: float


def _paper_inches(paper: str) -> tuple[float, float]:
    try:
        return PAPER_SIZES[paper]
    except KeyError:
        raise LayoutError(f"Unknown paper size: {paper}") from None


def _margin_inches(margin: str) -> float:
    try:
        return MARGIN_INCHES[margin]
    except KeyError:
        raise LayoutError(f"Unknown margin preset: {margin}") from None


def inches_to_pixels(inches: float, zoom: float = 1.0) -> float:
    return inches * PIXELS_PER_INCH * zoom


def points_to_pixels(points: float, zoom: float = 1.0) -> float:
    return points * PIXELS_PER_INCH / POINTS_PER_INCH * zoom


def compute_page_geometry(
    paper: str = "6x9",
    margin: str = "normal",
    zoom: float = 1.0,
    font_size: float = 12,
) -> PageGeometry:
    """
    Compute the preview page box, margin inset and text regions.

    Raises:
        LayoutError: Unknown preset or non-positive zoom
    """
    if zoom <= 0:
        raise LayoutError(f"Zoom must be positive, got {zoom}")

    width_in, height_in = _paper_inches(paper)
    page_width = inches_to_pixels(width_in, zoom)
    page_height = inches_to_pixels(height_in, zoom)
    margin_px = inches_to_pixels(_margin_inches(margin), zoom)

    content = Box(
        x=margin_px,
        y=margin_px,
        width=page_width - 2 * margin_px,
        height=page_height - 2 * margin_px,
    )

    font_px = points_to_pixels(font_size, zoom)
    heading_h = min(HEADING_BAND * font_px, content.height)
    footer_h = min(FOOTER_BAND * font_px, content.height - heading_h)
    body_h = content.height - heading_h - footer_h

    return PageGeometry(
        paper=paper,
        margin=margin,
        zoom=zoom,
        page_width=page_width,
        page_height=page_height,
        margin_px=margin_px,
        content=content,
        heading=Box(content.x, content.y, content.width, heading_h),
        body=Box(content.x, content.y + heading_h, content.width, body_h),
        footer=Box(content.x, content.y + heading_h + body_h, content.width, footer_h),
        font_px=font_px,
    )


def paper_twips(paper: str) -> tuple[int, int]:
    """Page size in twips for print documents."""
    if paper in PAPER_TWIPS:
        return PAPER_TWIPS[paper]
    width_in, height_in = _paper_inches(paper)
    return round(width_in * TWIPS_PER_INCH), round(height_in * TWIPS_PER_INCH)


def margin_twips(margin: str) -> int:
    try:
        return MARGIN_TWIPS[margin]
    except KeyError:
        raise LayoutError(f"Unknown margin preset: {margin}") from None


# =============================================================================
# Drop caps and scene dividers
# =============================================================================


@dataclass(frozen=True)
class DropCap:
    letter: str
    remainder: str


def first_body_paragraph(content: str) -> str:
    """First paragraph of prose, skipping heading lines of any level and scene dividers."""
    for block in re.split(r"\n\s*\n", content):
        lines = [
            line for line in block.split("\n")
            if not line.lstrip().startswith("#") and not is_divider(line)
        ]
        paragraph = "\n".join(lines).strip()
        if paragraph:
            return paragraph
    return ""


def split_drop_cap(content: str) -> DropCap:
    """Isolate the first letter of the first body paragraph."""
    paragraph = first_body_paragraph(content)
    if not paragraph:
        return DropCap(letter="", remainder="")
    return DropCap(letter=paragraph[0], remainder=paragraph[1:])


def is_divider(line: str) -> bool:
    return line.strip() in DIVIDER_TOKENS


def divider_glyph(style: str = "ornament") -> str:
    try:
        return DIVIDER_STYLES[style]
    except KeyError:
        raise LayoutError(f"Unknown divider style: {style}") from None


def render_dividers(content: str, style: str = "ornament") -> str:
    """Replace every scene-divider line with the glyph for the given style."""
    glyph = divider_glyph(style)
    return "\n".join(glyph if is_divider(line) else line for line in content.split("\n"))


# =============================================================================
# Preview
# =============================================================================


@dataclass
class LayoutPreview:
    """Everything the publisher preview needs for one story."""

    geometry: PageGeometry
    title: str
    author: str
    dedication: str
    heading_font: str
    body_font: str
    toc: list[ChapterEntry] = field(default_factory=list)
    front_matter: list[ExtraSection] = field(default_factory=list)
    back_matter: list[ExtraSection] = field(default_factory=list)
    drop_cap: Optional[DropCap] = None
    pages: list[PageData] = field(default_factory=list)


def build_preview(
    story: HistoryItem,
    config: Optional[PublishingConfig] = None,
    zoom: float = 1.0,
) -> LayoutPreview:
    """Lay out a story with its publishing settings."""
    config = config or story.publishing_config or PublishingConfig()
    geometry = compute_page_geometry(config.paper_size, config.margins, zoom, config.layout.font_size)
    body = render_dividers(story.content, config.layout.divider_style)

    return LayoutPreview(
        geometry=geometry,
        title=story.title,
        author=config.metadata.author,
        dedication=config.metadata.dedication,
        heading_font=config.layout.heading_font,
        body_font=config.layout.body_font,
        toc=extract_chapters(story.content) if config.include_toc else [],
        front_matter=config.front_matter,
        back_matter=config.back_matter,
        drop_cap=split_drop_cap(story.content) if config.layout.drop_caps else None,
        pages=paginate(body),
    )
