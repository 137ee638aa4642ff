"""
PDF export with ReportLab.

Two documents:
- A simple manuscript PDF: title, byline, then the story text flowed across
  as many pages as it needs.
- An infographic deck: one dark page per tile with the tile image fitted and
  centred. 9:16 decks are portrait, everything else landscape.
"""

import logging
from io import BytesIO
from typing import Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY
from reportlab.lib.pagesizes import A4, landscape, portrait
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import inch
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate

from ..compositing import parse_data_uri
from ..layout import MARGIN_INCHES, PAPER_SIZES, divider_glyph, is_divider
from ..pagination import CHAPTER_PREFIX, TITLE_PREFIX
from ..types import HistoryItem, InfographicItem, PublishingConfig

logger = logging.getLogger(__name__)

DECK_BACKGROUND = colors.Color(15 / 255, 23 / 255, 42 / 255)

TITLE_STYLE = ParagraphStyle(
    name="ManuscriptTitle",
    fontName="Helvetica-Bold",
    fontSize=24,
    leading=28,
    alignment=TA_CENTER,
    spaceAfter=8,
)
BYLINE_STYLE = ParagraphStyle(
    name="Byline",
    fontName="Helvetica-Oblique",
    fontSize=12,
    leading=16,
    alignment=TA_CENTER,
    spaceAfter=24,
)
CHAPTER_STYLE = ParagraphStyle(
    name="Chapter",
    fontName="Helvetica-Bold",
    fontSize=16,
    leading=20,
    spaceBefore=12,
    spaceAfter=10,
)
BODY_STYLE = ParagraphStyle(
    name="Body",
    fontName="Times-Roman",
    fontSize=12,
    leading=16,
    alignment=TA_JUSTIFY,
    spaceAfter=8,
)
DIVIDER_STYLE = ParagraphStyle(
    name="Divider",
    parent=BODY_STYLE,
    alignment=TA_CENTER,
    spaceBefore=6,
    spaceAfter=14,
)


def _story_flowables(story: HistoryItem, author: str, divider_style: str) -> list:
    flowables = [Paragraph(escape(story.title), TITLE_STYLE)]
    if author:
        flowables.append(Paragraph(f"By {escape(author)}", BYLINE_STYLE))

    glyph = divider_glyph(divider_style)
    for block in story.content.split("\n\n"):
        text = block.strip()
        if not text or text.startswith(TITLE_PREFIX):
            continue
        if text.startswith(CHAPTER_PREFIX):
            heading, _, rest = text.partition("\n")
            flowables.append(Paragraph(escape(heading[len(CHAPTER_PREFIX):].strip()), CHAPTER_STYLE))
            text = rest.strip()
            if not text:
                continue
        if is_divider(text):
            # Dingbat glyphs are outside the base-14 fonts
            flowables.append(Paragraph(escape(glyph) if glyph.isascii() else "* * *", DIVIDER_STYLE))
            continue
        flowables.append(Paragraph(escape(text).replace("\n", "<br/>"), BODY_STYLE))
    return flowables


def export_story_pdf(story: HistoryItem, config: Optional[PublishingConfig] = None) -> bytes:
    """Render the story as a paginated PDF on the configured paper size."""
    config = config or story.publishing_config or PublishingConfig()
    width_in, height_in = PAPER_SIZES.get(config.paper_size, PAPER_SIZES["6x9"])
    margin = MARGIN_INCHES.get(config.margins, MARGIN_INCHES["normal"]) * inch

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=(width_in * inch, height_in * inch),
        topMargin=margin,
        bottomMargin=margin,
        leftMargin=margin,
        rightMargin=margin,
        title=story.title,
        author=config.metadata.author or None,
    )
    # Paragraphs taller than a page are split across pages
    doc.build(_story_flowables(story, config.metadata.author, config.layout.divider_style))

    logger.info("Exported PDF for story %s (%d pages)", story.id, doc.page)
    return buffer.getvalue()


def export_infographic_deck(items: Sequence[InfographicItem], aspect_ratio: str = "4:3") -> bytes:
    """One page per tile on a dark background; tiles without images stay blank."""
    page_size = portrait(A4) if aspect_ratio == "9:16" else landscape(A4)
    page_width, page_height = page_size

    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=page_size)
    pdf.setTitle("Mythos infographic deck")

    for item in items:
        pdf.setFillColor(DECK_BACKGROUND)
        pdf.rect(0, 0, page_width, page_height, stroke=0, fill=1)

        if item.image_data:
            data, _ = parse_data_uri(item.image_data)
            image = ImageReader(BytesIO(data))
            img_w, img_h = image.getSize()
            ratio = img_w / img_h
            w = page_width
            h = w / ratio
            if h > page_height:
                h = page_height
                w = h * ratio
            pdf.drawImage(image, (page_width - w) / 2, (page_height - h) / 2, width=w, height=h)

        pdf.showPage()

    pdf.save()
    return buffer.getvalue()
