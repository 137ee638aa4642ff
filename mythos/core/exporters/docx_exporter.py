"""
Manuscript export to Microsoft Word.

Builds a print-ready DOCX from a story and its publishing settings:
title page, front matter, table of contents, chapters (each on a new page,
optionally opening with a drop cap), back matter, and a centred
"- N -" page number in the footer.
"""

import logging
import re
from io import BytesIO
from typing import Optional

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, Twips

from ..layout import divider_glyph, is_divider, margin_twips, paper_twips
from ..pagination import CHAPTER_PREFIX, TITLE_PREFIX, extract_chapters
from ..types import ExtraSection, HistoryItem, PublishingConfig

logger = logging.getLogger(__name__)

DROP_CAP_SCALE = 3.5
INLINE_PATTERN = re.compile(r"(\*\*.+?\*\*|\*.+?\*)")


class DocxExporter:
    """Render a HistoryItem into DOCX bytes."""

    def __init__(self, config: Optional[PublishingConfig] = None):
        self.config = config or PublishingConfig()
        self.doc = None

    # -------------------------------------------------------------------------
    # Page setup
    # -------------------------------------------------------------------------

    def _setup_page_layout(self) -> None:
        width, height = paper_twips(self.config.paper_size)
        margin = Twips(margin_twips(self.config.margins))

        for section in self.doc.sections:
            section.page_width = Twips(width)
            section.page_height = Twips(height)
            section.top_margin = margin
            section.bottom_margin = margin
            section.left_margin = margin
            section.right_margin = margin

        normal = self.doc.styles["Normal"]
        normal.font.name = self.config.layout.body_font
        normal.font.size = Pt(self.config.layout.font_size)

    def _setup_footer(self) -> None:
        footer = self.doc.sections[0].footer
        paragraph = footer.paragraphs[0] if footer.paragraphs else footer.add_paragraph()
        paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
        paragraph.add_run("- ")
        self._add_page_number_field(paragraph)
        paragraph.add_run(" -")

    def _add_page_number_field(self, paragraph) -> None:
        """Add an auto-updating PAGE field to the paragraph."""
        begin = OxmlElement("w:fldChar")
        begin.set(qn("w:fldCharType"), "begin")
        paragraph.add_run()._r.append(begin)

        instr = OxmlElement("w:instrText")
        instr.set(qn("xml:space"), "preserve")
        instr.text = "PAGE"
        paragraph.add_run()._r.append(instr)

        separate = OxmlElement("w:fldChar")
        separate.set(qn("w:fldCharType"), "separate")
        paragraph.add_run()._r.append(separate)

        paragraph.add_run("1")

        end = OxmlElement("w:fldChar")
        end.set(qn("w:fldCharType"), "end")
        paragraph.add_run()._r.append(end)

    # -------------------------------------------------------------------------
    # Content helpers
    # -------------------------------------------------------------------------

    def _heading(self, text: str, level: int):
        heading = self.doc.add_heading(text, level=level)
        for run in heading.runs:
            run.font.name = self.config.layout.heading_font
        return heading

    def _add_inline_runs(self, paragraph, text: str) -> None:
        """Add runs for text, honouring **bold** and *italic* markers."""
        for piece in INLINE_PATTERN.split(text):
            if not piece:
                continue
            if piece.startswith("**") and piece.endswith("**") and len(piece) > 4:
                paragraph.add_run(piece[2:-2]).bold = True
            elif piece.startswith("*") and piece.endswith("*") and len(piece) > 2:
                paragraph.add_run(piece[1:-1]).italic = True
            else:
                paragraph.add_run(piece)

    def _body_paragraph(self, text: str, drop_cap: bool = False) -> None:
        paragraph = self.doc.add_paragraph()
        paragraph.alignment = WD_ALIGN_PARAGRAPH.JUSTIFY
        if drop_cap and text:
            cap = paragraph.add_run(text[0])
            cap.bold = True
            cap.font.name = self.config.layout.heading_font
            cap.font.size = Pt(self.config.layout.font_size * DROP_CAP_SCALE)
            text = text[1:]
        self._add_inline_runs(paragraph, text)

    def _section(self, section: ExtraSection) -> None:
        self.doc.add_page_break()
        self._heading(section.title, level=1)
        for block in section.content.split("\n\n"):
            if block.strip():
                self._body_paragraph(block.strip())

    # -------------------------------------------------------------------------
    # Document parts
    # -------------------------------------------------------------------------

    def _title_page(self, story: HistoryItem) -> None:
        meta = self.config.metadata
        title = self.doc.add_heading(story.title, level=0)
        title.alignment = WD_ALIGN_PARAGRAPH.CENTER

        if meta.author:
            author = self.doc.add_paragraph()
            author.alignment = WD_ALIGN_PARAGRAPH.CENTER
            author.add_run(meta.author).italic = True

        rights = self.doc.add_paragraph()
        rights.alignment = WD_ALIGN_PARAGRAPH.CENTER
        holder = f" {meta.author}" if meta.author else ""
        rights.add_run(f"Copyright © {meta.copyright}{holder}. All rights reserved.").font.size = Pt(9)
        if meta.isbn:
            rights.add_run(f"\nISBN: {meta.isbn}").font.size = Pt(9)

        if meta.dedication:
            self.doc.add_page_break()
            dedication = self.doc.add_paragraph()
            dedication.alignment = WD_ALIGN_PARAGRAPH.CENTER
            dedication.add_run(meta.dedication).italic = True

    def _table_of_contents(self, story: HistoryItem) -> None:
        chapters = extract_chapters(story.content)
        if not chapters:
            return
        self.doc.add_page_break()
        self._heading("Table of Contents", level=1)
        for chapter in chapters:
            self.doc.add_paragraph(chapter.title)

    def _chapters(self, story: HistoryItem) -> None:
        glyph = divider_glyph(self.config.layout.divider_style)
        after_heading = False
        buffer: list[str] = []

        def flush() -> None:
            nonlocal after_heading
            if buffer:
                text = " ".join(buffer)
                self._body_paragraph(text, drop_cap=after_heading and self.config.layout.drop_caps)
                after_heading = False
                buffer.clear()

        for line in story.content.split("\n"):
            stripped = line.strip()
            if line.startswith(TITLE_PREFIX):
                flush()
                continue
            if line.startswith(CHAPTER_PREFIX):
                flush()
                self.doc.add_page_break()
                self._heading(line[len(CHAPTER_PREFIX):].strip(), level=2)
                after_heading = True
            elif line.startswith("### "):
                flush()
                self._heading(line[4:].strip(), level=3)
            elif is_divider(line):
                flush()
                divider = self.doc.add_paragraph(glyph)
                divider.alignment = WD_ALIGN_PARAGRAPH.CENTER
            elif not stripped:
                flush()
            else:
                buffer.append(stripped)
        flush()

    def export(self, story: HistoryItem) -> bytes:
        """Build the full manuscript and return DOCX bytes."""
        self.doc = Document()
        self._setup_page_layout()
        self._setup_footer()

        self._title_page(story)
        for section in self.config.front_matter:
            self._section(section)
        if self.config.include_toc:
            self._table_of_contents(story)
        self._chapters(story)
        for section in self.config.back_matter:
            self._section(section)

        buffer = BytesIO()
        self.doc.save(buffer)
        logger.info("Exported DOCX for story %s (%d bytes)", story.id, buffer.tell())
        return buffer.getvalue()


def export_docx(story: HistoryItem, config: Optional[PublishingConfig] = None) -> bytes:
    return DocxExporter(config or story.publishing_config).export(story)
