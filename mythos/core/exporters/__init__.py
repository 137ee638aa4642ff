from .docx_exporter import DocxExporter, export_docx
from .pdf_exporter import export_infographic_deck, export_story_pdf
from .markdown_exporter import export_markdown, story_filename

__all__ = [
    "DocxExporter",
    "export_docx",
    "export_infographic_deck",
    "export_story_pdf",
    "export_markdown",
    "story_filename",
]
