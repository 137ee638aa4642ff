"""
File import: turn uploaded text and PDF files into plain text.

PDF text is extracted page by page with PyMuPDF and joined with blank lines.
"""

import logging
from pathlib import PurePath

import fitz  # PyMuPDF

from .errors import UnsupportedFileError

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = {".txt", ".md", ".markdown"}
PDF_EXTENSIONS = {".pdf"}


def extract_pdf_text(data: bytes) -> str:
    """Concatenate the text of every page in a PDF."""
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except (fitz.FileDataError, RuntimeError) as e:
        raise UnsupportedFileError(f"Could not read PDF: {e}") from e

    try:
        pages = [page.get_text().strip() for page in doc]
    finally:
        doc.close()

    logger.info("Extracted text from %d PDF pages", len(pages))
    return "\n\n".join(text for text in pages if text)


def extract_text(filename: str, data: bytes, content_type: str = "") -> str:
    """
    Extract text from an uploaded file.

    Raises:
        UnsupportedFileError: Unknown file type or unreadable PDF
    """
    suffix = PurePath(filename or "").suffix.lower()

    if suffix in PDF_EXTENSIONS or content_type == "application/pdf":
        return extract_pdf_text(data)
    if suffix in TEXT_EXTENSIONS or content_type.startswith("text/"):
        return data.decode("utf-8", errors="replace")

    raise UnsupportedFileError(f"Unsupported file type: {filename or content_type}")
