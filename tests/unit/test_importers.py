"""Unit tests for text and PDF import."""

import fitz  # PyMuPDF
import pytest

from mythos.core.errors import UnsupportedFileError
from mythos.core.importers import extract_pdf_text, extract_text


def _pdf(*pages: str) -> bytes:
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


class TestExtractText:
    @pytest.mark.parametrize("filename", ["notes.txt", "draft.md", "DRAFT.MARKDOWN"])
    def test_text_files_decode_utf8(self, filename):
        assert extract_text(filename, "Café lights".encode("utf-8")) == "Café lights"

    def test_invalid_utf8_is_replaced(self):
        assert extract_text("bad.txt", b"ok \xff") == "ok �"

    def test_content_type_fallback(self):
        assert extract_text("upload", b"plain", "text/plain") == "plain"

    def test_pdf_by_extension(self):
        assert "Glass apples" in extract_text("book.pdf", _pdf("Glass apples"))

    def test_pdf_by_content_type(self):
        assert "Glass apples" in extract_text("upload", _pdf("Glass apples"), "application/pdf")

    def test_unsupported_extension(self):
        with pytest.raises(UnsupportedFileError, match="cover.png"):
            extract_text("cover.png", b"\x89PNG")


class TestExtractPdfText:
    def test_pages_joined_with_blank_line(self):
        text = extract_pdf_text(_pdf("First page", "", "Third page"))
        assert text == "First page\n\nThird page"

    def test_corrupt_pdf(self):
        with pytest.raises(UnsupportedFileError):
            extract_pdf_text(b"definitely not a pdf")
