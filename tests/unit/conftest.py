"""Unit test fixtures - small document collections and PDF files"""

import logging

import fitz  # PyMuPDF
import pytest

from docsearch.documents import TextDocument


@pytest.fixture
def sample_documents():
    """Two-document collection where 'test' is the discriminative term"""
    return [
        TextDocument(1, "This is a test document"),
        TextDocument(2, "This is another document"),
    ]


@pytest.fixture
def make_pdf(tmp_path):
    """Create a PDF with one page per text, return its path"""
    def _make_pdf(pages, name="sample.pdf"):
        doc = fitz.open()
        for text in pages:
            page = doc.new_page(width=595, height=842)  # A4 size
            page.insert_text((72, 72), text, fontsize=11)
        path = tmp_path / name
        doc.save(path)
        doc.close()
        return path

    return _make_pdf


@pytest.fixture
def restore_root_logging():
    """Undo setup_logging() side effects on the root logger"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
