"""
Document sources for the search index.

Usage:
    from docsearch.documents import TextDocument, WebDocument, PDFDocument

    docs = [
        TextDocument(1, "This is a document about Go programming."),
        WebDocument(2, "https://example.com/"),
        PDFDocument(3, "document.pdf"),
    ]

    # Or from a YAML seed file:
    from docsearch.documents import load_documents

    docs = load_documents("documents.yaml")
"""

from .base import BaseDocument
from .text import TextDocument
from .web import WebDocument
from .pdf import PDFDocument
from .factory import DocumentFactory, create_document, load_documents

__all__ = [
    'BaseDocument',
    'TextDocument',
    'WebDocument',
    'PDFDocument',
    'DocumentFactory',
    'create_document',
    'load_documents',
]
