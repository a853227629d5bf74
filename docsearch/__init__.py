"""
docsearch - in-memory TF-IDF full-text search.

Usage:
    from docsearch import IndexController, TextDocument

    controller = IndexController()
    controller.ingest(TextDocument(1, "This is a test document"))
    controller.ingest(TextDocument(2, "This is another document"))
    controller.build()

    controller.search("test document")
    # ['This is a test document', 'This is another document']
"""

__version__ = "0.1.0"

from .controller import IndexController, IndexSnapshot, IndexState
from .documents import (
    BaseDocument,
    DocumentFactory,
    PDFDocument,
    TextDocument,
    WebDocument,
    create_document,
    load_documents,
)

__all__ = [
    "__version__",
    "IndexController",
    "IndexSnapshot",
    "IndexState",
    "BaseDocument",
    "DocumentFactory",
    "PDFDocument",
    "TextDocument",
    "WebDocument",
    "create_document",
    "load_documents",
]
