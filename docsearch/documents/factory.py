"""
Factory to create documents from source descriptions.

Sources come from three places:
- A bare string (create_document): URL, PDF path, or inline text
- A dict entry (DocumentFactory.from_entry): {"id": 1, "url": "..."}
- A YAML seed file (load_documents): a "documents:" list of entries
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import yaml

from .base import BaseDocument
from .pdf import PDFDocument
from .text import TextDocument
from .web import WebDocument

logger = logging.getLogger(__name__)

SOURCE_KEYS = ("text", "url", "path")


def create_document(doc_id: int, source: str) -> BaseDocument:
    """
    Pick a document type from the shape of the source string.

    - http:// or https:// → WebDocument
    - *.pdf → PDFDocument
    - anything else → TextDocument (inline text)
    """
    stripped = source.strip()
    lowered = stripped.lower()

    if lowered.startswith(("http://", "https://")):
        return WebDocument(doc_id, stripped)
    if lowered.endswith(".pdf"):
        return PDFDocument(doc_id, stripped)
    return TextDocument(doc_id, source)


class DocumentFactory:
    """Create documents from declarative entries (seed files, API bodies)."""

    @classmethod
    def from_entry(cls, entry: dict, base_dir: Optional[Path] = None) -> BaseDocument:
        """
        Create a document from a dict entry.

        Entry format:
            {"id": 1, "text": "inline text"}
            {"id": 2, "url": "https://example.com/page"}
            {"id": 3, "path": "docs/manual.pdf", "timeout": 5}

        Args:
            entry: Dict with "id" and exactly one of "text", "url", "path"
            base_dir: Directory that relative PDF paths are resolved against

        Returns:
            Document instance

        Raises:
            ValueError: Malformed entry (missing id, zero or several sources)
        """
        if not isinstance(entry, dict):
            raise ValueError(f"Document entry must be a mapping, got {type(entry).__name__}")

        if "id" not in entry:
            raise ValueError(f"Document entry is missing 'id': {entry}")
        try:
            doc_id = int(entry["id"])
        except (TypeError, ValueError):
            raise ValueError(f"Document id must be an integer, got {entry['id']!r}")

        present = [key for key in SOURCE_KEYS if entry.get(key) is not None]
        if len(present) != 1:
            raise ValueError(
                f"Document {doc_id} must have exactly one of {', '.join(SOURCE_KEYS)} "
                f"(got: {', '.join(present) or 'none'})"
            )

        kind = present[0]
        if kind == "text":
            return TextDocument(doc_id, str(entry["text"]))

        if kind == "url":
            url = str(entry["url"])
            if not url.lower().startswith(("http://", "https://")):
                raise ValueError(f"Document {doc_id}: url must be http(s), got {url!r}")
            timeout = entry.get("timeout")
            return WebDocument(doc_id, url, timeout=float(timeout) if timeout is not None else None)

        path = Path(str(entry["path"]))
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        return PDFDocument(doc_id, path)


def load_documents(seed_file: Union[str, Path]) -> List[BaseDocument]:
    """
    Load documents from a YAML seed file.

    File format:
        documents:
          - id: 1
            text: "This is a document about Go programming."
          - id: 3
            url: https://example.com/
          - id: 4
            path: document.pdf

    Args:
        seed_file: Path to YAML file

    Returns:
        Documents in file order

    Raises:
        ValueError: File is not a mapping with a "documents" list, or an entry is malformed
    """
    seed_path = Path(seed_file)

    with open(seed_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict) or not isinstance(data.get("documents", []), list):
        raise ValueError(f"{seed_path}: expected a mapping with a 'documents' list")

    documents = [
        DocumentFactory.from_entry(entry, base_dir=seed_path.parent)
        for entry in data.get("documents", [])
    ]

    logger.info(f"Loaded {len(documents)} document(s) from {seed_path}")
    return documents
