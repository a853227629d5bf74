"""
PDF file document - text extracted with PyMuPDF.

Text is read page by page and concatenated in page order. A page that
cannot be extracted is skipped; a file that cannot be opened yields "".
"""

import logging
from pathlib import Path
from typing import Union

import pymupdf

from .base import BaseDocument

logger = logging.getLogger(__name__)


class PDFDocument(BaseDocument):
    """Document backed by a PDF file on the local filesystem."""

    def __init__(self, doc_id: int, path: Union[str, Path]):
        super().__init__(doc_id)
        self.path = Path(path)

    @property
    def source(self) -> str:
        return str(self.path)

    def get_text(self) -> str:
        try:
            doc = pymupdf.open(self.path)
        except Exception as e:
            # pymupdf raises FileNotFoundError, FileDataError, RuntimeError...
            logger.warning(f"Error opening PDF {self.path}: {e}")
            return ""

        pages = []
        skipped = 0
        try:
            for page_index in range(doc.page_count):
                try:
                    pages.append(doc.load_page(page_index).get_text())
                except Exception as e:
                    skipped += 1
                    logger.debug(f"Skipping page {page_index + 1} of {self.path}: {e}")
        finally:
            doc.close()

        if skipped:
            logger.warning(f"Skipped {skipped} unreadable page(s) in {self.path}")

        text = "".join(pages)
        logger.debug(f"Extracted {len(text)} chars from {len(pages)} page(s) of {self.path}")
        return text
