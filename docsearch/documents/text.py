"""Inline text document."""

from .base import BaseDocument


class TextDocument(BaseDocument):
    """Document whose text is stored directly."""

    def __init__(self, doc_id: int, text: str):
        super().__init__(doc_id)
        self.text = text or ""

    @property
    def source(self) -> str:
        return "inline"

    def get_text(self) -> str:
        return self.text
