"""
Abstract base class for searchable documents.

Every document source (inline text, web page, PDF file) implements this
interface, so the index never branches on where text comes from.
"""

from abc import ABC, abstractmethod


class BaseDocument(ABC):
    """
    A document with a caller-assigned integer ID and a way to get its text.

    get_text() must never raise. Sources backed by I/O return an empty
    string when the source is unavailable and log the failure.
    """

    def __init__(self, doc_id: int):
        self._doc_id = int(doc_id)

    @property
    def doc_id(self) -> int:
        """Caller-assigned document ID"""
        return self._doc_id

    @property
    @abstractmethod
    def source(self) -> str:
        """Short description of where the text comes from (for logs and API)"""
        pass

    @abstractmethod
    def get_text(self) -> str:
        """
        Return the full document text.

        Returns:
            Document text, or "" if the source could not be read
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(doc_id={self.doc_id}, source={self.source!r})"
