"""
Index controller - owns the document collection and the derived indexes.

State machine:
    EMPTY ──ingest──▶ POPULATED ──build──▶ READY ──ingest──▶ STALE
                          ▲                  │  ▲              │
                          └──────────────────┘  └────build─────┘

Concurrency model:
- Writers (ingest, build) are serialized with a lock
- Readers (search) never lock: they grab the current IndexSnapshot reference
  once and work on it. build() prepares a new snapshot off to the side and
  swaps it in with a single assignment, so a reader sees either the old or
  the new index, never a half-built one.

Reading document text is the only slow part of a build (web fetches, PDF
parsing). Sources are read in a thread pool and each one gets a deadline;
a source that times out or fails contributes empty text.
"""

import logging
import os
import threading
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .documents.base import BaseDocument
from .tfidf import (
    build_indexes,
    find_substring_matches,
    merge_substring_matches,
    rank_results,
    score_query,
    tokenize,
)

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = float(os.getenv("DOCSEARCH_FETCH_TIMEOUT", "10"))
DEFAULT_MAX_WORKERS = int(os.getenv("DOCSEARCH_MAX_WORKERS", "4"))


class IndexState(Enum):
    """Lifecycle state of the index"""
    EMPTY = "empty"  # No documents
    POPULATED = "populated"  # Documents added, never built
    READY = "ready"  # Index matches the collection
    STALE = "stale"  # Built, then more documents were ingested


@dataclass(frozen=True)
class IndexSnapshot:
    """Immutable result of one full build."""
    inverted_index: Mapping[str, List[int]]
    idf: Mapping[str, float]
    tfidf_index: Mapping[str, Mapping[int, float]]
    texts: Mapping[int, str]  # Text each document was indexed with
    order: Tuple[int, ...] = ()  # Doc IDs in ingestion order
    built_at: datetime = field(default_factory=datetime.now)

    @property
    def document_count(self) -> int:
        return len(self.texts)

    @property
    def term_count(self) -> int:
        return len(self.inverted_index)


class IndexController:
    """
    Full-text search over a fixed, explicitly rebuilt document collection.

    Usage:
        controller = IndexController()
        controller.ingest(TextDocument(1, "This is a test document"))
        controller.ingest(TextDocument(2, "This is another document"))
        controller.build()
        controller.search("test document")  # → ranked texts
    """

    def __init__(
        self,
        fetch_timeout: Optional[float] = None,
        max_workers: Optional[int] = None,
        auto_rebuild: bool = False,
    ):
        """
        Args:
            fetch_timeout: Seconds allowed to read one document's text during build
                Default: DOCSEARCH_FETCH_TIMEOUT env var (10s)
            max_workers: Threads used to read document texts during build
                Default: DOCSEARCH_MAX_WORKERS env var (4)
            auto_rebuild: Rebuild right after each ingest once the index has been built
                Default: False (ingest marks the index STALE until build() is called)
        """
        self.fetch_timeout = fetch_timeout if fetch_timeout is not None else DEFAULT_FETCH_TIMEOUT
        self.max_workers = max(1, max_workers if max_workers is not None else DEFAULT_MAX_WORKERS)
        self.auto_rebuild = auto_rebuild

        self._documents: List[BaseDocument] = []
        self._snapshot: Optional[IndexSnapshot] = None
        self._state = IndexState.EMPTY
        self._write_lock = threading.Lock()

    @property
    def state(self) -> IndexState:
        return self._state

    @property
    def documents(self) -> Tuple[BaseDocument, ...]:
        return tuple(self._documents)

    @property
    def snapshot(self) -> Optional[IndexSnapshot]:
        """Most recently built index, or None before the first build"""
        return self._snapshot

    def ingest(self, document: BaseDocument) -> None:
        """
        Add a document to the collection.

        Never fails on the document's content: text is not read until build().
        After the first build, the index becomes STALE (or is rebuilt
        immediately when auto_rebuild is set).
        """
        with self._write_lock:
            if any(doc.doc_id == document.doc_id for doc in self._documents):
                logger.warning(
                    f"Duplicate document id {document.doc_id} ({document.source}); "
                    f"the last ingested text wins"
                )

            self._documents.append(document)
            logger.debug(f"Ingested {document!r}")

            if self._state in (IndexState.EMPTY, IndexState.POPULATED):
                self._state = IndexState.POPULATED
                return

            self._state = IndexState.STALE
            if self.auto_rebuild:
                self._build_locked()

    def build(self) -> IndexSnapshot:
        """
        Rebuild every index from the current collection.

        Idempotent: the same unchanged collection yields identical weights.

        Returns:
            The new snapshot (already serving queries)
        """
        with self._write_lock:
            return self._build_locked()

    def _build_locked(self) -> IndexSnapshot:
        documents = list(self._documents)
        started = datetime.now()
        logger.info(f"Building index over {len(documents)} document(s)...")

        texts = self._read_texts(documents)

        tokenized: Dict[int, List[str]] = {}
        for doc_id, text in texts.items():
            tokenized[doc_id] = tokenize(text)
            logger.debug(f"Document {doc_id}: {len(tokenized[doc_id])} tokens")

        inverted_index, idf, tfidf_index = build_indexes(tokenized)

        snapshot = IndexSnapshot(
            inverted_index=MappingProxyType(inverted_index),
            idf=MappingProxyType(idf),
            tfidf_index=MappingProxyType(tfidf_index),
            texts=MappingProxyType(dict(texts)),
            order=tuple(texts),
        )

        # Single reference swap - readers see old or new, never partial
        self._snapshot = snapshot
        self._state = IndexState.READY if documents else IndexState.EMPTY
        if not documents:
            logger.warning("Built index over an empty collection")

        elapsed = (datetime.now() - started).total_seconds()
        logger.info(
            f"Index built: {snapshot.document_count} documents, "
            f"{snapshot.term_count} terms in {elapsed:.2f}s"
        )
        return snapshot

    def _read_texts(self, documents: List[BaseDocument]) -> Dict[int, str]:
        """
        Read every document's text, each bounded by fetch_timeout.

        At most max_workers sources are read at once. A source's deadline
        starts when its read is submitted, not while it waits for a free
        slot. A source that times out gives up its slot immediately (its
        thread is abandoned, not joined), so the build takes at most
        ceil(N / max_workers) * fetch_timeout.

        Returns:
            {doc_id: text} in ingestion order. Failed or slow sources map to "".
        """
        texts: Dict[int, str] = {}
        if not documents:
            return texts

        results: Dict[int, str] = {}
        queue = iter(enumerate(documents))
        active: Dict[Future, Tuple[int, BaseDocument, float]] = {}

        # One thread per document at most: abandoned reads keep theirs
        executor = ThreadPoolExecutor(
            max_workers=len(documents),
            thread_name_prefix="docsearch-read",
        )

        def start_next() -> None:
            for position, doc in queue:
                future = executor.submit(doc.get_text)
                active[future] = (position, doc, time.monotonic() + self.fetch_timeout)
                return

        try:
            for _ in range(self.max_workers):
                start_next()

            while active:
                nearest = min(deadline for _, _, deadline in active.values())
                wait(list(active), timeout=max(0.0, nearest - time.monotonic()),
                     return_when=FIRST_COMPLETED)

                now = time.monotonic()
                for future, (position, doc, deadline) in list(active.items()):
                    if future.done():
                        results[position] = self._collect(doc, future)
                    elif now >= deadline:
                        logger.warning(
                            f"Timed out reading document {doc.doc_id} ({doc.source}) "
                            f"after {self.fetch_timeout}s; indexing it as empty"
                        )
                        future.cancel()
                        results[position] = ""
                    else:
                        continue

                    del active[future]
                    start_next()
        finally:
            # Don't wait for hung sources; their threads finish in the background
            executor.shutdown(wait=False, cancel_futures=True)

        # Duplicate IDs collapse here: last text wins, first position kept
        for position, doc in enumerate(documents):
            texts[doc.doc_id] = results[position]

        return texts

    @staticmethod
    def _collect(doc: BaseDocument, future: Future) -> str:
        try:
            text = future.result()
        except Exception as e:
            logger.warning(
                f"Failed to read document {doc.doc_id} ({doc.source}): {e}; "
                f"indexing it as empty"
            )
            return ""
        return text if isinstance(text, str) else ""

    def scores(self, query: str) -> Dict[int, float]:
        """Raw TF-IDF scores {doc_id: score} from the current snapshot"""
        snapshot = self._serving_snapshot()
        if snapshot is None:
            return {}
        return score_query(query, snapshot.tfidf_index)

    def search_ids(self, query: str, include_substring: bool = False) -> List[int]:
        """
        Ranked document IDs for a query.

        Args:
            query: Raw query text
            include_substring: Also return documents containing the raw query
                as a substring (ranked hits first, substring-only hits last)

        Returns:
            Doc IDs, best first. Empty for empty or unmatched queries.
        """
        snapshot = self._serving_snapshot()
        if snapshot is None:
            return []
        return self._rank(snapshot, query, include_substring)

    def search(self, query: str, include_substring: bool = False) -> List[str]:
        """
        Ranked document texts for a query.

        Texts are the ones captured at build time, so web pages are not
        re-fetched per query.
        """
        snapshot = self._serving_snapshot()
        if snapshot is None:
            return []
        ids = self._rank(snapshot, query, include_substring)
        return [snapshot.texts[doc_id] for doc_id in ids]

    @staticmethod
    def _rank(snapshot: IndexSnapshot, query: str, include_substring: bool) -> List[int]:
        if not tokenize(query):
            return []

        ranked = rank_results(score_query(query, snapshot.tfidf_index))

        if include_substring:
            ranked = merge_substring_matches(
                ranked, find_substring_matches(query, snapshot.texts)
            )

        return ranked

    def _serving_snapshot(self) -> Optional[IndexSnapshot]:
        snapshot = self._snapshot
        if snapshot is None:
            logger.warning("Search called before the index was built; returning no results")
            return None
        if self._state is IndexState.STALE:
            logger.warning("Index is stale (documents ingested since last build); serving previous index")
        return snapshot

    def stats(self) -> dict:
        """Collection and index summary"""
        snapshot = self._snapshot
        return {
            "state": self._state.value,
            "documents": len(self._documents),
            "indexed_documents": snapshot.document_count if snapshot else 0,
            "terms": snapshot.term_count if snapshot else 0,
            "built_at": snapshot.built_at.isoformat() if snapshot else None,
        }
