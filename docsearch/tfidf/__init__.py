"""
TF-IDF (Term Frequency × Inverse Document Frequency) indexing and ranking.

Components:
- tokenizer: Lowercase whitespace tokenization
- statistics: Term frequency and IDF computation
- index_builder: Inverted index and TF-IDF weight table
- scorer: Query scoring and ranking
- recall: Substring "did you mean" merge

The index is always rebuilt in full from a fixed document set; there is no
incremental update path.
"""

from .tokenizer import tokenize
from .statistics import TermFrequency, term_frequency, inverse_document_frequency
from .index_builder import (
    InvertedIndex,
    TFIDFIndex,
    build_inverted_index,
    build_tfidf_index,
    build_indexes,
)
from .scorer import score_query, rank_results
from .recall import find_substring_matches, merge_substring_matches

__all__ = [
    "tokenize",
    "TermFrequency",
    "term_frequency",
    "inverse_document_frequency",
    "InvertedIndex",
    "TFIDFIndex",
    "build_inverted_index",
    "build_tfidf_index",
    "build_indexes",
    "score_query",
    "rank_results",
    "find_substring_matches",
    "merge_substring_matches",
]
