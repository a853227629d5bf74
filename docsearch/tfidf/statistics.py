"""
Term statistics: per-document term frequency and corpus-wide IDF.

Formulas:
    TF(term, doc) = count(term in doc) / len(tokens of doc)
    IDF(term)     = ln(total_docs / documents containing term)

A term present in every document gets IDF = 0, so it never moves a ranking.
"""

import logging
import math
from collections import Counter
from typing import Dict, List, Mapping, Sequence

logger = logging.getLogger(__name__)

TermFrequency = Dict[str, float]


def term_frequency(tokens: Sequence[str]) -> TermFrequency:
    """
    Compute normalized term frequencies for one document (or one query).

    Args:
        tokens: Tokenized text

    Returns:
        Dict {term: occurrences / total tokens}. Empty for empty input.

    Example:
        >>> term_frequency(["a", "a", "b"])
        {'a': 0.666..., 'b': 0.333...}
    """
    total = len(tokens)
    if total == 0:
        return {}

    counts = Counter(tokens)
    return {term: count / total for term, count in counts.items()}


def inverse_document_frequency(
    inverted_index: Mapping[str, List[int]],
    total_docs: int
) -> Dict[str, float]:
    """
    Compute IDF for every term of an inverted index.

    Posting lists may repeat a document ID (one entry per occurrence), so
    the distinct IDs are counted: IDF stays >= 0 whenever k <= total_docs.

    Args:
        inverted_index: {term: [doc_id, ...]}
        total_docs: Number of documents in the collection

    Returns:
        Dict {term: ln(total_docs / distinct docs in postings)}
    """
    if total_docs < 1 or not inverted_index:
        return {}

    idf = {}
    for term, postings in inverted_index.items():
        if not postings:
            continue
        idf[term] = math.log(total_docs / len(set(postings)))

    logger.debug(f"Computed IDF for {len(idf)} terms over {total_docs} documents")

    return idf
