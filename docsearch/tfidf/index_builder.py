"""
Index builders - inverted index and TF-IDF weight table.

Both builders take already-tokenized documents keyed by document ID, in
ingestion order. Every call returns brand-new structures; nothing is merged
with a previous build.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Mapping, Tuple

from .statistics import inverse_document_frequency, term_frequency

logger = logging.getLogger(__name__)

InvertedIndex = Dict[str, List[int]]
TFIDFIndex = Dict[str, Dict[int, float]]


def build_inverted_index(documents: Mapping[int, List[str]]) -> InvertedIndex:
    """
    Map each term to the IDs of the documents containing it.

    A document ID is appended once per token occurrence, so a term repeated
    inside one document produces repeated postings. Posting order follows
    document order.

    Args:
        documents: {doc_id: tokens}, in ingestion order

    Returns:
        {term: [doc_id, ...]}

    Example:
        >>> build_inverted_index({1: ["this", "is"], 2: ["this"]})
        {'this': [1, 2], 'is': [1]}
    """
    index = defaultdict(list)

    for doc_id, tokens in documents.items():
        for term in tokens:
            index[term].append(doc_id)

    return dict(index)


def build_tfidf_index(
    documents: Mapping[int, List[str]],
    idf: Mapping[str, float]
) -> TFIDFIndex:
    """
    Combine per-document TF with global IDF into {term: {doc_id: weight}}.

    A term with no IDF entry is weighted 0.0.

    Args:
        documents: {doc_id: tokens}, in ingestion order
        idf: {term: idf} from inverse_document_frequency()

    Returns:
        {term: {doc_id: tf * idf}}
    """
    index: TFIDFIndex = defaultdict(dict)

    for doc_id, tokens in documents.items():
        for term, tf in term_frequency(tokens).items():
            index[term][doc_id] = tf * idf.get(term, 0.0)

    return dict(index)


def build_indexes(
    documents: Mapping[int, List[str]]
) -> Tuple[InvertedIndex, Dict[str, float], TFIDFIndex]:
    """
    Build inverted index, IDF table and TF-IDF index in dependency order.

    Args:
        documents: {doc_id: tokens}, in ingestion order

    Returns:
        Tuple of (inverted_index, idf, tfidf_index)
    """
    inverted_index = build_inverted_index(documents)
    idf = inverse_document_frequency(inverted_index, len(documents))
    tfidf_index = build_tfidf_index(documents, idf)

    logger.debug(
        f"Built indexes: {len(inverted_index)} terms, {len(documents)} documents"
    )

    return inverted_index, idf, tfidf_index
