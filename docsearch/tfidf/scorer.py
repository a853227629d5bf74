"""
TF-IDF query scoring and ranking.

The query is treated as a one-off document:
    score(doc) = Σ query_tf(term) × tfidf(term, doc)

summed over the query terms present in the index. Terms the index has never
seen contribute nothing.
"""

from typing import Dict, List, Mapping

from .statistics import term_frequency
from .tokenizer import tokenize


def score_query(query: str, tfidf_index: Mapping[str, Mapping[int, float]]) -> Dict[int, float]:
    """
    Score every candidate document for a query.

    Candidates are all documents posted under at least one query term.
    A candidate whose matched terms all have IDF 0 (they occur in every
    document) is still returned, with score 0.0.

    Args:
        query: Raw query text
        tfidf_index: {term: {doc_id: weight}}

    Returns:
        Dict {doc_id: accumulated score}. Empty for empty or unmatched queries.

    Example:
        >>> index = {"test": {1: 0.14}, "document": {1: 0.0, 2: 0.0}}
        >>> score_query("test document", index)
        {1: 0.07, 2: 0.0}
    """
    query_tf = term_frequency(tokenize(query))

    scores: Dict[int, float] = {}

    for term, tf in query_tf.items():
        postings = tfidf_index.get(term)
        if not postings:
            continue

        for doc_id, weight in postings.items():
            scores[doc_id] = scores.get(doc_id, 0.0) + tf * weight

    return scores


def rank_results(scores: Mapping[int, float]) -> List[int]:
    """
    Order document IDs by descending score.

    Equal scores are ordered by ascending document ID.

    Example:
        >>> rank_results({1: 0.5, 2: 0.8, 3: 0.2})
        [2, 1, 3]
    """
    return [
        doc_id
        for doc_id, _ in sorted(scores.items(), key=lambda item: (-item[1], item[0]))
    ]
