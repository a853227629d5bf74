"""
Substring recall ("did you mean") for TF-IDF results.

TF-IDF only matches whole whitespace tokens, so a query like "program"
never finds "programming.". This pass scans the raw document text for the
raw query string and merges those hits into the ranked list.

It is a recall booster, not a ranking signal:
1. Ranked documents that are also substring hits come first (ranked order)
2. The remaining ranked documents follow (ranked order)
3. Substring-only hits come last (ingestion order)
"""

from typing import List, Mapping, Sequence


def find_substring_matches(query: str, texts: Mapping[int, str]) -> List[int]:
    """
    Find documents whose text contains the query as a literal substring.

    Matching is case-insensitive. Leading/trailing whitespace of the query
    is ignored.

    Args:
        query: Raw query text
        texts: {doc_id: text}, in ingestion order

    Returns:
        Matching doc IDs in ingestion order
    """
    needle = (query or "").strip().lower()
    if not needle:
        return []

    return [doc_id for doc_id, text in texts.items() if needle in (text or "").lower()]


def merge_substring_matches(ranked: Sequence[int], substring_ids: Sequence[int]) -> List[int]:
    """
    Merge TF-IDF ranking with substring hits.

    Each substring hit is consumed once: a ranked ID that is also a hit is
    promoted to the front block, and never repeated in the trailing block.

    Args:
        ranked: Doc IDs from rank_results()
        substring_ids: Doc IDs from find_substring_matches()

    Returns:
        Merged doc IDs without duplicates

    Example:
        >>> merge_substring_matches([2, 1, 3], [3, 4, 2])
        [2, 3, 1, 4]
    """
    pending = dict.fromkeys(substring_ids)

    seen = set()
    promoted = []
    rest = []
    for doc_id in ranked:
        if doc_id in seen:
            continue
        seen.add(doc_id)
        if doc_id in pending:
            promoted.append(doc_id)
            del pending[doc_id]
        else:
            rest.append(doc_id)

    return promoted + rest + list(pending)
