"""
Unit tests for inverted index and TF-IDF index construction.
"""

import math

import pytest

from docsearch.tfidf.index_builder import (
    build_indexes,
    build_inverted_index,
    build_tfidf_index,
)
from docsearch.tfidf.tokenizer import tokenize


@pytest.fixture
def tokenized():
    return {
        1: tokenize("This is a test"),
        2: tokenize("This is another test"),
    }


class TestInvertedIndex:
    """Test term → posting list construction"""

    def test_postings(self, tokenized):
        assert build_inverted_index(tokenized) == {
            "this": [1, 2],
            "is": [1, 2],
            "a": [1],
            "test": [1, 2],
            "another": [2],
        }

    def test_posting_order_follows_document_order(self):
        index = build_inverted_index({9: ["x"], 3: ["x"], 5: ["x"]})
        assert index["x"] == [9, 3, 5]

    def test_repeated_term_repeats_posting(self):
        """A term repeated inside one document is posted once per occurrence"""
        index = build_inverted_index({1: ["go", "go", "fast"]})
        assert index["go"] == [1, 1]

    def test_absent_term_not_a_key(self, tokenized):
        assert "missing" not in build_inverted_index(tokenized)

    def test_every_containing_document_is_posted(self, tokenized):
        index = build_inverted_index(tokenized)
        for doc_id, tokens in tokenized.items():
            for term in tokens:
                assert doc_id in index[term]

    def test_empty_document_contributes_nothing(self):
        assert build_inverted_index({1: [], 2: ["word"]}) == {"word": [2]}

    def test_rebuild_returns_new_structure(self, tokenized):
        first = build_inverted_index(tokenized)
        second = build_inverted_index(tokenized)
        assert first == second
        assert first is not second


class TestTFIDFIndex:
    """Test term → doc → weight table"""

    def test_weights(self, tokenized):
        idf = {"this": 0.0, "is": 0.0, "a": math.log(2), "test": 0.0, "another": math.log(2)}
        index = build_tfidf_index(tokenized, idf)

        assert index["a"] == {1: pytest.approx(0.25 * math.log(2))}
        assert index["another"] == {2: pytest.approx(0.25 * math.log(2))}
        assert index["test"] == {1: 0.0, 2: 0.0}

    def test_missing_idf_is_zero_weight(self):
        index = build_tfidf_index({1: ["orphan", "known"]}, {"known": 1.0})
        assert index["orphan"] == {1: 0.0}
        assert index["known"] == {1: pytest.approx(0.5)}

    def test_build_indexes_order(self, tokenized):
        inverted, idf, tfidf = build_indexes(tokenized)
        assert inverted["another"] == [2]
        assert idf["another"] == pytest.approx(math.log(2))
        assert idf["test"] == 0.0
        assert tfidf["another"][2] == pytest.approx(0.25 * math.log(2))

    def test_repeated_term_idf_non_negative(self):
        inverted, idf, tfidf = build_indexes({1: ["go", "go", "go"], 2: ["rust"]})

        assert inverted["go"] == [1, 1, 1]
        assert idf["go"] == pytest.approx(math.log(2))
        assert all(value >= 0 for value in idf.values())
        assert tfidf["go"] == {1: pytest.approx(math.log(2))}

    def test_build_is_deterministic(self, tokenized):
        assert build_indexes(tokenized) == build_indexes(tokenized)

    def test_empty_collection(self):
        assert build_indexes({}) == ({}, {}, {})
