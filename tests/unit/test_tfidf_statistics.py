"""
Unit tests for term frequency and IDF.
"""

import math

import pytest

from docsearch.tfidf.statistics import inverse_document_frequency, term_frequency


class TestTermFrequency:
    """Test normalized term frequency"""

    def test_simple_counts(self):
        tf = term_frequency(["a", "a", "b"])
        assert tf["a"] == pytest.approx(2 / 3)
        assert tf["b"] == pytest.approx(1 / 3)

    def test_longer_document(self):
        tokens = ["this", "is", "a", "test", "document", "this", "is", "a", "test"]
        tf = term_frequency(tokens)
        assert tf == {
            "this": pytest.approx(2 / 9),
            "is": pytest.approx(2 / 9),
            "a": pytest.approx(2 / 9),
            "test": pytest.approx(2 / 9),
            "document": pytest.approx(1 / 9),
        }

    def test_sums_to_one(self):
        tokens = "the quick brown fox jumps over the lazy dog the end".split()
        assert sum(term_frequency(tokens).values()) == pytest.approx(1.0)

    def test_empty_tokens(self):
        """Zero tokens → empty mapping, no division by zero"""
        assert term_frequency([]) == {}


class TestInverseDocumentFrequency:
    """Test IDF = ln(N / len(postings))"""

    def test_known_values(self):
        index = {
            "test": [1, 2, 3],
            "document": [1, 2],
            "rare": [3, 5],
        }
        idf = inverse_document_frequency(index, 3)
        assert idf["test"] == 0
        assert idf["document"] == pytest.approx(0.4054651081081644)
        assert idf["rare"] == pytest.approx(0.4054651081081644)

    def test_term_in_every_document_is_zero(self):
        idf = inverse_document_frequency({"common": [1, 2, 3, 4]}, 4)
        assert idf["common"] == 0.0

    def test_k_of_n(self):
        idf = inverse_document_frequency({"term": [2, 7]}, 10)
        assert idf["term"] == pytest.approx(math.log(10 / 2))

    def test_non_negative_when_k_le_n(self):
        index = {f"t{k}": list(range(k)) for k in range(1, 6)}
        idf = inverse_document_frequency(index, 5)
        assert all(value >= 0 for value in idf.values())

    def test_repeated_postings_count_one_document(self):
        # "go" occurs three times in doc 1 only
        idf = inverse_document_frequency({"go": [1, 1, 1], "rust": [2]}, 2)
        assert idf["go"] == pytest.approx(math.log(2))

    def test_only_indexed_terms(self):
        idf = inverse_document_frequency({"a": [1]}, 2)
        assert set(idf) == {"a"}

    def test_empty_collection(self):
        assert inverse_document_frequency({}, 0) == {}
        assert inverse_document_frequency({"a": [1]}, 0) == {}

    def test_empty_posting_list_skipped(self):
        idf = inverse_document_frequency({"ghost": [], "real": [1]}, 2)
        assert "ghost" not in idf
        assert idf["real"] == pytest.approx(math.log(2))
