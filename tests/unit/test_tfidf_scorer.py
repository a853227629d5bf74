"""
Unit tests for query scoring and ranking.
"""

import math

import pytest

from docsearch.tfidf.index_builder import build_indexes
from docsearch.tfidf.scorer import rank_results, score_query
from docsearch.tfidf.tokenizer import tokenize


@pytest.fixture
def tfidf_index():
    documents = {
        1: tokenize("This is a test document"),
        2: tokenize("This is another document"),
    }
    _, _, index = build_indexes(documents)
    return index


class TestScoreQuery:
    """Test TF-IDF accumulation"""

    def test_discriminative_term_wins(self, tfidf_index):
        scores = score_query("test document", tfidf_index)

        assert set(scores) == {1, 2}
        assert scores[1] > scores[2]

    def test_score_values(self, tfidf_index):
        """query_tf(test)=0.5, tf(test, doc1)=1/5, idf(test)=ln 2; 'document' has idf 0"""
        scores = score_query("test document", tfidf_index)

        assert scores[1] == pytest.approx(0.5 * (1 / 5) * math.log(2))
        assert scores[2] == 0.0

    def test_query_is_case_insensitive(self, tfidf_index):
        assert score_query("TEST", tfidf_index) == score_query("test", tfidf_index)

    def test_repeated_query_term(self, tfidf_index):
        """Query TF is normalized, so 'test test' scores like 'test'"""
        assert score_query("test test", tfidf_index) == pytest.approx(score_query("test", tfidf_index))

    def test_unknown_terms_ignored(self, tfidf_index):
        with_noise = score_query("test xyzzy", tfidf_index)
        assert set(with_noise) == {1}
        # Unknown term still counts toward query length
        assert with_noise[1] == pytest.approx(0.5 * (1 / 5) * math.log(2))

    def test_unmatched_query(self, tfidf_index):
        assert score_query("xyzzy", tfidf_index) == {}

    def test_empty_query(self, tfidf_index):
        assert score_query("", tfidf_index) == {}
        assert score_query("   ", tfidf_index) == {}

    def test_empty_index(self):
        assert score_query("anything", {}) == {}


class TestRankResults:
    """Test score ordering"""

    def test_descending(self):
        assert rank_results({1: 0.5, 2: 0.8, 3: 0.2}) == [2, 1, 3]

    def test_ties_by_ascending_id(self):
        assert rank_results({7: 0.3, 2: 0.3, 5: 0.9, 4: 0.3}) == [5, 2, 4, 7]

    def test_zero_scores_last(self):
        assert rank_results({1: 0.0, 2: 0.1}) == [2, 1]

    def test_empty(self):
        assert rank_results({}) == []
