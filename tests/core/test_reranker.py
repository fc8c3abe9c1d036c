"""
Test suite for the hybrid reranker.

Covers keyword extraction, lexical scoring and saturation, weighted final
score, threshold filtering, ordering stability and configuration checks.

System role: Verification of retrieval candidate reranking
"""

from unittest.mock import MagicMock

import pytest

from finmind.core.exceptions import InvalidConfig
from finmind.core.reranker import HybridReranker, KeywordExtractor
from finmind.models.search import SearchCandidate


def fixed_extractor(keywords: list[str]) -> MagicMock:
    """Build an extractor stub returning fixed keywords."""
    extractor = MagicMock(spec=KeywordExtractor)
    extractor.extract.return_value = keywords
    return extractor


class TestKeywordExtractor:
    """Test query keyword extraction."""

    def test_extract_should_keep_latin_words_lowercased(self) -> None:
        """Test Latin words survive segmentation and are case-folded."""
        keywords = KeywordExtractor().extract("ZUEL funding")

        assert keywords == ["zuel", "funding"]

    def test_extract_should_drop_stop_words_and_single_characters(self) -> None:
        """Test stop words and length-1 tokens are discarded."""
        keywords = KeywordExtractor().extract("what is the ZUEL funding of a bank ?")

        assert "what" not in keywords
        assert "the" not in keywords
        assert "a" not in keywords
        assert "?" not in keywords
        assert "zuel" in keywords
        assert "bank" in keywords

    def test_extract_should_deduplicate_keywords(self) -> None:
        """Test repeated words appear once in first-seen order."""
        keywords = KeywordExtractor().extract("bond Bond BOND yield")

        assert keywords == ["bond", "yield"]

    def test_extract_should_handle_mixed_language_query(self) -> None:
        """Test Latin keywords are extracted from Chinese text."""
        keywords = KeywordExtractor().extract("ZUEL 的 funding 是什么")

        assert "zuel" in keywords
        assert "funding" in keywords
        assert "的" not in keywords

    def test_extract_should_return_empty_for_empty_query(self) -> None:
        """Test empty query yields no keywords."""
        assert KeywordExtractor().extract("") == []


class TestScoring:
    """Test lexical and final score computation."""

    def test_zuel_scenario_should_pass_lower_threshold(self) -> None:
        """Test one keyword hit gives lexical 1/3 and final ~0.626."""
        reranker = HybridReranker(threshold=0.45)
        candidate = SearchCandidate(text="ZUEL finance update", vector_score=0.70)

        ranked = reranker.rerank([candidate], "ZUEL funding")

        assert len(ranked) == 1
        assert ranked[0].lexical_score == pytest.approx(1 / 3)
        assert ranked[0].final_score == pytest.approx(0.70 * 0.8 + (1 / 3) * 0.2)
        assert ranked[0].final_score == pytest.approx(0.626, abs=1e-3)

    def test_zuel_scenario_should_fail_higher_threshold(self) -> None:
        """Test the same candidate is excluded at threshold 0.65."""
        reranker = HybridReranker(threshold=0.65)
        candidate = SearchCandidate(text="ZUEL finance update", vector_score=0.70)

        assert reranker.rerank([candidate], "ZUEL funding") == []

    def test_lexical_score_should_saturate_at_three_hits(self) -> None:
        """Test three or more distinct hits give lexical score 1.0."""
        reranker = HybridReranker()
        text = "bond yield curve inversion signals recession"

        assert reranker.lexical_score(text, ["bond", "yield"]) == pytest.approx(2 / 3)
        assert reranker.lexical_score(text, ["bond", "yield", "curve"]) == 1.0
        assert reranker.lexical_score(text, ["bond", "yield", "curve", "recession"]) == 1.0

    def test_lexical_score_should_match_case_insensitively(self) -> None:
        """Test keywords match regardless of candidate text case."""
        reranker = HybridReranker()

        assert reranker.lexical_score("CPI and PPI Report", ["cpi", "report"]) == pytest.approx(2 / 3)

    def test_final_score_should_stay_within_unit_interval(self) -> None:
        """Test perfect vector and lexical scores give exactly 1.0."""
        reranker = HybridReranker(threshold=0.0, extractor=fixed_extractor(["a1", "b2", "c3"]))
        candidate = SearchCandidate(text="a1 b2 c3", vector_score=1.0)

        ranked = reranker.rerank([candidate], "ignored")

        assert 0.0 <= ranked[0].final_score <= 1.0
        assert ranked[0].final_score == pytest.approx(1.0)

    def test_weights_should_be_configurable(self) -> None:
        """Test custom weights change the final score."""
        reranker = HybridReranker(
            threshold=0.0,
            vector_weight=0.5,
            lexical_weight=0.5,
            saturation_hits=1,
            extractor=fixed_extractor(["rate"]),
        )
        candidate = SearchCandidate(text="interest rate", vector_score=0.4)

        ranked = reranker.rerank([candidate], "ignored")

        assert ranked[0].final_score == pytest.approx(0.5 * 0.4 + 0.5 * 1.0)


class TestOrdering:
    """Test filtering, ordering and truncation."""

    def test_rerank_should_order_by_final_score_descending(self) -> None:
        """Test lexical signal can promote a lower vector match."""
        reranker = HybridReranker(threshold=0.0, extractor=fixed_extractor(["inflation", "target"]))
        candidates = [
            SearchCandidate(text="unrelated text", vector_score=0.60),
            SearchCandidate(text="inflation target policy", vector_score=0.55),
        ]

        ranked = reranker.rerank(candidates, "ignored")

        assert [candidate.text for candidate in ranked] == ["inflation target policy", "unrelated text"]

    def test_rerank_should_keep_retrieval_order_on_ties(self) -> None:
        """Test equal final scores preserve input order."""
        reranker = HybridReranker(threshold=0.0, extractor=fixed_extractor([]))
        candidates = [SearchCandidate(text=f"doc-{i}", vector_score=0.5) for i in range(6)]

        ranked = reranker.rerank(candidates, "ignored", top_n=6)

        assert [candidate.text for candidate in ranked] == [f"doc-{i}" for i in range(6)]

    def test_rerank_should_truncate_to_top_n(self) -> None:
        """Test default top_n limits the result."""
        reranker = HybridReranker(threshold=0.0, top_n=2, extractor=fixed_extractor([]))
        candidates = [SearchCandidate(text=f"doc-{i}", vector_score=0.9 - i * 0.1) for i in range(5)]

        ranked = reranker.rerank(candidates, "ignored")

        assert [candidate.text for candidate in ranked] == ["doc-0", "doc-1"]

    def test_rerank_should_keep_candidates_at_threshold(self) -> None:
        """Test a score equal to the threshold is kept."""
        reranker = HybridReranker(threshold=0.4, extractor=fixed_extractor([]))
        candidate = SearchCandidate(text="edge", vector_score=0.5)

        assert len(reranker.rerank([candidate], "ignored")) == 1

    def test_rerank_should_be_deterministic(self) -> None:
        """Test identical input yields identical output."""
        reranker = HybridReranker(threshold=0.3)
        candidates = [
            SearchCandidate(text="ZUEL finance update", vector_score=0.70),
            SearchCandidate(text="campus dining menu", vector_score=0.62),
            SearchCandidate(text="ZUEL funding report", vector_score=0.50),
            SearchCandidate(text="funding rounds", vector_score=0.50),
        ]

        first = reranker.rerank(candidates, "ZUEL funding")
        second = reranker.rerank(candidates, "ZUEL funding")

        assert first == second

    def test_rerank_should_return_empty_for_no_candidates(self) -> None:
        """Test empty input yields empty output."""
        assert HybridReranker().rerank([], "anything") == []


class TestConfiguration:
    """Test reranker configuration validation."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"vector_weight": 0.9, "lexical_weight": 0.2},
            {"vector_weight": -0.1},
            {"threshold": 1.5},
            {"threshold": -0.1},
            {"top_n": 0},
            {"saturation_hits": 0},
        ],
    )
    def test_reranker_should_reject_invalid_configuration(self, kwargs: dict) -> None:
        """Test out-of-range parameters raise InvalidConfig."""
        with pytest.raises(InvalidConfig):
            HybridReranker(**kwargs)
