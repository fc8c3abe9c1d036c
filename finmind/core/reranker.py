"""
Hybrid vector + lexical reranker.

Rescores vector matches with a keyword-overlap signal as a precision guard
against vector-only false positives:

    lexical_score = min(distinct_keyword_hits / saturation_hits, 1.0)
    final_score   = vector_weight * vector_score + lexical_weight * lexical_score

Candidates below the threshold are dropped; the rest are ordered by
final_score descending, ties keeping retrieval order, and cut to top_n.

Dependencies: jieba, finmind.models.search, finmind.core.exceptions
System role: Candidate filtering and ordering between retrieval and prompting
"""

import logging
from collections.abc import Iterable, Sequence

import jieba

from finmind.core.exceptions import InvalidConfig
from finmind.models.search import RankedCandidate, SearchCandidate

logger = logging.getLogger(__name__)

jieba.setLogLevel(logging.WARNING)

STOP_WORDS: frozenset[str] = frozenset(
    {
        # Chinese function words and question fillers
        "的", "了", "是", "在", "和", "与", "及", "或", "吗", "呢", "吧", "啊",
        "什么", "怎么", "怎样", "如何", "哪些", "哪个", "为什么", "一下", "请问",
        "我们", "你们", "他们", "这个", "那个", "这些", "那些", "可以", "还是",
        "以及", "关于", "有没有", "是不是", "一个", "没有", "就是", "告诉",
        # English function words
        "the", "an", "of", "to", "in", "on", "at", "for", "and", "or", "is",
        "are", "was", "were", "be", "what", "how", "why", "which", "who", "when",
        "please", "about", "with", "me", "you", "can", "do", "does", "tell",
        "this", "that", "it", "my", "your", "from", "by", "as",
    }
)


class KeywordExtractor:
    """Segments a query into distinct, lower-cased content keywords."""

    def __init__(self, stop_words: Iterable[str] = STOP_WORDS) -> None:
        self._stop_words = frozenset(word.casefold() for word in stop_words)

    def extract(self, query: str) -> list[str]:
        """
        Tokenize a query into keywords.

        Uses jieba segmentation so mixed Chinese/Latin text splits on word
        boundaries. Tokens of length <= 1 and stop words are discarded.

        Args:
            query: Raw user query

        Returns:
            list[str]: Distinct keywords in first-seen order
        """
        keywords: list[str] = []
        seen: set[str] = set()
        for token in jieba.lcut(query or ""):
            word = token.strip().casefold()
            if len(word) <= 1 or word in self._stop_words or word in seen:
                continue
            seen.add(word)
            keywords.append(word)
        return keywords


class HybridReranker:
    """Weighted vector/lexical rescoring with threshold filtering."""

    def __init__(
        self,
        threshold: float = 0.45,
        top_n: int = 5,
        vector_weight: float = 0.8,
        lexical_weight: float = 0.2,
        saturation_hits: int = 3,
        extractor: KeywordExtractor | None = None,
    ) -> None:
        """
        Initialize reranker.

        Args:
            threshold: Minimum final score kept
            top_n: Default number of candidates returned
            vector_weight: Weight of the vector score
            lexical_weight: Weight of the lexical score
            saturation_hits: Distinct keyword hits that saturate the lexical score
            extractor: Keyword extractor (jieba-based by default)

        Raises:
            InvalidConfig: If weights, threshold, top_n or saturation are out of range
        """
        if vector_weight < 0 or lexical_weight < 0 or vector_weight + lexical_weight > 1.0 + 1e-9:
            raise InvalidConfig(
                "Rerank weights must be non-negative and sum to at most 1.0",
                {"vector_weight": vector_weight, "lexical_weight": lexical_weight},
            )
        if not 0.0 <= threshold <= 1.0:
            raise InvalidConfig("Rerank threshold must be within [0, 1]", {"threshold": threshold})
        if top_n < 1:
            raise InvalidConfig("Rerank top_n must be at least 1", {"top_n": top_n})
        if saturation_hits < 1:
            raise InvalidConfig(
                "Lexical saturation must be at least one hit",
                {"saturation_hits": saturation_hits},
            )

        self.threshold = threshold
        self.top_n = top_n
        self.vector_weight = vector_weight
        self.lexical_weight = lexical_weight
        self.saturation_hits = saturation_hits
        self._extractor = extractor or KeywordExtractor()

    def lexical_score(self, text: str, keywords: Sequence[str]) -> float:
        """Fraction of the saturation count reached by distinct keyword substring hits."""
        haystack = text.casefold()
        hits = sum(1 for keyword in keywords if keyword in haystack)
        return min(hits / self.saturation_hits, 1.0)

    def score(self, candidate: SearchCandidate, keywords: Sequence[str]) -> RankedCandidate:
        lexical = self.lexical_score(candidate.text, keywords)
        final = self.vector_weight * candidate.vector_score + self.lexical_weight * lexical
        return RankedCandidate(
            text=candidate.text,
            vector_score=candidate.vector_score,
            source=candidate.source,
            lexical_score=lexical,
            final_score=min(max(final, 0.0), 1.0),
        )

    def rerank(
        self,
        candidates: Sequence[SearchCandidate],
        query: str,
        top_n: int | None = None,
    ) -> list[RankedCandidate]:
        """
        Rescore, filter and order candidates.

        Args:
            candidates: Vector matches in retrieval order
            query: Raw user query
            top_n: Override of the configured result count

        Returns:
            list[RankedCandidate]: At most top_n candidates at or above threshold,
            final_score descending, stable on ties
        """
        limit = top_n if top_n is not None else self.top_n
        keywords = self._extractor.extract(query)

        scored = [self.score(candidate, keywords) for candidate in candidates]
        kept = [candidate for candidate in scored if candidate.final_score >= self.threshold]
        ranked = sorted(kept, key=lambda candidate: candidate.final_score, reverse=True)[:limit]

        logger.info(
            f"{__name__}:rerank - keywords={keywords}, candidates={len(candidates)}, "
            f"kept={len(kept)}, returned={len(ranked)}"
        )
        for candidate in ranked:
            logger.debug(
                f"{__name__}:rerank - text='{candidate.text[:20]}' vector={candidate.vector_score:.2f} "
                f"lexical={candidate.lexical_score:.2f} final={candidate.final_score:.2f}"
            )
        return ranked
