"""Retrieval pipeline over one documentation snapshot.

The pipeline holds no per-query state, so a single instance can serve
any number of concurrent requests.
"""

import logging

from pydantic import BaseModel, ConfigDict

from freshservice_rag.rag.confidence import calculate_confidence
from freshservice_rag.rag.context import format_context
from freshservice_rag.rag.retriever import Match, retrieve
from freshservice_rag.rag.weights import DEFAULT_WEIGHTS, ScoringWeights
from freshservice_rag.scraper.base import ScrapedDocumentation

logger = logging.getLogger(__name__)


class RetrievalResult(BaseModel):
    """Ranked matches, their rendered context and an overall confidence."""

    model_config = ConfigDict(frozen=True)

    matches: list[Match]
    context: str
    confidence: float

    @property
    def top_score(self) -> float:
        return self.matches[0].score if self.matches else 0.0


class RagPipeline:
    """Answers queries against a read-only ScrapedDocumentation."""

    def __init__(self, documentation: ScrapedDocumentation, weights: ScoringWeights | None = None):
        self.documentation = documentation
        self.weights = weights or DEFAULT_WEIGHTS

    def find_relevant_endpoints(self, query: str) -> list[Match]:
        return retrieve(self.documentation.endpoints, query, self.weights)

    def format_context(self, matches: list[Match]) -> tuple[str, float]:
        return format_context(matches)

    def calculate_confidence(self, query: str, matches: list[Match]) -> float:
        return calculate_confidence(query, matches)

    def query(self, query: str) -> RetrievalResult:
        matches = self.find_relevant_endpoints(query)
        context, top_score = self.format_context(matches)
        confidence = self.calculate_confidence(query, matches)
        logger.info(
            "Query %r: %d matches, top score %.2f, confidence %.2f",
            query,
            len(matches),
            top_score,
            confidence,
        )
        return RetrievalResult(matches=matches, context=context, confidence=confidence)
