"""Rank endpoints against a query."""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from freshservice_rag.rag.scoring import score_endpoint
from freshservice_rag.rag.weights import DEFAULT_WEIGHTS, ScoringWeights
from freshservice_rag.scraper.base import ApiEndpoint

RELEVANCE_THRESHOLD = 0.1
MAX_MATCHES = 5


class Match(BaseModel):
    """An endpoint paired with its relevance score for one query."""

    model_config = ConfigDict(frozen=True)

    endpoint: ApiEndpoint
    score: float


def retrieve(
    endpoints: Sequence[ApiEndpoint],
    query: str,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
    limit: int = MAX_MATCHES,
) -> list[Match]:
    """Return the best matches, highest score first.

    Scores at or below RELEVANCE_THRESHOLD are dropped. Equal scores keep
    document order.
    """
    matches = []
    for endpoint in endpoints:
        score = score_endpoint(endpoint, query, weights)
        if score > RELEVANCE_THRESHOLD:
            matches.append(Match(endpoint=endpoint, score=score))

    matches.sort(key=lambda m: m.score, reverse=True)
    return matches[: max(0, min(limit, MAX_MATCHES))]
