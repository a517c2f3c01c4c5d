"""Confidence estimation for a retrieval result."""

from freshservice_rag.rag.retriever import Match

MIN_CONFIDENCE = 0.1
MAX_CONFIDENCE = 1.0

MATCH_WEIGHT = 0.7
QUERY_QUALITY_WEIGHT = 0.3

SPECIFICITY_WEIGHT = 0.6
VOCABULARY_WEIGHT = 0.4
VOCABULARY_SATURATION = 3

DOMAIN_VOCABULARY = (
    "api",
    "endpoint",
    "method",
    "curl",
    "request",
    "response",
    "ticket",
    "create",
    "get",
    "list",
    "update",
    "delete",
    "view",
    "post",
    "put",
    "patch",
    "fetch",
    "retrieve",
)


def _specificity(word_count: int) -> float:
    if word_count >= 4:
        return 0.9
    if word_count >= 2:
        return 0.6
    return 0.3


def assess_query_quality(query: str) -> float:
    """How specific and on-topic a query is, in [0, 1]."""
    query = query.lower()
    hits = sum(1 for term in DOMAIN_VOCABULARY if term in query)
    vocabulary = min(hits / VOCABULARY_SATURATION, 1.0)
    return SPECIFICITY_WEIGHT * _specificity(len(query.split())) + VOCABULARY_WEIGHT * vocabulary


def calculate_confidence(query: str, matches: list[Match]) -> float:
    """Blend the best match score with query quality, clamped to [0.1, 1.0]."""
    if not matches:
        return MIN_CONFIDENCE

    best = max(m.score for m in matches)
    confidence = MATCH_WEIGHT * best + QUERY_QUALITY_WEIGHT * assess_query_quality(query)
    return max(MIN_CONFIDENCE, min(confidence, MAX_CONFIDENCE))
