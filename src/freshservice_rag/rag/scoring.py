"""Lexical relevance scoring of one endpoint against a query.

A weighted sum of independent substring signals, divided by a fixed
ceiling and clamped to [0, 1]. Fully deterministic.
"""

from freshservice_rag.rag.weights import DEFAULT_WEIGHTS, ScoringWeights
from freshservice_rag.scraper.base import ApiEndpoint


def normalize_query(query: str) -> str:
    return query.strip().lower()


def raw_score(endpoint: ApiEndpoint, query: str, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    """Unnormalised score. ``query`` must already be normalised."""
    if not query:
        return 0.0

    words = query.split()
    name = endpoint.name.lower()
    description = endpoint.description.lower()
    score = 0.0

    if query in name:
        score += weights.name_phrase
    score += weights.name_word * sum(1 for word in words if word in name)

    if query in description:
        score += weights.description_phrase
    score += weights.description_word * sum(1 for word in words if word in description)

    if query in endpoint.path.lower():
        score += weights.path_phrase

    for param in endpoint.parameters:
        if query in param.name.lower():
            score += weights.param_name_phrase
        if query in param.description.lower():
            score += weights.param_description_phrase

    if any(keyword in query for keyword in weights.domain_keywords):
        score += weights.domain_keyword

    if "curl" in query and endpoint.curl_example:
        score += weights.curl_example

    for verb, weight in weights.verbs.items():
        if verb in query and verb in name:
            score += weight

    return score


def score_endpoint(endpoint: ApiEndpoint, query: str, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    """Relevance of endpoint to query in [0, 1]."""
    raw = raw_score(endpoint, normalize_query(query), weights)
    return max(0.0, min(raw / weights.ceiling, 1.0))
