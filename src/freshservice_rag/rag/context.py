"""Render ranked matches into a context block for the language model."""

from freshservice_rag.rag.retriever import MAX_MATCHES, Match

NO_MATCHES = "No relevant endpoints found."
SEPARATOR = "---"


def format_match(match: Match) -> str:
    endpoint = match.endpoint
    lines = [
        f"[Relevance: {match.score:.2f}] Endpoint: {endpoint.name} ({endpoint.method})",
        f"Description: {endpoint.description}",
        f"Path: {endpoint.path}",
    ]

    if endpoint.parameters:
        lines.append("Parameters:")
        for param in endpoint.parameters:
            required = " [Required]" if param.required else ""
            lines.append(f"  - {param.name} ({param.param_type}){required}: {param.description}")

    if endpoint.curl_example:
        lines.append("cURL Example:")
        lines.append(endpoint.curl_example)

    lines.append("")
    lines.append(SEPARATOR)
    return "\n".join(lines) + "\n\n"


def format_context(matches: list[Match]) -> tuple[str, float]:
    """Return the context text and the score of the top match."""
    if not matches:
        return NO_MATCHES, 0.0

    context = "".join(format_match(m) for m in matches[:MAX_MATCHES])
    return context, matches[0].score
