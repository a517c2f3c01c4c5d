"""Extract the HTTP method and API path from a curl command or URL."""

import re

METHODS = ("POST", "PUT", "DELETE", "PATCH", "GET")

_SEGMENT = r"(?:[A-Za-z0-9_\-]+|\{[A-Za-z0-9_\-]+\})"
_PATH = rf"/api/v2(?:/{_SEGMENT})+"

# Most specific first; the first pattern matching anywhere in the text wins.
PATH_PATTERNS = [
    re.compile(rf"https?://[^\s/'\"]+({_PATH})"),
    re.compile(rf"'({_PATH})"),
    re.compile(rf"\"({_PATH})"),
    re.compile(rf"({_PATH})"),
]

_METHOD_FLAGS = [(method, re.compile(rf"-X\s+{method}\b")) for method in METHODS]


def extract_method(text: str) -> str:
    """Return the method passed via ``-X``; a bare curl call is a GET."""
    for method, pattern in _METHOD_FLAGS:
        if pattern.search(text):
            return method
    return "GET"


def extract_path(text: str) -> str | None:
    """Return the first ``/api/v2/...`` path found in text, or None."""
    for pattern in PATH_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1).rstrip("'\"\\")
    return None


def extract_method_and_path(text: str) -> tuple[str, str | None]:
    return extract_method(text), extract_path(text)
