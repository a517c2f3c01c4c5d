"""Freshservice documentation scraper.

Fetches the ticket API page once and runs an ordered cascade of
extraction strategies over it. Results from all strategies share a
single ``(method, path)`` seen-set so the first record found for an
operation wins. When nothing is recognised the built-in catalog is used,
so extraction as a whole never fails; only the fetch can.
"""

import logging
import re
from collections.abc import Callable, Iterable

import requests
from bs4 import BeautifulSoup, Tag

from .base import ApiEndpoint, ScrapedDocumentation
from .fallback import fallback_endpoints
from .paths import extract_method_and_path
from .sections import is_code_block, parse_section

logger = logging.getLogger(__name__)

BASE_URL = "https://api.freshservice.com"
DOCS_URL = "https://api.freshservice.com/v2/#ticket"
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
DEFAULT_TIMEOUT = 30

MAIN_CONTAINER_ID = "tickets"
CONTAINER_IDS = frozenset({"tickets", "tickets-panel", "ticket_attributes"})
MAX_ANCESTORS = 5

_ID = r"(?:\{[^/}]+\}|[^/{}]+)"

# (method, path shape, description), checked in order.
OPERATION_DESCRIPTIONS = [
    ("POST", re.compile(rf"/tickets/{_ID}/notes$"), "Create a Note"),
    ("GET", re.compile(rf"/tickets/{_ID}/notes$"), "View Notes of a Ticket"),
    ("POST", re.compile(rf"/tickets/{_ID}/tasks$"), "Create a Task"),
    ("GET", re.compile(rf"/tickets/{_ID}/tasks$"), "List All Tasks of a Ticket"),
    ("GET", re.compile(rf"/tickets/{_ID}/tasks/{_ID}$"), "View a Task"),
    ("PUT", re.compile(rf"/tickets/{_ID}/tasks/{_ID}$"), "Update a Task"),
    ("DELETE", re.compile(rf"/tickets/{_ID}/tasks/{_ID}$"), "Delete a Task"),
    ("POST", re.compile(rf"/tickets/{_ID}/time_entries$"), "Create a Time Entry"),
    ("GET", re.compile(rf"/tickets/{_ID}/time_entries$"), "List All Time Entries of a Ticket"),
    ("GET", re.compile(rf"/tickets/{_ID}/time_entries/{_ID}$"), "View a Time Entry"),
    ("PUT", re.compile(rf"/tickets/{_ID}/time_entries/{_ID}$"), "Update a Time Entry"),
    ("DELETE", re.compile(rf"/tickets/{_ID}/time_entries/{_ID}$"), "Delete a Time Entry"),
    ("POST", re.compile(r"/tickets$"), "Create a Ticket"),
    ("GET", re.compile(r"/tickets$"), "List All Tickets"),
    ("GET", re.compile(rf"/tickets/{_ID}$"), "View a Ticket"),
    ("PUT", re.compile(rf"/tickets/{_ID}$"), "Update a Ticket"),
    ("DELETE", re.compile(rf"/tickets/{_ID}$"), "Delete a Ticket"),
]
DEFAULT_OPERATION_DESCRIPTION = "Ticket Operation"

Strategy = Callable[[BeautifulSoup], Iterable[ApiEndpoint]]


class FetchError(Exception):
    """The documentation page could not be fetched."""


# ---------------------------------------------------------------------------
# Strategy A: one element per endpoint, identified by id
# ---------------------------------------------------------------------------


def _is_ticket_section(tag: Tag) -> bool:
    element_id = tag.get("id")
    if not isinstance(element_id, str):
        return False
    return "ticket" in element_id and element_id not in CONTAINER_IDS


def endpoints_from_sections(soup: BeautifulSoup) -> Iterable[ApiEndpoint]:
    """Parse every element whose id mentions a ticket as an endpoint section."""
    for section in soup.find_all(_is_ticket_section):
        endpoint = parse_section(section)
        if endpoint is not None:
            yield endpoint


# ---------------------------------------------------------------------------
# Strategy B: curl code blocks anywhere inside the main tickets container
# ---------------------------------------------------------------------------


def _is_code_like(tag: Tag) -> bool:
    return tag.name == "code" or is_code_block(tag)


def describe_operation(method: str, path: str) -> str:
    """Fallback description derived from the shape of the path."""
    for op_method, shape, description in OPERATION_DESCRIPTIONS:
        if method == op_method and shape.search(path):
            return description
    return DEFAULT_OPERATION_DESCRIPTION


def _title_from_id(element_id: str) -> str:
    return element_id.replace("_", " ").title()


def describe_from_ancestors(block: Tag) -> str | None:
    """Look up to MAX_ANCESTORS levels up for an id or an ``<h2>``.

    The walk stops at the page containers, whose headings describe the
    whole ticket API rather than one operation.
    """
    for ancestor in list(block.parents)[:MAX_ANCESTORS]:
        if not isinstance(ancestor, Tag) or ancestor.name == "[document]":
            break
        element_id = ancestor.get("id")
        if element_id in CONTAINER_IDS:
            break
        if isinstance(element_id, str) and element_id:
            return _title_from_id(element_id)
        heading = ancestor.find("h2")
        if heading is not None:
            text = heading.get_text(" ", strip=True)
            if text:
                return text
    return None


def endpoints_from_code_blocks(soup: BeautifulSoup) -> Iterable[ApiEndpoint]:
    """Scan curl examples inside the main tickets container."""
    container = soup.find(id=MAIN_CONTAINER_ID)
    if container is None:
        return

    for block in container.find_all(_is_code_like):
        code = block.get_text()
        if "curl" not in code or "/tickets" not in code:
            continue

        method, path = extract_method_and_path(code)
        if path is None or "/tickets" not in path:
            continue

        description = describe_from_ancestors(block) or describe_operation(method, path)
        yield ApiEndpoint(
            name=description,
            description=description,
            method=method,
            path=path,
            curl_example=code.strip(),
        )


STRATEGIES: tuple[Strategy, ...] = (
    endpoints_from_sections,
    endpoints_from_code_blocks,
)


def extract_endpoints(
    html: str | bytes,
    strategies: Iterable[Strategy] = STRATEGIES,
) -> list[ApiEndpoint]:
    """Run every strategy in order and deduplicate by (method, path).

    Falls back to the built-in catalog when no strategy finds anything.
    """
    soup = BeautifulSoup(html, "html.parser")
    seen: set[tuple[str, str]] = set()
    endpoints: list[ApiEndpoint] = []

    for strategy in strategies:
        found = 0
        for endpoint in strategy(soup):
            if endpoint.key in seen:
                continue
            seen.add(endpoint.key)
            endpoints.append(endpoint)
            found += 1
        logger.debug("Strategy %s found %d new endpoints", strategy.__name__, found)

    if not endpoints:
        logger.info("No endpoints recognised in page markup, using built-in catalog")
        return fallback_endpoints()

    logger.info("Extracted %d endpoints from page markup", len(endpoints))
    return endpoints


def build_documentation(html: str | bytes, base_url: str = BASE_URL) -> ScrapedDocumentation:
    return ScrapedDocumentation(base_url=base_url, endpoints=extract_endpoints(html))


def fetch_page(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    session: requests.Session | None = None,
) -> str:
    """Fetch the documentation page. Any failure is fatal and not retried."""
    if session is None:
        with requests.Session() as owned:
            return fetch_page(url, timeout=timeout, session=owned)

    try:
        resp = session.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"Failed to fetch {url}: {e}") from e

    logger.info("Fetched %s (%d bytes)", url, len(resp.content))
    return resp.text


class FreshserviceScraper:
    """Fetches the Freshservice ticket documentation and extracts its endpoints."""

    def __init__(
        self,
        docs_url: str = DOCS_URL,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ):
        self.docs_url = docs_url
        self.base_url = base_url
        self.timeout = timeout
        self.session = session

    def scrape(self) -> ScrapedDocumentation:
        html = fetch_page(self.docs_url, timeout=self.timeout, session=self.session)
        return build_documentation(html, base_url=self.base_url)
