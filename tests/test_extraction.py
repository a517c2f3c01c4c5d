from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests
from bs4 import BeautifulSoup

from freshservice_rag.scraper.base import ApiEndpoint, ScrapedDocumentation
from freshservice_rag.scraper.fallback import fallback_endpoints
from freshservice_rag.scraper.freshservice import (
    BASE_URL,
    FetchError,
    FreshserviceScraper,
    build_documentation,
    describe_operation,
    endpoints_from_code_blocks,
    endpoints_from_sections,
    extract_endpoints,
    fetch_page,
)

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def tickets_html() -> str:
    return (FIXTURES / "freshservice_tickets.html").read_text(encoding="utf-8")


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class TestSectionStrategy:
    def test_finds_ticket_sections(self, tickets_html):
        endpoints = list(endpoints_from_sections(_soup(tickets_html)))
        names = [e.name for e in endpoints]
        assert names == ["Create a Ticket", "View a Ticket", "View a Ticket (legacy)"]

    def test_container_ids_are_excluded(self, tickets_html):
        endpoints = list(endpoints_from_sections(_soup(tickets_html)))
        assert all(e.name != "Ticket Attributes" for e in endpoints)

    def test_parameters_from_section_tables(self, tickets_html):
        create = next(endpoints_from_sections(_soup(tickets_html)))
        assert create.method == "POST"
        assert create.path == "/api/v2/tickets"
        assert [p.name for p in create.parameters] == ["subject", "priority", "cc_emails"]
        assert create.parameters[0].required is True
        assert create.parameters[1].default == "1"
        assert create.parameters[2].param_type == "array"


class TestCodeBlockStrategy:
    def test_scans_main_container(self, tickets_html):
        keys = [e.key for e in endpoints_from_code_blocks(_soup(tickets_html))]
        assert ("POST", "/api/v2/tickets/{id}/notes") in keys
        assert ("DELETE", "/api/v2/tickets/{id}/tasks/{task_id}") in keys

    def test_description_from_ancestor_id(self, tickets_html):
        endpoints = {e.key: e for e in endpoints_from_code_blocks(_soup(tickets_html))}
        task = endpoints[("DELETE", "/api/v2/tickets/{id}/tasks/{task_id}")]
        assert task.description == "Delete A Task"
        assert task.name == "Delete A Task"

    def test_description_from_lookup_table(self, tickets_html):
        endpoints = {e.key: e for e in endpoints_from_code_blocks(_soup(tickets_html))}
        assert endpoints[("POST", "/api/v2/tickets/{id}/notes")].description == "Create a Note"

    def test_description_from_ancestor_heading(self):
        html = """
        <div id="tickets"><div class="op"><h2>Restore a Ticket</h2>
        <pre>curl -X PUT "https://d.freshservice.com/api/v2/tickets/{id}/restore"</pre></div></div>
        """
        [endpoint] = endpoints_from_code_blocks(_soup(html))
        assert endpoint.description == "Restore a Ticket"

    def test_no_main_container(self):
        html = "<div><pre>curl -X GET https://d.freshservice.com/api/v2/tickets</pre></div>"
        assert list(endpoints_from_code_blocks(_soup(html))) == []

    def test_skips_non_ticket_paths(self):
        html = '<div id="tickets"><pre>curl https://d.freshservice.com/api/v2/agents # /tickets</pre></div>'
        assert list(endpoints_from_code_blocks(_soup(html))) == []


class TestDescribeOperation:
    @pytest.mark.parametrize(
        "method,path,expected",
        [
            ("POST", "/api/v2/tickets", "Create a Ticket"),
            ("GET", "/api/v2/tickets", "List All Tickets"),
            ("GET", "/api/v2/tickets/{id}", "View a Ticket"),
            ("GET", "/api/v2/tickets/1", "View a Ticket"),
            ("PUT", "/api/v2/tickets/{id}", "Update a Ticket"),
            ("DELETE", "/api/v2/tickets/{id}", "Delete a Ticket"),
            ("GET", "/api/v2/tickets/{id}/notes", "View Notes of a Ticket"),
            ("POST", "/api/v2/tickets/{id}/tasks", "Create a Task"),
            ("PUT", "/api/v2/tickets/{id}/tasks/{task_id}", "Update a Task"),
            ("GET", "/api/v2/tickets/{id}/time_entries", "List All Time Entries of a Ticket"),
            ("DELETE", "/api/v2/tickets/{id}/time_entries/{entry_id}", "Delete a Time Entry"),
            ("PATCH", "/api/v2/tickets/{id}", "Ticket Operation"),
        ],
    )
    def test_lookup(self, method, path, expected):
        assert describe_operation(method, path) == expected


class TestExtractEndpoints:
    def test_strategies_combined_in_order(self, tickets_html):
        endpoints = extract_endpoints(tickets_html)
        assert [e.key for e in endpoints] == [
            ("POST", "/api/v2/tickets"),
            ("GET", "/api/v2/tickets/{id}"),
            ("POST", "/api/v2/tickets/{id}/notes"),
            ("DELETE", "/api/v2/tickets/{id}/tasks/{task_id}"),
        ]

    def test_first_duplicate_wins(self, tickets_html):
        endpoints = extract_endpoints(tickets_html)
        view = [e for e in endpoints if e.key == ("GET", "/api/v2/tickets/{id}")]
        assert len(view) == 1
        assert view[0].name == "View a Ticket"
        assert view[0].parameters[0].param_type == "integer"

    def test_keys_are_unique(self, tickets_html):
        keys = [e.key for e in extract_endpoints(tickets_html)]
        assert len(keys) == len(set(keys))

    def test_accepts_bytes(self, tickets_html):
        assert len(extract_endpoints(tickets_html.encode("utf-8"))) == 4

    def test_dedup_spans_custom_strategies(self):
        first = ApiEndpoint(name="First", description="", method="GET", path="/api/v2/tickets")
        second = ApiEndpoint(name="Second", description="", method="GET", path="/api/v2/tickets")
        endpoints = extract_endpoints("<html></html>", strategies=[lambda soup: [first], lambda soup: [second]])
        assert endpoints == [first]

    def test_fallback_when_nothing_recognised(self):
        html = (FIXTURES / "unrecognised.html").read_text(encoding="utf-8")
        endpoints = extract_endpoints(html)
        assert endpoints == fallback_endpoints()
        assert len(endpoints) >= 5

    def test_fallback_on_empty_document(self):
        assert extract_endpoints("") == fallback_endpoints()


class TestFallbackCatalog:
    def test_canonical_operations(self):
        keys = [e.key for e in fallback_endpoints()]
        assert keys == [
            ("POST", "/api/v2/tickets"),
            ("GET", "/api/v2/tickets/{id}"),
            ("GET", "/api/v2/tickets"),
            ("PUT", "/api/v2/tickets/{id}"),
            ("DELETE", "/api/v2/tickets/{id}"),
        ]

    def test_every_entry_has_curl_and_parameters(self):
        for endpoint in fallback_endpoints():
            assert endpoint.curl_example and "curl" in endpoint.curl_example
            assert endpoint.parameters


class TestBuildDocumentation:
    def test_snapshot(self, tickets_html):
        docs = build_documentation(tickets_html)
        assert isinstance(docs, ScrapedDocumentation)
        assert docs.base_url == BASE_URL
        assert len(docs.endpoints) == 4
        assert docs.scraped_at.tzinfo is not None


class TestFetchPage:
    def test_returns_text(self):
        session = MagicMock()
        session.get.return_value.text = "<html></html>"
        session.get.return_value.content = b"<html></html>"

        assert fetch_page("https://example.com/docs", timeout=5, session=session) == "<html></html>"
        kwargs = session.get.call_args[1]
        assert kwargs["timeout"] == 5
        assert "Mozilla" in kwargs["headers"]["User-Agent"]

    @patch("freshservice_rag.scraper.freshservice.requests.Session")
    def test_owned_session_is_closed(self, MockSession):
        owned = MockSession.return_value.__enter__.return_value
        owned.get.return_value.text = "<html></html>"
        owned.get.return_value.content = b"<html></html>"

        assert fetch_page("https://example.com/docs") == "<html></html>"
        owned.get.assert_called_once()
        MockSession.return_value.__exit__.assert_called_once()

    @patch("freshservice_rag.scraper.freshservice.requests.Session")
    def test_owned_session_closed_on_error(self, MockSession):
        owned = MockSession.return_value.__enter__.return_value
        owned.get.side_effect = requests.ConnectionError("boom")

        with pytest.raises(FetchError):
            fetch_page("https://example.com/docs")
        MockSession.return_value.__exit__.assert_called_once()

    def test_transport_error_is_fatal(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("boom")
        with pytest.raises(FetchError):
            fetch_page("https://example.com/docs", session=session)

    def test_http_error_is_fatal(self):
        session = MagicMock()
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError("503")
        with pytest.raises(FetchError):
            fetch_page("https://example.com/docs", session=session)


class TestFreshserviceScraper:
    def test_scrape_fetches_once(self, tickets_html):
        session = MagicMock()
        session.get.return_value.text = tickets_html
        session.get.return_value.content = tickets_html.encode("utf-8")

        docs = FreshserviceScraper(docs_url="https://example.com/v2/#ticket", session=session).scrape()
        session.get.assert_called_once()
        assert len(docs.endpoints) == 4
