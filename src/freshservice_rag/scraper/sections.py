"""Endpoint section parser.

A section is an HTML subtree believed to document exactly one endpoint:
a heading, a curl example and optionally one or more attribute tables.
"""

from bs4 import Tag

from .base import ApiEndpoint
from .paths import extract_method_and_path
from .tables import parse_parameter_table

DEFAULT_DESCRIPTION = "API endpoint"


def is_code_block(tag: Tag) -> bool:
    """A ``<pre>`` or any element carrying a ``highlight`` class."""
    if tag.name == "pre":
        return True
    return any("highlight" in cls for cls in tag.get("class") or [])


def find_code_block(section: Tag) -> Tag | None:
    """Return the first code block inside section in document order."""
    return section.find(is_code_block)


def _outer_tables(section: Tag) -> list[Tag]:
    """Tables of the section that are not nested inside another of its tables."""
    tables = []
    for table in section.find_all("table"):
        outer = table.find_parent("table")
        if outer is None or not any(parent is section for parent in outer.parents):
            tables.append(table)
    return tables


def parse_section(section: Tag) -> ApiEndpoint | None:
    """Build an endpoint from one section, or None when it has no usable curl example."""
    heading = section.find("h2")
    title = heading.get_text(" ", strip=True) if heading else ""

    code_block = find_code_block(section)
    if code_block is None:
        return None
    code = code_block.get_text()
    if "curl" not in code:
        return None

    method, path = extract_method_and_path(code)
    if path is None:
        return None

    params = []
    for table in _outer_tables(section):
        params.extend(parse_parameter_table(table))

    return ApiEndpoint(
        name=title or f"{method} {path}",
        description=title or DEFAULT_DESCRIPTION,
        method=method,
        path=path,
        parameters=params,
        curl_example=code.strip(),
    )
