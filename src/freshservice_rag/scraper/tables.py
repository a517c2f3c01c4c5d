"""Parameter table parser.

Converts an HTML ``<table>`` describing request attributes into
ApiParameter models. Rows that cannot be read are dropped.
"""

import re

from bs4 import Tag

from .base import ApiParameter

TABLE_MARKERS = ("parameter", "attribute", "field")

DEFAULT_RE = re.compile(r"[Dd]efault[:\s]+([^\s,.]+)")


def is_parameter_table(table: Tag) -> bool:
    """Check whether a table looks like it documents parameters."""
    text = table.get_text(" ").lower()
    return any(marker in text for marker in TABLE_MARKERS)


def parse_parameter_table(table: Tag) -> list[ApiParameter]:
    """Parse a parameter table; the first row is treated as the header."""
    if not is_parameter_table(table):
        return []

    params = []
    for row in _own_rows(table)[1:]:
        param = _parse_row(row)
        if param is not None:
            params.append(param)
    return params


def _own_rows(table: Tag) -> list[Tag]:
    """Rows of this table, excluding rows of tables nested in its cells."""
    return [row for row in table.find_all("tr") if row.find_parent("table") is table]


def _parse_row(row: Tag) -> ApiParameter | None:
    cells = [cell.get_text(" ", strip=True) for cell in row.find_all(["td", "th"], recursive=False)]
    if len(cells) < 2:
        return None

    name = cells[0].strip()
    if not name:
        return None

    description = cells[1]
    if len(cells) > 2:
        param_type = cells[2].lower()
    else:
        param_type = infer_type(description)

    return ApiParameter(
        name=name,
        param_type=param_type,
        description=description,
        required="required" in description.lower(),
        default=_extract_default(description),
    )


def infer_type(description: str) -> str:
    """Guess a parameter type from keywords in its description."""
    text = description.lower()
    if "integer" in text or "number" in text:
        return "integer"
    if "boolean" in text:
        return "boolean"
    if "array" in text:
        return "array"
    return "string"


def _extract_default(description: str) -> str | None:
    if "default" not in description.lower():
        return None
    match = DEFAULT_RE.search(description)
    return match.group(1) if match else None
