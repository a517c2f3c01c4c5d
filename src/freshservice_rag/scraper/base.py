"""Data models for scraped API documentation.

Every extraction strategy and the built-in fallback catalog produce
these models; the retrieval engine only ever reads them.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class ApiParameter(BaseModel):
    """A single documented request attribute."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    param_type: str = "string"  # string / integer / boolean / array
    description: str = ""
    required: bool = False
    default: str | None = None


class ApiEndpoint(BaseModel):
    """A single documented API operation."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    method: str  # GET / POST / PUT / PATCH / DELETE
    path: str  # /api/v2/tickets/{id}
    parameters: tuple[ApiParameter, ...] = ()
    curl_example: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        """Deduplication key: two endpoints with the same key are the same operation."""
        return (self.method, self.path)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScrapedDocumentation(BaseModel):
    """Snapshot of one scrape: read-only for the lifetime of a serving process."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    endpoints: tuple[ApiEndpoint, ...]
    scraped_at: datetime = Field(default_factory=_utcnow)
