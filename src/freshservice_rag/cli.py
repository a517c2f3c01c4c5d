"""CLI entry point for freshservice-rag."""

import logging
from pathlib import Path

import click
from pydantic import ValidationError

from freshservice_rag.llm import LlmClient
from freshservice_rag.rag.pipeline import RagPipeline
from freshservice_rag.rag.weights import ScoringWeights, WeightsError, load_weights
from freshservice_rag.scraper.base import ScrapedDocumentation
from freshservice_rag.scraper.freshservice import (
    DOCS_URL,
    FetchError,
    FreshserviceScraper,
    build_documentation,
)
from freshservice_rag.server import answer_query, create_app, explain

DEFAULT_OUTPUT = Path("data/scraped/documentation.json")


def _scrape(docs_url: str, html_file: Path | None) -> ScrapedDocumentation:
    """Build documentation from a saved HTML file or by fetching docs_url."""
    if html_file is not None:
        return build_documentation(html_file.read_bytes())
    try:
        return FreshserviceScraper(docs_url=docs_url).scrape()
    except FetchError as e:
        raise click.ClickException(str(e)) from e


def _load_documentation(docs: Path | None, docs_url: str) -> ScrapedDocumentation:
    if docs is not None:
        try:
            return ScrapedDocumentation.model_validate_json(docs.read_text(encoding="utf-8"))
        except ValidationError as e:
            raise click.ClickException(f"Invalid documentation snapshot {docs}: {e}") from e
    click.echo(f"Scraping {docs_url}...")
    return _scrape(docs_url, None)


def _load_weights(weights_path: Path | None) -> ScoringWeights | None:
    if weights_path is None:
        return None
    try:
        return load_weights(weights_path)
    except WeightsError as e:
        raise click.ClickException(str(e)) from e


docs_option = click.option(
    "--docs",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Scraped documentation JSON; scrapes the live page when omitted.",
)
docs_url_option = click.option(
    "--docs-url", default=DOCS_URL, envvar="FRESHSERVICE_DOCS_URL", show_default=True, help="Documentation page to scrape."
)
weights_option = click.option(
    "--weights",
    "weights_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="FRESHSERVICE_RAG_WEIGHTS",
    default=None,
    help="YAML file overriding the relevance scoring weights.",
)
model_option = click.option("--model", default=None, envvar="FRESHSERVICE_RAG_MODEL", help="LLM model to use.")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Query the Freshservice ticket API documentation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option("-o", "--output", default=DEFAULT_OUTPUT, show_default=True, type=click.Path(path_type=Path), help="Output JSON file.")
@click.option("--html", "html_file", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="Parse a saved HTML page instead of fetching.")
@docs_url_option
def scrape(output: Path, html_file: Path | None, docs_url: str):
    """Scrape the documentation and save it as JSON."""
    click.echo(f"Scraping {html_file or docs_url}...")
    documentation = _scrape(docs_url, html_file)
    click.echo(f"Found {len(documentation.endpoints)} endpoints.")

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(documentation.model_dump_json(indent=2), encoding="utf-8")
    click.echo(f"Documentation saved to {output}")


@main.command()
@docs_option
@docs_url_option
def endpoints(docs: Path | None, docs_url: str):
    """List the endpoints in the documentation."""
    documentation = _load_documentation(docs, docs_url)
    for endpoint in documentation.endpoints:
        click.echo(f"{endpoint.method:<6} {endpoint.path}  {endpoint.name}")
    click.echo(f"{len(documentation.endpoints)} endpoints.")


@main.command()
@click.argument("query")
@docs_option
@docs_url_option
@weights_option
@model_option
@click.option("--no-llm", is_flag=True, help="Only show the retrieved context.")
def ask(query: str, docs: Path | None, docs_url: str, weights_path: Path | None, model: str | None, no_llm: bool):
    """Answer a question about the API."""
    pipeline = RagPipeline(_load_documentation(docs, docs_url), _load_weights(weights_path))
    result = pipeline.query(query)

    click.echo(result.context)
    click.echo(explain(result))
    if no_llm:
        return

    click.echo("")
    click.echo(answer_query(query, result, LlmClient(model=model)))


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("-p", "--port", default=8080, show_default=True, type=int)
@docs_option
@docs_url_option
@weights_option
@model_option
def serve(host: str, port: int, docs: Path | None, docs_url: str, weights_path: Path | None, model: str | None):
    """Start the HTTP query service."""
    import uvicorn

    pipeline = RagPipeline(_load_documentation(docs, docs_url), _load_weights(weights_path))
    click.echo(f"Loaded {len(pipeline.documentation.endpoints)} endpoints.")

    app = create_app(pipeline, LlmClient(model=model))
    click.echo(f"Server running on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port)
