"""HTTP query service over a RagPipeline."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from freshservice_rag.llm import LlmClient
from freshservice_rag.rag.pipeline import RagPipeline, RetrievalResult

logger = logging.getLogger(__name__)

SOURCES = ["Freshservice API Documentation"]

NOT_FOUND_ANSWER = (
    "I couldn't find any relevant information in the Freshservice documentation "
    "for your query. Please try asking about specific API endpoints like creating "
    "tickets, updating tickets, or ticket attributes."
)


class QueryRequest(BaseModel):
    query: str = Field(..., description="Free-text question about the API")


class QueryResponse(BaseModel):
    answer: str
    sources: list[str]
    confidence: float
    explanation: str


def explain(result: RetrievalResult) -> str:
    explanation = f"Found {len(result.matches)} relevant endpoints. "
    if result.matches:
        best = result.matches[0]
        explanation += f"Best match: '{best.endpoint.name}' with score {best.score:.2f}. "
    explanation += f"Overall confidence: {result.confidence:.2f}"
    return explanation


def answer_query(query: str, result: RetrievalResult, llm_client: LlmClient | None) -> str:
    """Generate an answer; falls back to the raw context if the LLM is unavailable."""
    if not result.matches:
        return NOT_FOUND_ANSWER
    if llm_client is None:
        return result.context

    try:
        return llm_client.generate_answer(query, result.context)
    except Exception:
        logger.exception("LLM call failed, returning retrieved context instead")
        return (
            "I found some relevant information but encountered an error processing it. "
            f"Here's what I found:\n\n{result.context}"
        )


def create_app(pipeline: RagPipeline, llm_client: LlmClient | None = None) -> FastAPI:
    app = FastAPI(title="Freshservice RAG", description="Ask questions about the Freshservice ticket API")
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    @app.post("/query", response_model=QueryResponse)
    def query(request: QueryRequest) -> QueryResponse:
        result = pipeline.query(request.query)
        return QueryResponse(
            answer=answer_query(request.query, result, llm_client),
            sources=SOURCES,
            confidence=result.confidence,
            explanation=explain(result),
        )

    @app.get("/health")
    def health() -> dict:
        return {"status": "healthy"}

    @app.get("/debug")
    def debug() -> dict:
        endpoints = pipeline.documentation.endpoints
        return {
            "total_endpoints": len(endpoints),
            "endpoints": [e.name for e in endpoints],
            "sample_endpoint": endpoints[0].model_dump() if endpoints else None,
        }

    return app
