"""LLM client wrapper around litellm.

Turns a user question plus retrieved documentation context into an answer.
Credentials are read by litellm from the environment (e.g. GROQ_API_KEY).
"""

from litellm import completion

DEFAULT_MODEL = "groq/llama-3.3-70b-versatile"

SYSTEM_PROMPT = (
    "You are an expert on Freshservice API documentation. "
    "Provide accurate, helpful answers based on the given context."
)

NO_ANSWER = "Sorry, I couldn't generate an answer."


class LlmClient:
    """Wrapper for LLM API calls via litellm."""

    def __init__(self, model: str | None = None, temperature: float = 0.1, max_tokens: int = 1024):
        self.model = model or DEFAULT_MODEL
        self.temperature = temperature
        self.max_tokens = max_tokens

    def call(self, system: str, user: str) -> str:
        """Send a system+user message to the LLM and return the response text."""
        response = completion(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return response.choices[0].message.content or ""

    def generate_answer(self, query: str, context: str) -> str:
        """Answer a question using only the supplied documentation context."""
        prompt = (
            "You are a helpful assistant for Freshservice API documentation. "
            "Use the following context to answer the user's question. "
            "If the context doesn't contain the answer, say so.\n\n"
            f"CONTEXT:\n{context}\n\n"
            f"QUESTION: {query}\n\n"
            "Please provide a clear, helpful answer based on the context above:"
        )
        answer = self.call(system=SYSTEM_PROMPT, user=prompt).strip()
        return answer or NO_ANSWER
