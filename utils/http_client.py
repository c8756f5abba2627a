"""
HTTP client utilities with connection pooling.
Provides a reusable httpx client for model backend calls.
"""
import httpx
from config import Config


class HTTPClientManager:
    """Manages the shared httpx client with connection pooling."""

    _llm_client: httpx.AsyncClient | None = None

    @classmethod
    def get_llm_client(cls) -> httpx.AsyncClient:
        """
        Get or create a shared httpx client for model backend requests.

        Features:
        - Connection pooling (reuses TCP connections to OpenRouter/Gemini)
        - Timeout matching the overall request ceiling

        Returns:
            Configured httpx.AsyncClient for LLM calls
        """
        if cls._llm_client is None:
            limits = httpx.Limits(
                max_connections=20,
                max_keepalive_connections=5,
                keepalive_expiry=30.0
            )

            cls._llm_client = httpx.AsyncClient(
                timeout=Config.REQUEST_TIMEOUT,
                limits=limits,
                http2=True
            )

        return cls._llm_client

    @classmethod
    async def close_all(cls) -> None:
        """
        Close the managed client and clean up connections.
        """
        if cls._llm_client is not None:
            await cls._llm_client.aclose()
            cls._llm_client = None
