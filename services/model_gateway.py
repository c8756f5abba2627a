"""
Model gateway for hosted LLM backends.
Tries Gemini first, then the OpenRouter fallback models in order.
"""
import time
from typing import Optional, Tuple
import httpx

from config import Config, GatewayConfig
from utils.exceptions import ConfigurationError, UpstreamUnavailableError
from utils.http_client import HTTPClientManager
from utils.logger import app_logger


class ModelGateway:
    """Sends prompts to the primary and fallback model backends."""

    def __init__(self, config: GatewayConfig, client: Optional[httpx.AsyncClient] = None):
        """
        Args:
            config: Keys, endpoints and model lists
            client: httpx client to use; the shared pooled client by default
        """
        self.config = config
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = HTTPClientManager.get_llm_client()
        return self._client

    def ensure_configured(self) -> None:
        """Raise ConfigurationError when the OpenRouter key is missing."""
        if not self.config.openrouter_api_key:
            raise ConfigurationError("OPENROUTER_API_KEY not configured. Please add it to .env")

    def _openrouter_headers(self, title: str) -> dict:
        return {
            "Authorization": f"Bearer {self.config.openrouter_api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.config.public_base_url,
            "X-Title": title,
        }

    async def _chat_completion(self, model: str, prompt: str, title: str) -> dict:
        """POST one chat completion to OpenRouter and return the first choice's message."""
        response = await self.client.post(
            self.config.openrouter_url,
            headers=self._openrouter_headers(title),
            json={
                "model": model,
                "messages": [{"role": "user", "content": prompt}],
            }
        )
        response.raise_for_status()
        data = response.json()

        choices = data.get("choices") or []
        if not choices:
            return {}
        return choices[0].get("message") or {}

    async def generate_with_gemini(self, prompt: str) -> Optional[str]:
        """
        Primary backend. Returns None when the key is missing or the call fails,
        so the caller can move on to the fallback list.
        """
        if not self.config.gemini_api_key:
            app_logger.info("Gemini key not configured, skipping primary backend")
            return None

        start = time.perf_counter()
        try:
            app_logger.info("Trying Gemini 2.5 Flash Lite...")
            response = await self.client.post(
                self.config.gemini_url,
                params={"key": self.config.gemini_api_key},
                json={
                    "contents": [{"parts": [{"text": prompt}]}],
                    "generationConfig": {
                        "temperature": self.config.temperature,
                        "maxOutputTokens": self.config.max_output_tokens,
                    },
                }
            )

            if response.status_code != 200:
                app_logger.warning(f"Gemini error ({response.status_code}): {response.text[:200]}")
                return None

            data = response.json()
            candidates = data.get("candidates") or [{}]
            parts = (candidates[0].get("content") or {}).get("parts") or [{}]
            text = (parts[0].get("text") or "").strip()

            if text:
                app_logger.info(f"Success with Gemini in {(time.perf_counter() - start) * 1000:.0f}ms")
                return text

            app_logger.warning("Gemini returned empty content")
        except Exception as e:
            app_logger.error(f"Gemini execution failed: {e}")

        return None

    async def generate_with_openrouter(self, prompt: str) -> Optional[str]:
        """Try each fallback model in order; first non-empty answer wins."""
        if not self.config.openrouter_api_key:
            return None

        for model in self.config.fallback_models:
            start = time.perf_counter()
            try:
                app_logger.info(f"Trying OpenRouter model: {model}")
                message = await self._chat_completion(model, prompt, Config.APP_TITLE)
                text = (message.get("content") or "").strip()
                elapsed_ms = (time.perf_counter() - start) * 1000

                if text:
                    app_logger.info(f"Success with {model} in {elapsed_ms:.0f}ms")
                    return text

                app_logger.warning(f"{model} returned empty content after {elapsed_ms:.0f}ms")
            except Exception as e:
                app_logger.warning(f"{model} failed: {e}")

        return None

    async def generate(self, prompt: str) -> str:
        """
        Generate text, falling back through every configured backend.

        Raises:
            UpstreamUnavailableError: when no backend produced text
        """
        text = await self.generate_with_gemini(prompt)

        if not text:
            app_logger.info("Gemini failed or skipped. Falling back to OpenRouter...")
            text = await self.generate_with_openrouter(prompt)

        if not text:
            raise UpstreamUnavailableError(
                "All AI models are currently unavailable. Please try again in a moment."
            )
        return text

    async def search(self, prompt: str) -> Tuple[str, list]:
        """
        Single copy-search call with live X search. No fallback models.

        Returns:
            Tuple of (response_text, annotations)
        """
        model = self.config.copycat_model
        app_logger.info(f"Sending request to OpenRouter model: {model}...")

        start = time.perf_counter()
        message = await self._chat_completion(model, prompt, Config.COPYCAT_TITLE)
        app_logger.info(f"Search & generation completed in {(time.perf_counter() - start) * 1000:.0f}ms")

        text = (message.get("content") or "").strip()
        if not text:
            raise UpstreamUnavailableError("No response from AI model")

        return text, message.get("annotations") or []


# Global gateway instance
_model_gateway: Optional[ModelGateway] = None


def get_model_gateway() -> ModelGateway:
    """Get the process-wide gateway, built from configuration on first use."""
    global _model_gateway
    if _model_gateway is None:
        _model_gateway = ModelGateway(Config.gateway_config())
    return _model_gateway
