"""
Configuration module for the Tweet Improver API.
Handles environment variables and application settings.
"""
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class GatewayConfig:
    """Settings handed to the model gateway. Built once at startup."""
    openrouter_api_key: str
    gemini_api_key: str
    public_base_url: str
    openrouter_url: str
    gemini_url: str
    fallback_models: tuple[str, ...]
    copycat_model: str
    temperature: float = 0.7
    max_output_tokens: int = 1000


class Config:
    """Application configuration class."""

    # API Keys
    OPENROUTER_API_KEY: str = os.getenv("OPENROUTER_API_KEY", "")
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")

    # Sent as HTTP-Referer to OpenRouter
    PUBLIC_BASE_URL: str = os.getenv(
        "PUBLIC_BASE_URL",
        os.getenv("NEXT_PUBLIC_WEBSITE_URL", "http://localhost:3000")
    )

    # API Configuration
    OPENROUTER_URL: str = "https://openrouter.ai/api/v1/chat/completions"
    GEMINI_URL: str = "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.5-flash-lite:generateContent"

    # OpenRouter free models (fallback order)
    FALLBACK_MODELS: tuple[str, ...] = (
        "moonshotai/kimi-k2:free",
        "z-ai/glm-4.5-air:free",
        "deepseek/deepseek-r1-0528:free",
    )

    # Grok with X search enabled via :online suffix
    COPYCAT_MODEL: str = "x-ai/grok-4.1-fast:online"

    # Application Settings
    APP_TITLE: str = "Tweet Improver AI"
    COPYCAT_TITLE: str = "CopyCat Detector"
    HISTORY_DB_PATH: str = os.getenv("HISTORY_DB_PATH", "data/history.db")
    HISTORY_PAGE_SIZE: int = 50

    # Input over this many characters is treated as a thread in auto mode
    THREAD_THRESHOLD: int = 500
    MAX_SUSPECTS: int = 5

    # Timeouts (in seconds)
    REQUEST_TIMEOUT: float = 60.0

    @classmethod
    def gateway_config(cls) -> GatewayConfig:
        """Snapshot the model-related settings into a GatewayConfig."""
        return GatewayConfig(
            openrouter_api_key=cls.OPENROUTER_API_KEY,
            gemini_api_key=cls.GEMINI_API_KEY,
            public_base_url=cls.PUBLIC_BASE_URL,
            openrouter_url=cls.OPENROUTER_URL,
            gemini_url=cls.GEMINI_URL,
            fallback_models=tuple(cls.FALLBACK_MODELS),
            copycat_model=cls.COPYCAT_MODEL,
        )

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and print warnings for missing API keys."""
        if not cls.OPENROUTER_API_KEY:
            print("   WARNING: OPENROUTER_API_KEY not found in .env file")
            print("   Tweet generation and copycat search will return 500. Get a key from: https://openrouter.ai/keys")

        if not cls.GEMINI_API_KEY:
            print("   WARNING: GEMINI_API_KEY not found in .env file")
            print("   Generation will go straight to the OpenRouter fallback models.")

Config.validate()
