import pytest
from unittest.mock import AsyncMock, MagicMock

from config import GatewayConfig


@pytest.fixture
def gateway_config():
    """GatewayConfig with fake keys and endpoints."""
    return GatewayConfig(
        openrouter_api_key="test-openrouter-key",
        gemini_api_key="",
        public_base_url="https://tweets.example.com",
        openrouter_url="https://openrouter.test/api/v1/chat/completions",
        gemini_url="https://gemini.test/v1beta/models/flash:generateContent",
        fallback_models=("model/a:free", "model/b:free", "model/c:free"),
        copycat_model="x-ai/grok-test:online",
    )


@pytest.fixture
def fake_llm_client():
    from tests.fixtures.mock_clients import FakeLLMClient
    return FakeLLMClient()


@pytest.fixture
def model_gateway(gateway_config, fake_llm_client):
    """ModelGateway wired to the fake HTTP client."""
    from services.model_gateway import ModelGateway
    return ModelGateway(gateway_config, client=fake_llm_client)


@pytest.fixture
def history_store(tmp_path):
    """HistoryStore backed by a temporary SQLite file."""
    from services.history_store import HistoryStore
    return HistoryStore(db_path=str(tmp_path / "history.db"))


@pytest.fixture
def mock_gateway():
    """Gateway mock for tests that don't care about backend details."""
    gateway = MagicMock()
    gateway.ensure_configured = MagicMock(return_value=None)
    gateway.generate = AsyncMock()
    gateway.search = AsyncMock()
    return gateway


@pytest.fixture
def improve_request():
    """Standard ImproveTweetRequest for testing."""
    from models.api_models import ImproveTweetRequest
    return ImproveTweetRequest(
        text="Hello world. This is a short test.",
        addEmojis=False,
        mode="auto",
        visitorId="visitor-1"
    )


@pytest.fixture
def configured_app(model_gateway, history_store):
    """Application client with the gateway and history store replaced."""
    from fastapi.testclient import TestClient
    from main import app
    from services.history_store import get_history_store
    from services.model_gateway import get_model_gateway

    app.dependency_overrides[get_model_gateway] = lambda: model_gateway
    app.dependency_overrides[get_history_store] = lambda: history_store

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
