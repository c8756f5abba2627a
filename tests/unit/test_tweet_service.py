import pytest

from models.api_models import ImproveTweetRequest
from services.tweet_service import TweetService
from services.response_normalizer import ResponseNormalizer
from tests.fixtures.responses import SINGLE_TWEET_JSON, THREAD_JSON
from utils.constants import SINGLE_TWEET_PROMPT, EMOJI_OFF_INSTRUCTION, PARSE_WARNING
from utils.exceptions import ConfigurationError, UpstreamUnavailableError


@pytest.mark.anyio
async def test_short_text_scenario_uses_single_template_and_persists(improve_request, mock_gateway, history_store):
    """Given a short auto-mode text with a visitor id, the single template is used and a non-thread entry is stored."""
    mock_gateway.generate.return_value = SINGLE_TWEET_JSON

    response = await TweetService.improve(improve_request, mock_gateway, history_store)

    prompt = mock_gateway.generate.call_args.args[0]
    assert prompt.startswith(SINGLE_TWEET_PROMPT)
    assert EMOJI_OFF_INSTRUCTION in prompt

    assert response["success"] is True
    assert response["type"] == "single"
    assert response["isThread"] is False
    assert response["characterCount"] == len(response["tweets"][0])

    records = history_store.list("visitor-1")
    assert len(records) == 1
    assert records[0].is_thread is False
    assert records[0].mode == "auto"
    assert records[0].original_text == "Hello world. This is a short test."


@pytest.mark.anyio
async def test_thread_is_stored_with_separator(mock_gateway, history_store):
    """Given a thread result, the stored improved text should join tweets with the separator line."""
    mock_gateway.generate.return_value = THREAD_JSON
    request = ImproveTweetRequest(text="x" * 600, visitorId="visitor-9")

    response = await TweetService.improve(request, mock_gateway, history_store)

    assert response["isThread"] is True
    assert response["totalTweets"] == 3
    stored = history_store.list("visitor-9")[0]
    assert stored.is_thread is True
    assert stored.improved_text == "\n---\n".join(response["tweets"])


@pytest.mark.anyio
async def test_without_visitor_id_nothing_is_stored(mock_gateway, history_store, mocker):
    mock_gateway.generate.return_value = SINGLE_TWEET_JSON
    record_spy = mocker.spy(history_store, "record")

    await TweetService.improve(ImproveTweetRequest(text="no visitor here"), mock_gateway, history_store)

    record_spy.assert_not_called()


@pytest.mark.anyio
async def test_raw_text_fallback_is_returned_but_not_stored(improve_request, mock_gateway, history_store):
    """Given a non-JSON answer, the raw text comes back with a warning and no history entry is written."""
    mock_gateway.generate.return_value = "Just a plain tweet."

    response = await TweetService.improve(improve_request, mock_gateway, history_store)

    assert response["tweets"] == ["Just a plain tweet."]
    assert response["parseWarning"] == PARSE_WARNING
    assert response["isThread"] is False
    assert "rawData" not in response
    assert history_store.list("visitor-1") == []


@pytest.mark.anyio
async def test_persistence_failure_does_not_change_response(improve_request, mock_gateway, history_store, monkeypatch):
    """Given a failing store, the generation response should still be returned."""
    mock_gateway.generate.return_value = SINGLE_TWEET_JSON

    def failing_insert(entry):
        from utils.exceptions import PersistenceError
        raise PersistenceError("disk full")

    monkeypatch.setattr(history_store, "insert", failing_insert)

    response = await TweetService.improve(improve_request, mock_gateway, history_store)
    assert response["success"] is True


@pytest.mark.anyio
async def test_configuration_error_short_circuits(improve_request, mock_gateway, history_store):
    mock_gateway.ensure_configured.side_effect = ConfigurationError("OPENROUTER_API_KEY not configured")

    with pytest.raises(ConfigurationError):
        await TweetService.improve(improve_request, mock_gateway, history_store)

    mock_gateway.generate.assert_not_called()


@pytest.mark.anyio
async def test_unavailable_gateway_writes_no_history(improve_request, mock_gateway, history_store):
    mock_gateway.generate.side_effect = UpstreamUnavailableError("All AI models are currently unavailable.")

    with pytest.raises(UpstreamUnavailableError):
        await TweetService.improve(improve_request, mock_gateway, history_store)

    assert history_store.list("visitor-1") == []


def test_build_response_includes_raw_data():
    result = ResponseNormalizer.normalize_tweets(SINGLE_TWEET_JSON)

    response = TweetService.build_response(result)

    assert response["rawData"]["type"] == "single"
    assert response["totalTweets"] == 1
    assert "parseWarning" not in response
