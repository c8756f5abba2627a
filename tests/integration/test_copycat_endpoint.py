import json
import httpx
import pytest

from tests.fixtures.responses import openrouter_payload, COPYCAT_JSON, ANNOTATIONS
from tests.helpers import assert_error_response


def test_targeted_search_returns_parsed_results(configured_app, fake_llm_client):
    """Given a targeted request, the endpoint should return parsed matches and citations."""
    fake_llm_client.queue((200, openrouter_payload(f"```json\n{COPYCAT_JSON}\n```", annotations=ANNOTATIONS)))

    response = configured_app.post("/api/copycat", json={
        "originalTweet": "Unique catchy phrase",
        "originalDate": "2025-01-15",
        "suspects": ["@copier", "innocent"],
        "searchMode": "targeted"
    })

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["searchMode"] == "targeted"
    assert payload["originalTweetInfo"]["date"] == "2025-01-15"
    assert payload["results"][0]["isCopycat"] is True
    assert payload["results"][0]["matchedTweet"]["similarity"] == "98%"
    assert payload["summary"] == "1 of 2 suspects copied the tweet"
    assert payload["annotations"] == ANNOTATIONS
    assert isinstance(payload["processingTime"], int)

    prompt = fake_llm_client.call_history[0]["json"]["messages"][0]["content"]
    assert "1. @copier\n2. @innocent\n" in prompt


def test_open_search_without_suspects_is_accepted(configured_app, fake_llm_client):
    """Given open mode and no suspects, the request should be accepted and report searchMode=open."""
    fake_llm_client.queue((200, openrouter_payload('{"results": [], "summary": "No copycats found"}')))

    response = configured_app.post("/api/copycat", json={
        "originalTweet": "Unique catchy phrase",
        "searchMode": "open"
    })

    assert response.status_code == 200
    payload = response.json()
    assert payload["searchMode"] == "open"
    assert payload["results"] == []
    assert payload["annotations"] == []


@pytest.mark.parametrize("suspects, message", [
    ([], "At least one suspect handle is required"),
    (["a", "b", "c", "d", "e", "f"], "Maximum 5 suspects allowed"),
])
def test_targeted_suspect_count_is_validated(configured_app, fake_llm_client, suspects, message):
    response = configured_app.post("/api/copycat", json={"originalTweet": "text", "suspects": suspects})

    assert_error_response(response, 400, message)
    assert fake_llm_client.call_history == []


def test_five_suspects_are_accepted(configured_app, fake_llm_client):
    fake_llm_client.queue((200, openrouter_payload('{"results": [], "summary": "none"}')))

    response = configured_app.post("/api/copycat", json={
        "tweetUrl": "https://x.com/me/status/1",
        "suspects": ["a", "b", "c", "d", "e"]
    })

    assert response.status_code == 200


def test_missing_tweet_and_url_returns_400(configured_app):
    response = configured_app.post("/api/copycat", json={"searchMode": "open"})

    assert_error_response(response, 400, "Either original tweet text or tweet URL is required")


def test_non_json_answer_returns_raw_response(configured_app, fake_llm_client):
    fake_llm_client.queue((200, openrouter_payload("I could not reach X search.")))

    response = configured_app.post("/api/copycat", json={"originalTweet": "text", "searchMode": "open"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["rawResponse"] == "I could not reach X search."
    assert payload["parseWarning"] == "Response was not valid JSON, showing raw output"


def test_empty_answer_returns_503(configured_app, fake_llm_client):
    fake_llm_client.queue((200, openrouter_payload("")))

    response = configured_app.post("/api/copycat", json={"originalTweet": "text", "searchMode": "open"})

    assert_error_response(response, 503, "No response from AI model")


def test_backend_error_returns_500(configured_app, fake_llm_client):
    fake_llm_client.queue(httpx.ConnectError("network down"))

    response = configured_app.post("/api/copycat", json={"originalTweet": "text", "searchMode": "open"})

    assert_error_response(response, 500, "Failed to detect copycats: network down")
    assert len(fake_llm_client.call_history) == 1


def test_targeted_answer_with_null_fields_keeps_results(configured_app, fake_llm_client):
    """Given a match with null explanation and matchedTweet, the results should still come back parsed."""
    answer = json.dumps({
        "originalTweetInfo": {"content": "Unique catchy phrase", "date": None, "url": None},
        "results": [{"suspect": "@innocent", "isCopycat": False, "confidence": "low",
                     "matchedTweet": None, "explanation": None}],
        "summary": "0 of 1 suspects copied the tweet"
    })
    fake_llm_client.queue((200, openrouter_payload(answer, annotations=ANNOTATIONS)))

    response = configured_app.post("/api/copycat", json={
        "originalTweet": "Unique catchy phrase",
        "suspects": ["@innocent"],
        "searchMode": "targeted"
    })

    assert response.status_code == 200
    payload = response.json()
    assert "rawResponse" not in payload
    assert "parseWarning" not in payload
    assert payload["results"][0]["suspect"] == "@innocent"
    assert payload["results"][0]["explanation"] == ""
    assert payload["results"][0]["matchedTweet"] is None
    assert payload["summary"] == "0 of 1 suspects copied the tweet"
    assert payload["annotations"] == ANNOTATIONS


def test_json_answer_with_unexpected_shape_is_passed_through(configured_app, fake_llm_client):
    """Given valid JSON in an unexpected shape, the parsed object should be returned with search metadata."""
    fake_llm_client.queue((200, openrouter_payload('{"results": "none found", "summary": "Nothing"}')))

    response = configured_app.post("/api/copycat", json={
        "originalTweet": "Unique catchy phrase",
        "searchMode": "open"
    })

    assert response.status_code == 200
    payload = response.json()
    assert payload["results"] == "none found"
    assert payload["summary"] == "Nothing"
    assert payload["searchMode"] == "open"
    assert payload["annotations"] == []
    assert "rawResponse" not in payload
