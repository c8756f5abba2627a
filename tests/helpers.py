def assert_error_response(response, status_code, message_fragment):
    """Assert an {"error": ...} body with the given status."""
    assert response.status_code == status_code, f"Expected {status_code}, got {response.status_code}: {response.text}"
    payload = response.json()
    assert "error" in payload, f"'error' is missing from the response: {payload}"
    assert message_fragment.lower() in payload["error"].lower(), \
        f"'{message_fragment}' not found in error message: {payload['error']}"


def history_rows(store, visitor_id):
    """(original_text, improved_text) pairs stored for a visitor."""
    return [(record.original_text, record.improved_text) for record in store.list(visitor_id)]
