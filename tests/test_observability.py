from infrastructure.observability import _scrub_sensitive_data, mask_token, scrub


def test_mask_token():
    assert mask_token(None) == "<none>"
    masked = mask_token("eyJhbGciOiJIUzI1NiJ9.payload.signature")
    assert masked.startswith("eyJhbG")
    assert "signature" not in masked


def test_scrub_sensitive_keys_and_bearer():
    data = {
        "password": "hunter2",
        "headers": {"Authorization": "Bearer abc.def"},
        "note": "sent Bearer abc123 to server",
        "items": [{"token": "x"}],
    }
    clean = scrub(data)
    assert clean["password"] == "[REDACTED]"
    assert clean["headers"]["Authorization"] == "[REDACTED]"
    assert "abc123" not in clean["note"]
    assert clean["items"][0]["token"] == "[REDACTED]"


def test_before_send_scrubs_frame_vars():
    event = {
        "exception": {"values": [{"stacktrace": {"frames": [{"vars": {"password": "pw", "username": "ana"}}]}}]},
        "request": {"data": {"password": "pw"}},
    }
    out = _scrub_sensitive_data(event, {})
    frame_vars = out["exception"]["values"][0]["stacktrace"]["frames"][0]["vars"]
    assert frame_vars == {"password": "[REDACTED]", "username": "ana"}
    assert out["request"]["data"]["password"] == "[REDACTED]"
