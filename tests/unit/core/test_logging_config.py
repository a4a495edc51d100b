import logging

from daydiary.core.logging_config import MASK, _resolve_log_level, _sanitize_data, log_media_action


def test_sensitive_keys_are_masked_recursively():
    data = {
        "media_host_api_secret": "s3cret",
        "nested": {"api_key": "abc", "public_id": "xyz"},
        "items": [{"signature": "deadbeef"}],
    }

    assert _sanitize_data(data) == {
        "media_host_api_secret": MASK,
        "nested": {"api_key": MASK, "public_id": "xyz"},
        "items": [{"signature": MASK}],
    }


def test_connection_url_password_is_hidden():
    assert _sanitize_data("postgresql://diary:hunter2@db:5432/diary") == "postgresql://diary:***@db:5432/diary"
    assert _sanitize_data("https://res.cloudinary.com/demo/a.jpg") == "https://res.cloudinary.com/demo/a.jpg"


def test_long_opaque_tokens_are_masked():
    assert _sanitize_data("a" * 80) == MASK


def test_resolve_log_level():
    assert _resolve_log_level("debug") == (logging.DEBUG, False)
    assert _resolve_log_level("30") == (logging.WARNING, False)
    assert _resolve_log_level("loud") == (logging.INFO, True)


def test_media_action_context_is_sanitized(caplog):
    with caplog.at_level(logging.INFO, logger="app.media"):
        log_media_action("registered", 4, request_id="req-1", name="cat.png", api_key="k")

    message = caplog.records[-1].getMessage()
    assert message.startswith("[req-1] Media 4 registered")
    assert "name=cat.png" in message
    assert f"api_key={MASK}" in message
