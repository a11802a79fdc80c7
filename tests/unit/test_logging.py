"""Tests for logging processors."""

from airos.config.logging import redact_secrets


def test_redact_secrets_masks_credentials():
    event = redact_secrets(
        None, "info", {"event": "login_failed", "email": "a@b.c", "password": "hunter2"}
    )
    assert event["password"] == "***"
    assert event["email"] == "a@b.c"


def test_redact_secrets_leaves_other_events_alone():
    event = {"event": "stock_reserved", "product_id": 1, "quantity": 2}
    assert redact_secrets(None, "info", dict(event)) == event
