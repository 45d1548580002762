from __future__ import annotations

import httpx
import pytest
import structlog
from structlog.testing import capture_logs

from slack_conversations.client import ConversationsClient
from slack_conversations.config import settings
from slack_conversations.errors import RemoteError
from slack_conversations.utils.logging import log_api_call, redact_token, setup_logging
from tests.conftest import TOKEN


def test_log_api_call_records_outcome():
    with capture_logs() as logs:
        log_api_call("conversations.archive", success=False, duration=0.2, channel_id="C1", error="not_in_channel")

    assert logs == [
        {
            "event": "Slack conversations.archive",
            "log_level": "warning",
            "method": "conversations.archive",
            "success": False,
            "duration": 0.2,
            "channel_id": "C1",
            "error": "not_in_channel",
        }
    ]


@pytest.mark.asyncio
async def test_debug_logs_keys_but_never_the_token(slack):
    slack.respond({"ok": False, "error": "channel_not_found"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(slack.handler)) as http_client:
        client = ConversationsClient(token=TOKEN, http_client=http_client, debug=True)
        with capture_logs() as logs:
            with pytest.raises(RemoteError):
                await client.archive_conversation("C1")

    assert logs[0]["keys"] == ["token", "channel"]
    assert logs[-1]["error"] == "channel_not_found"
    assert all(TOKEN not in str(entry) for entry in logs)


@pytest.fixture()
def restore_structlog():
    yield
    structlog.reset_defaults()


def test_setup_logging_renders_json_by_default(restore_structlog):
    setup_logging("info")

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)
    assert redact_token in processors


def test_setup_logging_reads_level_from_settings(monkeypatch, restore_structlog):
    monkeypatch.setattr(settings, "log_level", "debug")

    setup_logging()

    assert isinstance(structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer)


def test_redact_token_hides_bound_token():
    event = redact_token(None, "info", {"event": "call", "token": TOKEN, "method": "conversations.kick"})

    assert event == {"event": "call", "token": "[redacted]", "method": "conversations.kick"}
