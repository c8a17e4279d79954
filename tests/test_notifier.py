from __future__ import annotations

import io
import json
from typing import List

import httpx
import pytest

from pocket_slack.notifier import (
    NotifyConnectionError,
    NotifyError,
    NotifyRejectedError,
    SlackWebhookNotifier,
    StdoutNotifier,
    build_notifier,
)

WEBHOOK = "https://hooks.slack.example/services/T000/B000/XXXX"


def _notifier(status: int, body: str, seen: List[httpx.Request]) -> SlackWebhookNotifier:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status, text=body)

    return SlackWebhookNotifier(WEBHOOK, client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_slack_payload_is_json_escaped():
    seen: List[httpx.Request] = []
    text = 'He said "hi" \\ bye ( https://example.com )\nSecond ( https://b.example )\n'

    response = _notifier(200, "ok", seen).send(text)

    assert response == "ok"
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == WEBHOOK
    assert request.headers["Content-Type"] == "application/json"
    raw = request.content.decode("utf-8")
    assert '\\"hi\\"' in raw
    assert "\\n" in raw
    assert json.loads(raw) == {"text": text}


def test_slack_sends_empty_text():
    seen: List[httpx.Request] = []
    _notifier(200, "ok", seen).send("")
    assert json.loads(seen[0].content) == {"text": ""}


def test_slack_error_status_raises_with_body():
    with pytest.raises(NotifyRejectedError) as excinfo:
        _notifier(404, "no_service", []).send("x")
    assert str(excinfo.value) == "no_service"
    assert excinfo.value.status_code == 404


def test_slack_transport_error_raises_connection_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    notifier = SlackWebhookNotifier(WEBHOOK, client=httpx.Client(transport=httpx.MockTransport(handler)))
    with pytest.raises(NotifyConnectionError):
        notifier.send("x")


def test_slack_invalid_url_raises_notify_error():
    with pytest.raises(NotifyError):
        SlackWebhookNotifier("not a url").send("x")


def test_stdout_notifier_writes_verbatim():
    stream = io.StringIO()
    assert StdoutNotifier(stream).send("A ( u )\n") is None
    assert stream.getvalue() == "A ( u )\n"


def test_build_notifier_selection():
    assert build_notifier(send=False, webhook_url=None).provider == "stdout"
    assert build_notifier(send=True, webhook_url=WEBHOOK).provider == "slack"
    with pytest.raises(NotifyError):
        build_notifier(send=True, webhook_url="  ")
