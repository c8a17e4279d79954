from __future__ import annotations

import logging
import sys
from typing import Optional, Protocol, TextIO

import httpx

from .config import REQUEST_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class NotifyError(Exception):
    """Raised when the digest cannot be delivered."""


class NotifyConnectionError(NotifyError):
    """Raised when the webhook is unreachable (network/timeout)."""


class NotifyRejectedError(NotifyError):
    """Raised when the webhook answers with an error status. str() is the response body."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class Notifier(Protocol):
    provider: str

    def send(self, text: str) -> Optional[str]: ...


class StdoutNotifier:
    provider = "stdout"

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    def send(self, text: str) -> Optional[str]:
        stream = self._stream or sys.stdout
        stream.write(text)
        stream.flush()
        return None


class SlackWebhookNotifier:
    provider = "slack"

    def __init__(self, webhook_url: str, client: Optional[httpx.Client] = None):
        self._webhook_url = webhook_url
        self._client = client

    def send(self, text: str) -> Optional[str]:
        payload = {"text": text}
        headers = {"Content-Type": "application/json"}
        try:
            if self._client is not None:
                response = self._client.post(self._webhook_url, json=payload, headers=headers)
            else:
                with httpx.Client(timeout=REQUEST_TIMEOUT_SECONDS) as client:
                    response = client.post(self._webhook_url, json=payload, headers=headers)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise NotifyError(f"Invalid webhook URL: {exc}") from exc
        except httpx.RequestError as exc:
            raise NotifyConnectionError(f"Webhook request failed: {exc}") from exc

        if response.status_code >= 400:
            logger.warning("Webhook returned error status %s", response.status_code)
            raise NotifyRejectedError(response.text, status_code=response.status_code)
        logger.info("Digest posted with status %s (%s chars)", response.status_code, len(text))
        return response.text


def build_notifier(*, send: bool, webhook_url: Optional[str], client: Optional[httpx.Client] = None) -> Notifier:
    """
    Notifier selection:
    - Print to stdout unless sending is requested.
    - Sending requires a webhook URL (flag or SLACK_POCKET_URL).
    """
    if not send:
        return StdoutNotifier()
    if not webhook_url or not webhook_url.strip():
        raise NotifyError("No webhook URL configured: pass -url or set SLACK_POCKET_URL.")
    return SlackWebhookNotifier(webhook_url.strip(), client=client)
