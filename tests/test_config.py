from __future__ import annotations

import pytest

from pocket_slack.config import RunOptions, Settings


def test_from_env_reads_credentials_and_webhook(monkeypatch):
    monkeypatch.setenv("POCKET_CONSUMER_KEY", "ck")
    monkeypatch.setenv("POCKET_ACCESS_TOKEN", " at ")
    monkeypatch.setenv("SLACK_POCKET_URL", "https://hooks.slack.example/T/B/X")

    settings = Settings.from_env()

    assert settings.consumer_key == "ck"
    assert settings.access_token == "at"
    assert settings.slack_url == "https://hooks.slack.example/T/B/X"


def test_from_env_webhook_is_optional(monkeypatch):
    monkeypatch.setenv("POCKET_CONSUMER_KEY", "ck")
    monkeypatch.setenv("POCKET_ACCESS_TOKEN", "at")
    monkeypatch.delenv("SLACK_POCKET_URL", raising=False)

    assert Settings.from_env().slack_url is None


@pytest.mark.parametrize("missing", ["POCKET_CONSUMER_KEY", "POCKET_ACCESS_TOKEN"])
def test_from_env_requires_credentials(monkeypatch, missing):
    monkeypatch.setenv("POCKET_CONSUMER_KEY", "ck")
    monkeypatch.setenv("POCKET_ACCESS_TOKEN", "at")
    monkeypatch.setenv(missing, "  ")

    with pytest.raises(ValueError) as excinfo:
        Settings.from_env()

    assert missing in str(excinfo.value)


def test_run_options_defaults_and_validation():
    options = RunOptions()
    assert options.archive is False
    assert options.count == 10
    assert options.send is False
    with pytest.raises(ValueError):
        RunOptions(count=0)
