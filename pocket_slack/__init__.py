"""Post unread Pocket items to Slack."""

__all__ = [
    "config",
    "models",
    "pocket_client",
    "formatter",
    "notifier",
    "orchestrator",
    "cli",
]
