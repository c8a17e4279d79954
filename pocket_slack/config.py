from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

# --------------------------------
# 設定値

# Pocket API
POCKET_API_BASE_URL = "https://getpocket.com"
GET_PATH = "/v3/get"
SEND_PATH = "/v3/send"

# 1回の実行で取得する最大件数
DEFAULT_ITEM_COUNT = 10

# HTTP タイムアウト（秒）
REQUEST_TIMEOUT_SECONDS = 20.0

# 環境変数名
ENV_CONSUMER_KEY = "POCKET_CONSUMER_KEY"
ENV_ACCESS_TOKEN = "POCKET_ACCESS_TOKEN"
ENV_SLACK_URL = "SLACK_POCKET_URL"
# --------------------------------


@dataclass
class Settings:
    consumer_key: str
    access_token: str
    slack_url: Optional[str] = None

    @staticmethod
    def from_env() -> "Settings":
        def require(name: str) -> str:
            value = os.getenv(name)
            if value is None or not value.strip():
                raise ValueError(f"Environment variable {name} is required.")
            return value.strip()

        def optional(name: str) -> str | None:
            value = os.getenv(name)
            if value is None or not value.strip():
                return None
            return value.strip()

        return Settings(
            consumer_key=require(ENV_CONSUMER_KEY),
            access_token=require(ENV_ACCESS_TOKEN),
            slack_url=optional(ENV_SLACK_URL),
        )


@dataclass(frozen=True)
class RunOptions:
    archive: bool = False
    count: int = DEFAULT_ITEM_COUNT
    send: bool = False
    webhook_url: Optional[str] = None

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError(f"Item count must be positive (got {self.count}).")
