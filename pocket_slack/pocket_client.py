from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx

from .config import DEFAULT_ITEM_COUNT, GET_PATH, POCKET_API_BASE_URL, REQUEST_TIMEOUT_SECONDS, SEND_PATH
from .models import ItemStatus, MediaPresence, PocketItem
from .utils import (
    as_text,
    newest_first,
    parse_choice,
    parse_flag,
    parse_int,
    parse_optional_int,
    parse_string_map,
    parse_tags,
    parse_unix_timestamp,
    to_unix_timestamp,
    utc_now,
)

logger = logging.getLogger(__name__)


class PocketError(Exception):
    """Raised when Pocket operations fail."""


class PocketConnectionError(PocketError):
    """Raised when Pocket is unreachable (network/timeout)."""


class PocketApiError(PocketError):
    """Raised when Pocket returns an error response. str() is the response body."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.error_message = error_message


class PocketResponseError(PocketError):
    """Raised when a Pocket response cannot be decoded into items."""


class PocketClient:
    def __init__(
        self,
        consumer_key: str,
        access_token: str,
        base_url: str = POCKET_API_BASE_URL,
        client: Optional[httpx.Client] = None,
    ):
        self._consumer_key = consumer_key
        self._access_token = access_token
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(
            headers={"X-Accept": "application/json"}, timeout=REQUEST_TIMEOUT_SECONDS
        )

    def close(self) -> None:
        self._client.close()

    def fetch_unread(self, count: int = DEFAULT_ITEM_COUNT) -> List[PocketItem]:
        logger.info("Fetching up to %s unread items (newest first)", count)
        response = self._get(
            GET_PATH,
            {"state": "unread", "sort": "newest", "count": str(count)},
        )
        data = self._decode(response)
        if not isinstance(data, dict):
            raise PocketResponseError(f"Unexpected Pocket response type: {type(data).__name__}")

        raw_list = data.get("list")
        # An empty list comes back as [] rather than {}.
        if raw_list is None or raw_list == []:
            logger.info("Fetched 0 items")
            return []
        if not isinstance(raw_list, dict):
            raise PocketResponseError(f"Unexpected type for 'list': {type(raw_list).__name__}")

        items: List[PocketItem] = []
        for key, raw in raw_list.items():
            if not isinstance(raw, dict):
                raise PocketResponseError(f"Unexpected item payload for key {key}: {type(raw).__name__}")
            try:
                items.append(self._to_model(raw, fallback_id=str(key)))
            except ValueError as exc:
                raise PocketResponseError(f"Malformed item {key}: {exc}") from exc
        logger.info("Fetched %s items", len(items))
        return newest_first(items)

    def archive_item(self, item: PocketItem, at: Optional[datetime] = None) -> str:
        timestamp = to_unix_timestamp(at or utc_now())
        actions = json.dumps(
            [{"action": "archive", "item_id": item.item_id, "time": str(timestamp)}],
            separators=(",", ":"),
        )
        logger.debug("Archiving item %s at %s", item.item_id, timestamp)
        response = self._get(SEND_PATH, {"actions": actions})
        try:
            data = response.json()
        except ValueError:
            data = None
        results = data.get("action_results") if isinstance(data, dict) else None
        if isinstance(results, list) and any(result is False for result in results):
            raise PocketApiError(
                f"Pocket rejected archive action for item {item.item_id}",
                status_code=response.status_code,
            )
        return f'Title: "{item.title}" is archived'

    def _get(self, path: str, params: Dict[str, str]) -> httpx.Response:
        query = dict(params)
        query["consumer_key"] = self._consumer_key
        query["access_token"] = self._access_token
        try:
            response = self._client.get(f"{self._base_url}{path}", params=query)
        except httpx.InvalidURL as exc:
            raise PocketError(f"Invalid Pocket URL: {exc}") from exc
        except httpx.RequestError as exc:
            logger.warning("Pocket request error GET %s: %s", path, exc)
            raise PocketConnectionError(f"Pocket request failed: {exc}") from exc

        if response.status_code != 200:
            logger.warning(
                "Pocket returned status %s for GET %s (X-Error=%s)",
                response.status_code,
                path,
                response.headers.get("X-Error"),
            )
            raise PocketApiError(
                response.text,
                status_code=response.status_code,
                error_code=response.headers.get("X-Error-Code"),
                error_message=response.headers.get("X-Error"),
            )
        return response

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise PocketResponseError(f"Pocket returned invalid JSON: {exc}") from exc

    @staticmethod
    def _to_model(raw: dict, fallback_id: str = "") -> PocketItem:
        return PocketItem(
            item_id=as_text(raw.get("item_id")) or fallback_id,
            resolved_id=as_text(raw.get("resolved_id")),
            given_url=as_text(raw.get("given_url")),
            given_title=as_text(raw.get("given_title")),
            resolved_url=as_text(raw.get("resolved_url")),
            resolved_title=as_text(raw.get("resolved_title")),
            favorite=parse_flag(raw.get("favorite"), "favorite"),
            status=parse_choice(raw.get("status"), ItemStatus, "status", ItemStatus.UNREAD),
            is_article=parse_flag(raw.get("is_article"), "is_article"),
            is_index=parse_flag(raw.get("is_index"), "is_index"),
            has_video=parse_choice(raw.get("has_video"), MediaPresence, "has_video", MediaPresence.NONE),
            has_image=parse_choice(raw.get("has_image"), MediaPresence, "has_image", MediaPresence.NONE),
            word_count=parse_int(raw.get("word_count"), "word_count"),
            listen_duration_estimate=parse_int(raw.get("listen_duration_estimate"), "listen_duration_estimate"),
            time_added=parse_unix_timestamp(raw.get("time_added")),
            time_updated=parse_unix_timestamp(raw.get("time_updated")),
            time_read=parse_unix_timestamp(raw.get("time_read")),
            time_favorited=parse_unix_timestamp(raw.get("time_favorited")),
            sort_id=parse_optional_int(raw.get("sort_id"), "sort_id"),
            excerpt=as_text(raw.get("excerpt")),
            lang=as_text(raw.get("lang")),
            top_image_url=as_text(raw.get("top_image_url")),
            amp_url=as_text(raw.get("amp_url")),
            domain_metadata=parse_string_map(raw.get("domain_metadata"), "domain_metadata"),
            tags=parse_tags(raw.get("tags")),
        )
