from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from .models import PocketItem

E = TypeVar("E", bound=Enum)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_unix_timestamp(dt: datetime) -> int:
    return int(dt.timestamp())


def parse_unix_timestamp(value: Any) -> Optional[datetime]:
    """Pocket sends timestamps as Unix-second strings; "0" means "never"."""
    if value is None or value == "":
        return None
    try:
        seconds = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid timestamp: {value!r}") from exc
    if seconds == 0:
        return None
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise ValueError(f"Timestamp out of range: {value!r}") from exc


def parse_flag(value: Any, name: str) -> bool:
    if value is None or value == "":
        return False
    text = str(value)
    if text == "0":
        return False
    if text == "1":
        return True
    raise ValueError(f"Invalid value for {name}: {value!r} (expected '0' or '1')")


def parse_choice(value: Any, enum_cls: Type[E], name: str, default: E) -> E:
    if value is None or value == "":
        return default
    try:
        return enum_cls(str(value))
    except ValueError as exc:
        allowed = ", ".join(repr(m.value) for m in enum_cls)
        raise ValueError(f"Invalid value for {name}: {value!r} (expected one of {allowed})") from exc


def parse_int(value: Any, name: str) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError(f"Invalid integer for {name}: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid integer for {name}: {value!r}") from exc


def parse_optional_int(value: Any, name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return parse_int(value, name)


def as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def parse_string_map(value: Any, name: str) -> Dict[str, str]:
    if value is None or value == [] or value == "":
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Invalid mapping for {name}: {type(value).__name__}")
    return {str(k): as_text(v) for k, v in value.items()}


def parse_tags(value: Any) -> Dict[str, Dict[str, str]]:
    # Pocket omits "tags" for untagged items and may send [] instead of {}.
    if value is None or value == [] or value == "":
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Invalid mapping for tags: {type(value).__name__}")
    return {str(tag): parse_string_map(attrs, f"tags[{tag}]") for tag, attrs in value.items()}


def newest_first(items: Iterable[PocketItem]) -> List[PocketItem]:
    """
    Order items the way the server ranked them for sort=newest.

    Pocket returns the list as a JSON object, so its key order carries no
    meaning. sort_id is the server-side rank; items without one go last,
    newest time_added first, with item_id as the final tie-breaker.
    """

    def key(item: PocketItem) -> tuple:
        added = item.time_added.timestamp() if item.time_added else 0.0
        if item.sort_id is not None:
            return (0, item.sort_id, -added, item.item_id)
        return (1, 0, -added, item.item_id)

    return sorted(items, key=key)
