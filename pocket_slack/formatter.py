from __future__ import annotations

from typing import Iterable

from .models import PocketItem


def format_item_line(item: PocketItem) -> str:
    return f"{item.title} ( {item.url} )\n"


def build_digest_text(items: Iterable[PocketItem]) -> str:
    return "".join(format_item_line(item) for item in items)
