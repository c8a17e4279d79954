from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional


class ItemStatus(Enum):
    UNREAD = "0"
    ARCHIVED = "1"
    DELETED = "2"


class MediaPresence(Enum):
    NONE = "0"
    HAS = "1"  # item contains videos/images
    IS = "2"  # item is itself a video/image


@dataclass(frozen=True)
class PocketItem:
    item_id: str
    resolved_id: str = ""
    given_url: str = ""
    given_title: str = ""
    resolved_url: str = ""
    resolved_title: str = ""
    favorite: bool = False
    status: ItemStatus = ItemStatus.UNREAD
    is_article: bool = False
    is_index: bool = False
    has_video: MediaPresence = MediaPresence.NONE
    has_image: MediaPresence = MediaPresence.NONE
    word_count: int = 0
    listen_duration_estimate: int = 0
    time_added: Optional[datetime] = None
    time_updated: Optional[datetime] = None
    time_read: Optional[datetime] = None
    time_favorited: Optional[datetime] = None
    sort_id: Optional[int] = None
    excerpt: str = ""
    lang: str = ""
    top_image_url: str = ""
    amp_url: str = ""
    domain_metadata: Dict[str, str] = field(default_factory=dict)
    tags: Dict[str, Dict[str, str]] = field(default_factory=dict)

    @property
    def title(self) -> str:
        return self.resolved_title if self.resolved_title else self.given_title

    @property
    def url(self) -> str:
        return self.resolved_url if self.resolved_url else self.given_url


@dataclass
class ArchiveResult:
    item: PocketItem
    status: str  # "success" | "failed"
    message: Optional[str] = None
    error: Optional[str] = None

    def is_success(self) -> bool:
        return self.status == "success"


@dataclass
class RunReport:
    text: str
    items: List[PocketItem] = field(default_factory=list)
    archive_results: List[ArchiveResult] = field(default_factory=list)
    notify_response: Optional[str] = None
