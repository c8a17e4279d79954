from __future__ import annotations

import logging
from typing import List, Optional

from . import config
from .formatter import build_digest_text
from .models import ArchiveResult, PocketItem, RunReport
from .notifier import Notifier, build_notifier
from .pocket_client import PocketClient, PocketError

logger = logging.getLogger(__name__)


def run(
    settings: config.Settings,
    options: config.RunOptions,
    *,
    client: Optional[PocketClient] = None,
    notifier: Optional[Notifier] = None,
) -> RunReport:
    # Resolve the notifier first so a missing webhook URL fails before anything is archived.
    notifier = notifier or build_notifier(send=options.send, webhook_url=options.webhook_url)
    pocket = client or PocketClient(consumer_key=settings.consumer_key, access_token=settings.access_token)
    logger.info("Using notifier=%s archive=%s count=%s", notifier.provider, options.archive, options.count)

    try:
        items = pocket.fetch_unread(options.count)
        text = build_digest_text(items)

        archive_results: List[ArchiveResult] = []
        if options.archive:
            for idx, item in enumerate(items, start=1):
                logger.debug("Archiving item %s/%s id=%s", idx, len(items), item.item_id)
                archive_results.append(_archive_one(pocket, item))
            _log_archive_counts(archive_results)

        response = notifier.send(text)
        return RunReport(
            text=text,
            items=items,
            archive_results=archive_results,
            notify_response=response,
        )
    finally:
        pocket.close()


def _archive_one(pocket: PocketClient, item: PocketItem) -> ArchiveResult:
    try:
        message = pocket.archive_item(item)
    except PocketError as exc:
        logger.warning("Failed to archive item %s (%s): %s", item.item_id, item.title, exc)
        return ArchiveResult(item=item, status="failed", error=str(exc))
    logger.info(message)
    return ArchiveResult(item=item, status="success", message=message)


def _log_archive_counts(results: List[ArchiveResult]) -> None:
    success = len([r for r in results if r.is_success()])
    failure = len(results) - success
    logger.info("Archive completed. Total=%s Success=%s Failure=%s", len(results), success, failure)
