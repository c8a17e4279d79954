from __future__ import annotations

import argparse
import logging
import sys

from . import config
from .notifier import NotifyError
from .orchestrator import run
from .pocket_client import PocketError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"item count must be positive: {number}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pocket-slack",
        description="Print unread Pocket items, optionally archive them and post the list to Slack.",
    )
    parser.add_argument("-a", dest="archive", action="store_true", help="archive flag: default false")
    parser.add_argument(
        "-n", dest="count", type=_positive_int, default=config.DEFAULT_ITEM_COUNT, help="item count"
    )
    parser.add_argument("-s", dest="send", action="store_true", help="send slack flag: default false")
    parser.add_argument(
        "-url",
        dest="url",
        default=None,
        help=f"slack channel url: env value of {config.ENV_SLACK_URL}",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = config.Settings.from_env()
    except ValueError as exc:
        logger.error("Missing configuration: %s", exc)
        return EXIT_CONFIG_ERROR

    options = config.RunOptions(
        archive=args.archive,
        count=args.count,
        send=args.send,
        webhook_url=args.url if args.url is not None else settings.slack_url,
    )
    if options.send and not options.webhook_url:
        logger.error("Missing configuration: pass -url or set %s to send to Slack.", config.ENV_SLACK_URL)
        return EXIT_CONFIG_ERROR

    try:
        report = run(settings, options)
    except PocketError as exc:
        logger.error("Fetching from Pocket failed: %s", exc)
        return EXIT_FAILURE
    except NotifyError as exc:
        logger.error("Posting to Slack failed: %s", exc)
        return EXIT_FAILURE

    if report.notify_response is not None:
        print(report.notify_response)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
