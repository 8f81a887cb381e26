"""
Run one crawl from CLI and publish the resulting snapshot.
"""

from __future__ import annotations

import argparse
import json
import sys

from harvester.main import configure_logging
from harvester.scraping.progress import CallbackProgressSink
from harvester.services.snapshot_service import get_snapshot_service


def main() -> int:
    parser = argparse.ArgumentParser(description="Crawl the player listing and refresh the snapshot.")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        help="Override LOG_LEVEL for this run.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not echo progress lines to stderr.",
    )
    args = parser.parse_args()

    configure_logging(args.log_level)
    progress = CallbackProgressSink(lambda line: None if args.quiet else print(line, file=sys.stderr))

    service = get_snapshot_service()
    result = service.refresh(progress=progress)

    snapshot = result.snapshot
    payload = {
        "completed": result.completed,
        "players": len(snapshot.records),
        "pages": snapshot.page_count,
        "checkpoint_page": result.last_page_done,
        "generated_at": snapshot.generated_at.isoformat() if snapshot.generated_at else None,
        "errors": result.errors,
    }
    print(json.dumps(payload, indent=2))
    return 0 if result.completed else 1


if __name__ == "__main__":
    raise SystemExit(main())
