"""CLI entrypoint: run one GitHub -> Notion sync and exit."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from notion_github_sync import __version__
from notion_github_sync.config import SyncSettings
from notion_github_sync.logging import configure_logging
from notion_github_sync.sync import run_sync

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notion-github-sync",
        description="Mirror the labelled issues of a GitHub repository into a Notion database",
    )
    parser.add_argument(
        "--version", action="version", version=f"notion-github-sync {__version__}"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute and log what would be created/updated without writing to Notion",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = SyncSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(
        settings.log_level,
        context={"repo": settings.github_repo, "database_id": settings.notion_database_id},
    )

    try:
        result = asyncio.run(run_sync(settings, dry_run=args.dry_run))
    except Exception:
        logger.exception("Sync failed")
        return 1

    logger.info(
        "Sync finished",
        extra={
            "issues_fetched": result.issues_fetched,
            "created": result.created,
            "updated": result.updated,
            "unresolved_assignees": len(result.unresolved_assignees),
            "dry_run": result.dry_run,
        },
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
