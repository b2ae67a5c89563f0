"""Notion GitHub Sync.

One-way mirror of a GitHub repository's labelled issues into a Notion
database:
- configuration loaded from `.env`
- structured logging
- create/update reconciliation written in fixed-size concurrent batches
"""

__version__ = "0.1.0"

from notion_github_sync.config import SyncSettings

__all__ = ["__version__", "SyncSettings"]
