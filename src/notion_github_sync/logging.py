"""JSON log lines for sync runs.

Every line carries the run context (GitHub repository and Notion database) so
output from scheduled runs against different repositories can be told apart.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

PACKAGE_LOGGER = "notion_github_sync"

# Attributes every LogRecord has; anything else on a record came from `extra=`.
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_NOISY_LOGGERS = ("github", "urllib3")


class JsonFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, message, run context, extras."""

    def __init__(self, context: Mapping[str, str] | None = None) -> None:
        super().__init__()
        self._context = dict(context or {})

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self._context:
            payload["run"] = self._context

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(
    level: str,
    *,
    context: Mapping[str, str] | None = None,
    third_party_level: int = logging.WARNING,
) -> None:
    """Send JSON lines to stdout.

    `level` applies to this package's loggers. PyGithub and urllib3 log each
    request, so they stay at `third_party_level` unless `level` is stricter.
    """

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonFormatter(context))
    root.addHandler(handler)

    package_level = logging.getLevelName(level.upper())
    if not isinstance(package_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    logging.getLogger(PACKAGE_LOGGER).setLevel(package_level)
    root.setLevel(min(package_level, third_party_level))
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(package_level, third_party_level))
