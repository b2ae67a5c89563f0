"""Test configuration and fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

SETTINGS_ENV_VARS = (
    "GITHUB_TOKEN",
    "GITHUB_REPO",
    "GITHUB_BASE_URL",
    "GITHUB_LABEL",
    "NOTION_TOKEN",
    "NOTION_DATABASE_ID",
    "NOTION_BASE_URL",
    "NOTION_VERSION",
    "NOTION_USER_IDS",
    "SYNC_BATCH_SIZE",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate settings from the developer's environment and `.env` file."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def sync_env(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide a complete, valid environment for SyncSettings."""
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    monkeypatch.setenv("GITHUB_REPO", "octo-org/octo-repo")
    monkeypatch.setenv("NOTION_TOKEN", "notion-token")
    monkeypatch.setenv("NOTION_DATABASE_ID", "db-1")
    return clean_env
