"""Unit tests for the CLI entrypoint."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock

import pytest

from notion_github_sync import main as main_module
from notion_github_sync.config import SyncSettings
from notion_github_sync.errors import WriteFailed
from notion_github_sync.sync import SyncResult


@pytest.fixture
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> Mock:
    configure = Mock()
    monkeypatch.setattr(main_module, "configure_logging", configure)
    return configure


def test_main_runs_one_sync(
    sync_env: Path, quiet_logging: Mock, monkeypatch: pytest.MonkeyPatch
) -> None:
    calls: list[tuple[SyncSettings, bool]] = []

    async def fake_run_sync(settings: SyncSettings, *, dry_run: bool = False) -> SyncResult:
        calls.append((settings, dry_run))
        return SyncResult(known_issues=0, issues_fetched=1, created=1, updated=0)

    monkeypatch.setattr(main_module, "run_sync", fake_run_sync)

    assert main_module.main([]) == 0
    assert len(calls) == 1
    assert calls[0][0].github_repo == "octo-org/octo-repo"
    assert calls[0][1] is False
    quiet_logging.assert_called_once_with(
        "INFO", context={"repo": "octo-org/octo-repo", "database_id": "db-1"}
    )


def test_main_passes_dry_run(
    sync_env: Path, quiet_logging: Mock, monkeypatch: pytest.MonkeyPatch
) -> None:
    seen: list[bool] = []

    async def fake_run_sync(settings: SyncSettings, *, dry_run: bool = False) -> SyncResult:
        seen.append(dry_run)
        return SyncResult(known_issues=0, issues_fetched=0, created=0, updated=0, dry_run=dry_run)

    monkeypatch.setattr(main_module, "run_sync", fake_run_sync)

    assert main_module.main(["--dry-run"]) == 0
    assert seen == [True]


def test_main_reports_configuration_errors(
    clean_env: Path, quiet_logging: Mock, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main_module.main([]) == 2

    assert "Configuration error" in capsys.readouterr().err
    quiet_logging.assert_not_called()


def test_main_rejects_unknown_log_level(
    sync_env: Path,
    quiet_logging: Mock,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    assert main_module.main([]) == 2

    assert "LOG_LEVEL" in capsys.readouterr().err
    quiet_logging.assert_not_called()


def test_main_returns_failure_when_sync_aborts(
    sync_env: Path, quiet_logging: Mock, monkeypatch: pytest.MonkeyPatch
) -> None:
    async def failing_run_sync(settings: SyncSettings, *, dry_run: bool = False) -> SyncResult:
        raise WriteFailed(7, "create")

    monkeypatch.setattr(main_module, "run_sync", failing_run_sync)

    assert main_module.main([]) == 1


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["--version"])

    assert excinfo.value.code == 0
    assert "notion-github-sync 0.1.0" in capsys.readouterr().out
