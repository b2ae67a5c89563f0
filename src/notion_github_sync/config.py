"""Configuration for the GitHub -> Notion sync.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Credentials and identifiers use the same variable names the sync has always
used (`GITHUB_TOKEN`, `NOTION_TOKEN`, `NOTION_DATABASE_ID`, `GITHUB_REPO`).
"""

from __future__ import annotations

import logging

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BATCH_SIZE = 10


class SyncSettings(BaseSettings):
    """Settings for a single sync run.

    Environment variables:
    - GITHUB_TOKEN
    - GITHUB_REPO          ("owner/name")
    - NOTION_TOKEN
    - NOTION_DATABASE_ID
    - GITHUB_BASE_URL      (optional)
    - GITHUB_LABEL         (optional)
    - NOTION_BASE_URL      (optional)
    - NOTION_VERSION       (optional)
    - NOTION_USER_IDS      (optional, JSON object of GitHub login -> Notion user id)
    - SYNC_BATCH_SIZE      (optional)
    - LOG_LEVEL            (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `SyncSettings(_env_file=path_to_env)`.
    """

    github_token: str = Field(
        default="",
        validation_alias="GITHUB_TOKEN",
        description="GitHub token used for API authentication",
    )
    github_repo: str = Field(
        default="",
        validation_alias="GITHUB_REPO",
        description="Repository to read issues from, in the form 'owner/name'",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )
    github_label: str = Field(
        default="P0",
        validation_alias="GITHUB_LABEL",
        description="Only issues carrying this label are synced",
    )

    notion_token: str = Field(
        default="",
        validation_alias="NOTION_TOKEN",
        description="Notion integration token",
    )
    notion_database_id: str = Field(
        default="",
        validation_alias="NOTION_DATABASE_ID",
        description="Notion database that mirrors the issues",
    )
    notion_base_url: str = Field(
        default="https://api.notion.com",
        validation_alias="NOTION_BASE_URL",
        description="Notion API base URL",
    )
    notion_version: str = Field(
        default="2022-06-28",
        validation_alias="NOTION_VERSION",
        description="Value sent in the Notion-Version header",
    )
    notion_user_ids: dict[str, str] = Field(
        default_factory=dict,
        validation_alias="NOTION_USER_IDS",
        description=(
            "GitHub login -> Notion user id lookup used to fill the Assignees property. "
            "Logins missing from the table are dropped from the synced page."
        ),
    )

    batch_size: int = Field(
        default=DEFAULT_BATCH_SIZE,
        gt=0,
        validation_alias="SYNC_BATCH_SIZE",
        description="Maximum number of concurrent Notion writes",
    )
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level for this package; PyGithub and urllib3 stay at WARNING",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("github_repo")
    @classmethod
    def _normalize_repo(cls, value: str) -> str:
        return value.strip().strip("/")

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL must be one of the standard logging levels, got {value!r}")
        return level

    @model_validator(mode="after")
    def _require_credentials(self) -> SyncSettings:
        missing = [
            name
            for name, value in (
                ("GITHUB_TOKEN", self.github_token),
                ("GITHUB_REPO", self.github_repo),
                ("NOTION_TOKEN", self.notion_token),
                ("NOTION_DATABASE_ID", self.notion_database_id),
            )
            if not value.strip()
        ]
        if missing:
            raise ValueError(f"Missing required settings: {', '.join(missing)}")

        owner, sep, name = self.github_repo.partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError("GITHUB_REPO must be in the form 'owner/name'")
        return self

