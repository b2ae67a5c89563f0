"""Tracker Source: GitHub issues read through PyGithub.

https://docs.github.com/en/rest/issues/issues#list-repository-issues
"""

from __future__ import annotations

import logging
from typing import Protocol

import requests
from github import Auth, Github, GithubException
from github.Issue import Issue as GithubIssue
from github.Repository import Repository

from notion_github_sync.errors import TrackerUnavailable
from notion_github_sync.models import Issue

logger = logging.getLogger(__name__)

ISSUES_PER_PAGE = 100


class TrackerSource(Protocol):
    def fetch_issues(self) -> list[Issue]: ...


class GitHubIssueReader:
    """Reads the labelled issues of one repository, open and closed. Pull requests are omitted."""

    def __init__(
        self,
        *,
        token: str,
        repository: str,
        label: str,
        base_url: str = "https://api.github.com",
        repo: Repository | None = None,
        github_api: Github | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")
        if not repository:
            raise ValueError("GitHub repository is required")

        self._repository_name = repository
        self._label = label
        self._repo = repo

        if repo is not None:
            self._github = None
            logger.debug("Using injected Repository instance")
            return

        auth = Auth.Token(token)
        self._github = github_api or Github(
            auth=auth, base_url=base_url.rstrip("/"), per_page=ISSUES_PER_PAGE
        )

    def _get_repo(self) -> Repository:
        if self._repo is None:
            assert self._github is not None
            self._repo = self._github.get_repo(self._repository_name)
            logger.info(
                "Connected to GitHub repository", extra={"repo": self._repository_name}
            )
        return self._repo

    def fetch_issues(self) -> list[Issue]:
        """Fetch every issue matching the label filter across both states.

        Raises:
            TrackerUnavailable: on transport or authentication failure.
        """

        issues: list[Issue] = []
        skipped_pull_requests = 0
        try:
            repo = self._get_repo()
            labels = [self._label] if self._label else []
            for item in repo.get_issues(state="all", labels=labels):
                if item.pull_request is not None:
                    skipped_pull_requests += 1
                    continue
                issues.append(_issue_from_github(item))
        except (GithubException, requests.RequestException) as e:
            raise TrackerUnavailable(
                f"Could not list issues for {self._repository_name}: {e}"
            ) from e

        logger.debug(
            "Listed GitHub issues",
            extra={
                "repo": self._repository_name,
                "label": self._label,
                "issues": len(issues),
                "pull_requests_skipped": skipped_pull_requests,
            },
        )
        return issues

    def close(self) -> None:
        if self._github is not None:
            self._github.close()


def _issue_from_github(item: GithubIssue) -> Issue:
    return Issue(
        number=item.number,
        title=item.title,
        state="closed" if item.state == "closed" else "open",
        comment_count=item.comments,
        url=item.html_url,
        assignees=tuple(user.login for user in item.assignees),
    )
