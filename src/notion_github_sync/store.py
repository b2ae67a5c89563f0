"""Record Store: the Notion database that mirrors GitHub issues.

This intentionally talks to the Notion REST API through a plain requests
session so the sync code only ever sees the `RecordStore` protocol.

https://developers.notion.com/reference/post-database-query
https://developers.notion.com/reference/post-page
https://developers.notion.com/reference/patch-page
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any, Protocol

import requests

from notion_github_sync.errors import RecordRejected, StoreUnavailable
from notion_github_sync.models import StoreRecord
from notion_github_sync.properties import issue_number_from_properties

logger = logging.getLogger(__name__)

QUERY_PAGE_SIZE = 100


class RecordStore(Protocol):
    def iter_records(self) -> Iterator[StoreRecord]: ...

    def create_record(self, properties: dict[str, Any]) -> str: ...

    def update_record(self, record_id: str, properties: dict[str, Any]) -> None: ...


class NotionClient:
    """Small wrapper around the Notion REST endpoints the sync needs."""

    def __init__(
        self,
        *,
        token: str,
        database_id: str,
        base_url: str = "https://api.notion.com",
        notion_version: str = "2022-06-28",
        timeout: float = 30,
        session: requests.Session | None = None,
    ) -> None:
        if not token:
            raise ValueError("Notion token is required")
        if not database_id:
            raise ValueError("Notion database id is required")

        self._database_id = database_id
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Notion-Version": notion_version,
                "Content-Type": "application/json",
                "User-Agent": "notion-github-sync",
            }
        )

    def _url(self, path: str) -> str:
        return f"{self._base_url}/v1/{path.lstrip('/')}"

    def _request(self, method: str, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        url = self._url(path)
        try:
            resp = self._session.request(method, url, json=payload, timeout=self._timeout)
        except requests.RequestException as e:
            raise StoreUnavailable(f"Notion request failed: {method} {url}: {e}") from e

        if resp.status_code in (401, 403):
            raise StoreUnavailable(
                f"Notion rejected our credentials ({resp.status_code}) for {method} {url}"
            )
        if resp.status_code >= 400:
            raise RecordRejected(resp.status_code, _error_message(resp))

        try:
            data = resp.json()
        except ValueError as e:
            raise StoreUnavailable(f"Notion returned invalid JSON for {method} {url}") from e
        if not isinstance(data, dict):
            raise StoreUnavailable(f"Unexpected Notion response for {method} {url}")
        return data

    def iter_records(self) -> Iterator[StoreRecord]:
        """Yield every page of the database, following `next_cursor` until exhausted."""

        cursor: str | None = None
        page = 0
        while True:
            payload: dict[str, Any] = {"page_size": QUERY_PAGE_SIZE}
            if cursor:
                payload["start_cursor"] = cursor

            try:
                data = self._request("POST", f"databases/{self._database_id}/query", payload)
            except RecordRejected as e:
                raise StoreUnavailable(f"Could not query Notion database: {e}") from e

            page += 1
            results = data.get("results")
            if not isinstance(results, list):
                raise StoreUnavailable("Unexpected database query response: missing results")
            logger.debug(
                "Fetched Notion query page",
                extra={"page": page, "count": len(results)},
            )

            for item in results:
                yield _record_from_page(item)

            next_cursor = data.get("next_cursor")
            if not data.get("has_more", bool(next_cursor)) or not next_cursor:
                return
            cursor = next_cursor

    def create_record(self, properties: dict[str, Any]) -> str:
        data = self._request(
            "POST",
            "pages",
            {
                "parent": {"database_id": self._database_id},
                "properties": properties,
            },
        )
        return str(data.get("id", ""))

    def update_record(self, record_id: str, properties: dict[str, Any]) -> None:
        if not record_id.strip():
            raise ValueError("record_id is required")
        self._request("PATCH", f"pages/{record_id}", {"properties": properties})

    def close(self) -> None:
        self._session.close()


def _record_from_page(page: object) -> StoreRecord:
    if not isinstance(page, dict):
        raise StoreUnavailable("Unexpected database query response: page is not an object")
    page_id = page.get("id")
    if not isinstance(page_id, str) or not page_id.strip():
        raise StoreUnavailable("Unexpected database query response: page without id")
    properties = page.get("properties")
    return StoreRecord(
        record_id=page_id,
        issue_number=issue_number_from_properties(
            properties if isinstance(properties, dict) else {}
        ),
    )


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return resp.text
