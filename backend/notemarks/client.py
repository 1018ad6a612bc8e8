"""Python client for the Notemarks HTTP API.

    with NotemarksClient("http://localhost:5000") as api:
        api.notes.create({"title": "t", "content": "c", "tags": ["todo"]})
        api.bookmarks.list(tags="python,web", favorite="true")

Every call returns the decoded JSON envelope; non-2xx answers raise ApiError.
"""
from __future__ import annotations

from typing import Any, Optional

import httpx

DEFAULT_TIMEOUT = 30.0


class ApiError(Exception):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str, details: Optional[list[dict[str, Any]]] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.details = details or []


def _decode(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if response.is_error:
        error = body.get("error") if isinstance(body, dict) else None
        details = body.get("details") if isinstance(body, dict) else None
        raise ApiError(response.status_code, error or response.reason_phrase, details)
    return body


class EntityResource:
    def __init__(self, http: httpx.Client, kind: str):
        self._http = http
        self._path = f"/api/{kind}"

    def list(self, **params: str) -> dict[str, Any]:
        query = {k: v for k, v in params.items() if v is not None}
        return _decode(self._http.get(self._path, params=query))

    def get(self, entity_id: str) -> dict[str, Any]:
        return _decode(self._http.get(f"{self._path}/{entity_id}"))

    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        return _decode(self._http.post(self._path, json=data))

    def update(self, entity_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return _decode(self._http.put(f"{self._path}/{entity_id}", json=data))

    def delete(self, entity_id: str) -> dict[str, Any]:
        return _decode(self._http.delete(f"{self._path}/{entity_id}"))


class NotemarksClient:
    def __init__(self, base_url: str = "http://localhost:5000", http_client: httpx.Client | None = None):
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(base_url=base_url.rstrip("/"), timeout=DEFAULT_TIMEOUT)
        self.notes = EntityResource(self._http, "notes")
        self.bookmarks = EntityResource(self._http, "bookmarks")

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "NotemarksClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
