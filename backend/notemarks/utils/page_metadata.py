"""Best-effort page metadata for bookmarks.

`MetadataEnricher` is the seam the bookmark routes depend on. The default
`RegexMetadataEnricher` fetches the page once with httpx and pattern-matches
the raw markup for a title and a meta description. It never raises: every
failure is logged and reported as "no metadata".
"""
from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import httpx

from notemarks.config import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0

_TITLE_RE = re.compile(r"<title>(.*?)</title>", re.IGNORECASE)
_DESCRIPTION_RE = re.compile(
    r"""<meta[^>]*name=["']description["'][^>]*content=["']([^"']*)["'][^>]*>""",
    re.IGNORECASE,
)


class UpstreamFetchFailure(Exception):
    """The remote page could not be fetched."""


@dataclass(frozen=True)
class PageMetadata:
    fetched_title: Optional[str] = None
    description: Optional[str] = None
    favicon: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "fetchedTitle": self.fetched_title,
            "favicon": self.favicon,
            "description": self.description,
        }


class MetadataEnricher(Protocol):
    async def enrich(self, url: str) -> Optional[PageMetadata]:
        ...

    async def aclose(self) -> None:
        ...


def normalize_url(url: str) -> str:
    # Plain prefix check: "httpfoo.com" counts as already having a scheme.
    return url if url.startswith("http") else f"https://{url}"


def extract_metadata(html: str) -> PageMetadata:
    title = _TITLE_RE.search(html)
    description = _DESCRIPTION_RE.search(html)
    return PageMetadata(
        fetched_title=title.group(1).strip() if title else None,
        description=description.group(1).strip() if description else None,
    )


class RegexMetadataEnricher:
    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        # httpx timeouts are per phase; _timeout caps the whole exchange
        self._timeout = timeout
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": user_agent},
            follow_redirects=True,
            transport=transport,
        )

    async def _fetch(self, url: str) -> str:
        try:
            response = await asyncio.wait_for(self._client.get(url), self._timeout)
            response.raise_for_status()
        except asyncio.TimeoutError as exc:
            raise UpstreamFetchFailure(f"no complete response within {self._timeout}s") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise UpstreamFetchFailure(f"{type(exc).__name__}: {exc}") from exc
        return response.text

    async def enrich(self, url: str) -> Optional[PageMetadata]:
        target = normalize_url(url)
        try:
            html = await self._fetch(target)
            return extract_metadata(html)
        except UpstreamFetchFailure as exc:
            logger.warning("Error fetching URL metadata for %s: %s", target, exc)
        except Exception:
            logger.exception("Unexpected error extracting URL metadata for %s", target)
        return None

    async def aclose(self) -> None:
        await self._client.aclose()
