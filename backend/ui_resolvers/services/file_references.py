from __future__ import annotations

import asyncio
import logging
import re
import time
from dataclasses import dataclass
from typing import Callable

from bs4 import BeautifulSoup

from ui_resolvers.core.config import settings
from ui_resolvers.services.files_provider import FileAccessProvider, FileReference, response_field

logger = logging.getLogger(__name__)

# /files/{id}/download, with or without the /api/v1 prefix
LEGACY_FILE_PATH_RE = re.compile(r"/files/(\d+)/download", re.IGNORECASE)


def _parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _migrate(soup: BeautifulSoup) -> None:
    for attr in ("src", "href"):
        for el in soup.find_all(attrs={attr: LEGACY_FILE_PATH_RE}):
            match = LEGACY_FILE_PATH_RE.search(el[attr])
            el[attr] = "#"
            el["data-src-id"] = match.group(1)


def _file_ids(soup: BeautifulSoup) -> list[int]:
    seen: list[int] = []
    for el in soup.select("[data-src-id]"):
        raw = str(el.get("data-src-id", "")).strip()
        if not raw.isdigit():
            continue
        file_id = int(raw)
        if file_id and file_id not in seen:
            seen.append(file_id)
    return seen


def migrate_legacy_file_links(html: str) -> str:
    if not html:
        return html
    soup = _parse(html)
    _migrate(soup)
    return str(soup)


def collect_file_ids(html: str) -> list[int]:
    if not html:
        return []
    return _file_ids(_parse(html))


@dataclass
class _CachedUrl:
    url: str
    expires_at: float


class FileUrlCache:
    def __init__(self, clock: Callable[[], float] = time.monotonic, max_entries: int = 1024):
        self._clock = clock
        self.max_entries = max_entries
        self._entries: dict[str, _CachedUrl] = {}

    def get(self, reference: FileReference) -> str | None:
        entry = self._entries.get(str(reference))
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            del self._entries[str(reference)]
            return None
        return entry.url

    def set(self, reference: FileReference, url: str, expires_in_seconds: int | None = None):
        now = self._clock()
        ttl = expires_in_seconds or settings.FILE_URL_DEFAULT_TTL_SECONDS
        key = str(reference)
        self._entries.pop(key, None)
        self._entries = {k: v for k, v in self._entries.items() if v.expires_at > now}
        # Oldest entries go first once the bound is hit
        while self._entries and len(self._entries) >= self.max_entries:
            del self._entries[next(iter(self._entries))]
        self._entries[key] = _CachedUrl(url=url, expires_at=now + ttl - settings.FILE_URL_REFRESH_MARGIN_SECONDS)

    def invalidate(self, reference: FileReference):
        self._entries.pop(str(reference), None)

    def clear(self):
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


async def load_file_url(
    reference: FileReference | None,
    provider: FileAccessProvider,
    cache: FileUrlCache,
) -> str | None:
    if reference is None or reference == "":
        return None

    cached = cache.get(reference)
    if cached:
        return cached

    try:
        response = await provider.get_file_url(reference)
    except Exception as exc:
        logger.warning(
            "Failed to load file URL for file %s from %s provider: %s",
            reference, provider.provider_code, exc,
        )
        return None

    url = response_field(response, "url")
    if not url:
        return None
    cache.set(reference, url, response_field(response, "expires_in_seconds"))
    return url


async def render_file_references(
    html: str,
    provider: FileAccessProvider,
    cache: FileUrlCache,
) -> str:
    """Swap `data-src-id` placeholders in rich-text content for fresh URLs.

    `<img>` gets `src`, `<a>` gets `href`. `data-src-id` stays on the element so
    an expired link can be refreshed later; unresolved elements are untouched.
    """
    if not html:
        return html

    soup = _parse(html)
    _migrate(soup)
    file_ids = _file_ids(soup)
    if not file_ids:
        return str(soup)

    urls = await asyncio.gather(*(load_file_url(file_id, provider, cache) for file_id in file_ids))
    url_map = {file_id: url for file_id, url in zip(file_ids, urls) if url}

    for el in soup.select("[data-src-id]"):
        raw = str(el.get("data-src-id", "")).strip()
        url = url_map.get(int(raw)) if raw.isdigit() else None
        if not url:
            continue
        if el.name == "img":
            el["src"] = url
        elif el.name == "a":
            el["href"] = url

    return str(soup)
