from __future__ import annotations

from typing import Protocol
from urllib.parse import quote

import httpx

from ui_resolvers.core.config import settings
from ui_resolvers.schemas.files import FileUrlOut

FileReference = int | str


class FilesProviderNotConfigured(RuntimeError):
    pass


class FileAccessProvider(Protocol):
    provider_code: str

    async def get_file_url(self, reference: FileReference) -> FileUrlOut:
        ...


def response_field(response, key: str):
    # Providers return FileUrlOut; plain {"url": ...} dicts are accepted too
    if isinstance(response, dict):
        return response.get(key)
    return getattr(response, key, None)


class NoopFilesProvider:
    provider_code = "none"

    async def get_file_url(self, reference: FileReference) -> FileUrlOut:
        raise FilesProviderNotConfigured("No files API configured (FILES_API_BASE_URL is empty)")


class HttpFilesProvider:
    provider_code = "http"

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = 20.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _http_json_get(self, path: str) -> dict:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers(),
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            resp = await client.get(path)
            resp.raise_for_status()
            payload = resp.json()
        # Some deployments wrap responses as {"data": {...}}
        if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
            return payload["data"]
        if not isinstance(payload, dict):
            raise ValueError(f"Unexpected files API payload: {payload!r}")
        return payload

    async def get_file_url(self, reference: FileReference) -> FileUrlOut:
        path = f"/files/{quote(str(reference), safe='')}/url"
        return FileUrlOut.model_validate(await self._http_json_get(path))


def get_files_provider(base_url: str | None = None) -> FileAccessProvider:
    url = (settings.FILES_API_BASE_URL if base_url is None else base_url).strip()
    if not url:
        return NoopFilesProvider()
    return HttpFilesProvider(
        url,
        token=settings.FILES_API_TOKEN,
        timeout=settings.FILES_API_TIMEOUT_SECONDS,
    )
