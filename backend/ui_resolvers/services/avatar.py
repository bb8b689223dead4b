"""Avatar values are either a stored file reference (ID or slug) or a
previously rendered access URL. Access URLs are pre-signed and expire; only the
extracted reference is ever persisted, and display always re-resolves it.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import SplitResult, urlsplit

from ui_resolvers.services.files_provider import (
    FileAccessProvider,
    FileReference,
    get_files_provider,
    response_field,
)

logger = logging.getLogger(__name__)

FILE_URL_PATH_RE = re.compile(r"/files/([^/]+)/(download|url)")

# Characters a browser refuses in a URL host
_FORBIDDEN_HOST_CHARS = frozenset("\x00\t\n\r #/<>?@[\\]^|%")


def _parse_url(value: str) -> SplitResult:
    parts = urlsplit(value)
    if parts.scheme in ("http", "https") and not parts.netloc:
        # Browsers skip any run of slashes after a web scheme: https:///files/a -> host "files"
        rest = value[len(parts.scheme) + 1:].lstrip("/\\")
        parts = urlsplit(f"{parts.scheme}://{rest}")
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"Not an absolute URL: {value!r}")
    host = parts.hostname or ""
    if not host or any(ch in _FORBIDDEN_HOST_CHARS for ch in host):
        raise ValueError(f"Invalid host in URL: {value!r}")
    parts.port  # raises ValueError on a malformed port
    return parts


def extract_avatar_file_reference(value) -> FileReference | None:
    # bool is an int subclass but never a file ID
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not value or not isinstance(value, str):
        return None

    if not value.startswith("http"):
        return value

    try:
        parts = _parse_url(value)
    except ValueError:
        # Not a valid URL, keep it as a direct reference
        return value

    match = FILE_URL_PATH_RE.search(parts.path)
    if match:
        return match.group(1)
    return None


async def get_avatar_url(
    file_reference: FileReference | None,
    provider: FileAccessProvider | None = None,
) -> str | None:
    if file_reference is None or file_reference == "":
        return None

    provider = provider or get_files_provider()
    try:
        response = await provider.get_file_url(file_reference)
    except Exception as exc:
        logger.warning(
            "Failed to get avatar URL for file %r from %s provider: %s",
            file_reference, provider.provider_code, exc,
        )
        return None
    return response_field(response, "url") or None


async def resolve_avatar_display_url(value, provider: FileAccessProvider | None = None) -> str | None:
    """Fresh URL to render for an avatar value.

    A URL that is not a files API URL is an external image and is shown as-is.
    """
    file_reference = extract_avatar_file_reference(value)
    if file_reference is None:
        if isinstance(value, str) and value.startswith("http"):
            return value
        return None
    return await get_avatar_url(file_reference, provider)
