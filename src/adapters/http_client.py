"""httpx wrapper plus content sniffing.

Why a wrapper:
- Standardizes timeouts and headers for every media fetch.
- Makes testing easy: the client builder can be swapped for a mocked transport.
"""

from __future__ import annotations

import filetype
import httpx

from core.config import AppSettings

# Message content keys by MIME family.
_TYPE_BY_FAMILY = {
    "image": "image",
    "video": "video",
    "audio": "audio",
}


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with safe defaults.

    Why a builder:
    - Centralizes timeouts/headers so every download behaves the same.
    - `transport` lets tests plug in `httpx.MockTransport`.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "*/*",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


async def get_buffer(
    url: str,
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bytes:
    """Fetch `url` and return the body; HTTP errors raise `httpx.HTTPStatusError`."""

    async with build_async_client(settings, transport=transport) as client:
        resp = await client.get(url)
    resp.raise_for_status()
    return resp.content


def get_mime_type(data: bytes) -> str | None:
    """Sniff the MIME type from magic bytes."""

    if not data:
        return None
    kind = filetype.guess(data)
    return kind.mime if kind is not None else None


def get_extension(data: bytes) -> str | None:
    if not data:
        return None
    return filetype.guess_extension(data)


def detect_type(content: str | bytes | None) -> str | None:
    """Map content to the key it is sent under (`text`, `image`, `sticker`, ...).

    - str -> `text`
    - webp image -> `sticker`
    - image/video/audio -> same family name
    - any other bytes -> `document`
    - empty -> None
    """

    if isinstance(content, str):
        return "text" if content else None
    if not content:
        return None

    mime = get_mime_type(content)
    if mime is None:
        return "document"
    if mime == "image/webp":
        return "sticker"
    family = mime.split("/", 1)[0]
    return _TYPE_BY_FAMILY.get(family, "document")
