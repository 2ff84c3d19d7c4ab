"""Helpers for media messages.

A raw message event is a `{key, message}` dict where `message` maps a single
content type (`imageMessage`, `conversation`, ...) to its payload.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

from adapters.http_client import get_extension
from core.exceptions import MediaError
from core.interfaces.client import ChatClient

logger = logging.getLogger(__name__)

MEDIA_TYPES = (
    "imageMessage",
    "documentMessage",
    "audioMessage",
    "videoMessage",
    "stickerMessage",
)

# Keys that ride along with the real content and never identify it.
_NON_CONTENT_KEYS = ("senderKeyDistributionMessage", "messageContextInfo")


def get_content_type(content: dict[str, Any] | None) -> str | None:
    """First key of the content that names the actual payload."""

    if not isinstance(content, dict):
        return None
    for key in content:
        if key not in _NON_CONTENT_KEYS:
            return key
    return None


def is_media_message(message: dict[str, Any] | None) -> bool:
    if not isinstance(message, dict):
        return False
    return get_content_type(message.get("message")) in MEDIA_TYPES


def edit_message_property(message: dict[str, Any], property_path: str, value: Any) -> dict[str, Any]:
    """Return a deep copy of `message` with the dotted `property_path` set to `value`.

    Every segment but the last must already exist.
    """

    if not isinstance(message, dict):
        raise TypeError("Message must be an object")
    if not isinstance(property_path, str):
        raise TypeError("Property path must be a string using dot notation")

    result = copy.deepcopy(message)
    keys = property_path.split(".")
    current: Any = result
    for key in keys[:-1]:
        if key.startswith("__"):
            raise ValueError(f"Refusing to traverse dunder key {key!r}")
        if not isinstance(current, dict) or key not in current:
            raise ValueError(f'"{property_path}" does not exist in message')
        current = current[key]

    final_key = keys[-1]
    if final_key.startswith("__"):
        raise ValueError(f"Refusing to set dunder key {final_key!r}")
    if not isinstance(current, dict):
        raise ValueError(f'"{property_path}" does not exist in message')
    current[final_key] = value
    return result


async def download_message(
    client: ChatClient,
    message: dict[str, Any] | None,
    *,
    as_save_file: bool = False,
    directory: Path | None = None,
) -> bytes | Path:
    """Download the media of `message`.

    Returns the bytes, or the path of the written file when `as_save_file`
    is set (named `<message id>.<sniffed extension>`).
    """

    if not message or not is_media_message(message):
        raise MediaError("Message must be a media message")

    media = await client.download_media_message({"key": message.get("key"), "message": message.get("message")})
    if not isinstance(media, (bytes, bytearray)):
        raise MediaError("Failed to download media as buffer")
    media = bytes(media)

    if not as_save_file:
        return media

    ext = get_extension(media)
    if not ext:
        raise MediaError("Could not determine file type from buffer")
    key = message.get("key") or {}
    message_id = key.get("id") if isinstance(key, dict) else None
    out_dir = directory or Path(".")
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / f"{message_id or 'media'}.{ext}"
    out_path.write_bytes(media)
    logger.info("Saved %s (%d bytes)", out_path, len(media))
    return out_path
