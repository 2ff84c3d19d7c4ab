"""Small helpers shared by command handlers.

Formatting (sizes, durations, clock times), URL checks and number -> JID
conversion. Only `get_file_and_save` does I/O.
"""

from __future__ import annotations

import logging
import math
import random
import re
from collections.abc import Sequence
from datetime import datetime
from typing import TypeVar
from urllib.parse import urlparse

import httpx

from adapters.http_client import get_buffer
from core.config import AppSettings
from core.domain.jid import USER_SERVER, jid_normalized_user

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SIZES = ("Bytes", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")
_URL_RE = re.compile(r"https?://[^\s]+")
_TIME_12H_RE = re.compile(r"^(0?[1-9]|1[0-2]):([0-5][0-9])(am|pm)$", re.IGNORECASE)

FETCH_ATTEMPTS = 3


def format_bytes(num_bytes: float, decimals: int = 2) -> str:
    """Human readable size: `format_bytes(1024) == "1 KB"`."""

    if not num_bytes:
        return "0 Bytes"
    k = 1024
    dm = max(decimals, 0)
    i = min(int(math.floor(math.log(abs(num_bytes)) / math.log(k))), len(_SIZES) - 1)
    i = max(i, 0)
    value = round(num_bytes / k**i, dm)
    text = f"{value:.{dm}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {_SIZES[i]}"


def runtime(seconds: float) -> str:
    """Duration like `1 d 2 h 3 m 4 s`; zero parts are omitted."""

    seconds = int(seconds)
    d = seconds // (3600 * 24)
    h = (seconds % (3600 * 24)) // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    parts = []
    if d > 0:
        parts.append(f"{d} d ")
    if h > 0:
        parts.append(f"{h} h ")
    if m > 0:
        parts.append(f"{m} m ")
    if s > 0:
        parts.append(f"{s} s")
    return "".join(parts)


def get_floor(number: float) -> int:
    return math.floor(number)


def get_random(items: Sequence[T]) -> T | None:
    if not items:
        return None
    return random.choice(items)


def to_jid(num: str | int) -> str:
    """Turn a phone number in any format into a user JID."""

    if not num:
        raise ValueError("Number is required")
    normalized = str(num)
    normalized = re.sub(r":\d+", "", normalized, count=1)
    normalized = re.sub(r"\D", "", normalized)
    return jid_normalized_user(f"{normalized}@{USER_SERVER}")


async def get_file_and_save(url: str, *, settings: AppSettings | None = None) -> bytes | None:
    """Fetch `url` with up to three attempts; `None` when all of them fail."""

    for attempt in range(1, FETCH_ATTEMPTS + 1):
        try:
            data = await get_buffer(url, settings=settings)
            if not data:
                raise ValueError("Failed to get buffer")
            return data
        except (httpx.HTTPError, ValueError) as exc:
            logger.debug("Fetch attempt %d/%d for %s failed: %s", attempt, FETCH_ATTEMPTS, url, exc)
    logger.warning("Giving up on %s after %d attempts", url, FETCH_ATTEMPTS)
    return None


def extract_url(text: str) -> str | None:
    match = _URL_RE.search(text or "")
    return match.group(0) if match else None


def is_url(value: object) -> bool:
    """True for http(s) URLs with a host."""

    if not isinstance(value, str):
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return False
    return not any(ch.isspace() for ch in parsed.netloc)


def convert_to_24_hour(time_str: str) -> str | None:
    """`"1:30pm"` -> `"13:30"`; `None` when the input is not h:mm am/pm."""

    match = _TIME_12H_RE.match(time_str.lower())
    if not match:
        return None
    hours, minutes, period = match.groups()
    num_hours = int(hours)
    if period == "pm" and num_hours != 12:
        num_hours += 12
    elif period == "am" and num_hours == 12:
        num_hours = 0
    return f"{num_hours:02d}:{minutes}"


def convert_to_12_hour(time_str: str) -> str:
    """`"13:30"` -> `"1:30PM"`."""

    hours, minutes = time_str.split(":", 1)
    hour = int(hours)
    period = "AM"
    if hour >= 12:
        period = "PM"
        if hour > 12:
            hour -= 12
    if hour == 0:
        hour = 12
    return f"{hour}:{minutes}{period}"


def format_time(timestamp: float) -> str:
    """Millisecond epoch timestamp -> local `h:mmam`/`h:mmpm`."""

    date = datetime.fromtimestamp(timestamp / 1000)
    ampm = "pm" if date.hour >= 12 else "am"
    hours = date.hour % 12 or 12
    return f"{hours}:{date.minute:02d}{ampm}"
