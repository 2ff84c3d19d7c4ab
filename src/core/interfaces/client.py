"""Contract for the chat client (the external WhatsApp SDK).

Why Protocol:
- Defines a structural contract (duck typing) without rigid inheritance.
- A real socket client, the console client and test fakes are interchangeable
  and the Message facade never imports an SDK.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ChatClient(Protocol):
    """Minimal surface the bot needs from the messaging client.

    Design rules:
    - Both calls are async because they do network I/O.
    - `send_message` returns the sent message as a raw event dict
      (`{"key": {...}, "message": {...}, ...}`) so it can be wrapped again.
    """

    async def send_message(
        self,
        jid: str,
        content: dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send `content` to `jid` and return the resulting message event."""

        ...

    async def download_media_message(self, message: dict[str, Any]) -> bytes:
        """Download and decrypt the media of a `{key, message}` pair."""

        ...
