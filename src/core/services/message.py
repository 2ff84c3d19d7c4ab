"""Message facade over the chat client.

Command handlers receive a `Message`: the incoming event flattened into
attributes plus shortcuts (reply, react, edit, delete, send, download) that
build the SDK payloads and call `ChatClient.send_message`. Every shortcut
that sends returns a new `Message` wrapping what the client sent.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from adapters.http_client import detect_type, get_buffer, get_mime_type
from adapters.media import download_message
from adapters.tools import is_url, to_jid
from core.config import AppSettings
from core.domain.models import MessageData, MessageKey, QuotedMessage, ReplyMessage
from core.exceptions import MessageError
from core.interfaces.client import ChatClient
from core.lang import LANG

logger = logging.getLogger(__name__)

# Ids generated by bot libraries (Baileys, WhatsApp Web) start with these.
_BOT_ID_RE = re.compile(r"^(BAE5|3EB0)")

DEFAULT_FILE_NAME = "χѕтяσ м∂"


def is_bot_id(message_id: str | None) -> bool:
    return bool(message_id) and _BOT_ID_RE.match(message_id) is not None


def _build_reply_message(quoted: QuotedMessage) -> ReplyMessage:
    return ReplyMessage(
        id=quoted.key.id,
        from_me=quoted.key.from_me,
        sender=quoted.sender,
        key=quoted.key,
        bot=is_bot_id(quoted.key.id),
        mtype=quoted.mtype,
        sudo=quoted.sudo,
        isban=quoted.isban,
        message=quoted.message,
        text=quoted.body,
        status=quoted.is_status,
        image=quoted.content_type == "imageMessage",
        video=quoted.content_type == "videoMessage",
        audio=quoted.content_type == "audioMessage",
        sticker=quoted.content_type == "stickerMessage",
        document=quoted.content_type == "documentMessage",
        viewonce=quoted.viewonce,
    )


def _key_payload(key: MessageKey | dict[str, Any]) -> dict[str, Any]:
    return key.to_wire() if isinstance(key, MessageKey) else dict(key)


class Message:
    """A message event bound to the client that can answer it."""

    def __init__(
        self,
        client: ChatClient,
        data: MessageData | dict[str, Any] | None,
        settings: AppSettings | None = None,
    ) -> None:
        self.client = client
        self._settings = settings
        if isinstance(data, MessageData):
            self.data: MessageData | None = data
        else:
            self.data = MessageData.model_validate(data) if data else None
        self._events(self.data or MessageData())

    def _events(self, data: MessageData) -> None:
        self.key = data.key
        self.id = data.key.id
        self.jid = data.key.remote_jid
        self.is_admin = data.is_admin
        self.is_bot_admin = data.is_bot_admin
        self.is_group = data.is_group
        self.from_me = data.key.from_me
        self.push_name = data.push_name
        self.message = data.message
        self.prefix = data.prefix
        self.sender = data.sender
        self.mtype = data.mtype
        self.user = data.user
        self.sudo = data.sudo
        self.isban = data.isban
        self.mode = data.mode
        self.timestamp = data.message_timestamp
        self.text = data.body or ""
        self.bot = is_bot_id(data.key.id)
        self.mention = data.mention
        self.quoted = data.quoted
        self.reply_message = _build_reply_message(data.quoted) if data.quoted else None

    def __repr__(self) -> str:
        return f"Message(id={self.id!r}, jid={self.jid!r}, text={self.text!r})"

    @property
    def settings(self) -> AppSettings:
        if self._settings is None:
            self._settings = AppSettings()
        return self._settings

    def _wrap(self, sent: dict[str, Any] | None) -> "Message":
        return Message(self.client, sent, self._settings)

    async def get_admin(self) -> bool:
        """True when both the sender and the bot are group admins; otherwise tells the chat why not."""

        if not self.is_admin:
            await self.send(LANG.ISADMIN)
            return False
        if not self.is_bot_admin:
            await self.send(LANG.ISBOTADMIN)
            return False
        return True

    async def get_jid(self, match: str | None = None) -> str | None:
        """Resolve the user a command targets.

        Order: explicit number, replied-to sender, then the first mention
        (groups) or the chat itself (private chats).
        """

        if match:
            return to_jid(match)
        if self.reply_message and self.reply_message.sender:
            return self.reply_message.sender
        if self.is_group:
            return self.mention[0] if self.mention else None
        return self.jid or None

    async def reply(self, text: str) -> "Message":
        sent = await self.client.send_message(
            self.jid,
            {
                "text": f"```{str(text).strip()}```",
                "contextInfo": {
                    "externalAdReply": {
                        "title": self.push_name,
                        "body": LANG.BOT_NAME,
                        "mediaType": 1,
                        "thumbnailUrl": LANG.THUMBNAIL,
                        "sourceUrl": LANG.REPO_URL,
                        "showAdAttribution": True,
                    }
                },
            },
        )
        return self._wrap(sent)

    async def edit(self, content: str) -> "Message":
        target = self.data.quoted.key if self.data and self.data.quoted else self.key
        sent = await self.client.send_message(self.jid, {"text": content, "edit": _key_payload(target)})
        return self._wrap(sent)

    async def react(self, emoji: str, key: MessageKey | dict[str, Any] | None = None) -> "Message":
        sent = await self.client.send_message(
            self.jid,
            {"react": {"text": emoji, "key": _key_payload(key or self.key)}},
        )
        return self._wrap(sent)

    async def delete(self) -> "Message":
        target = self.reply_message.key if self.reply_message else self.key
        sent = await self.client.send_message(self.jid, {"delete": _key_payload(target)})
        return self._wrap(sent)

    async def send(
        self,
        content: Any,
        *,
        jid: str | None = None,
        type: str | None = None,
        mentions: list[str] | None = None,
        **opts: Any,
    ) -> "Message":
        """Send text or media; the content key is detected when `type` is not given."""

        content_type = type or detect_type(content)
        if content_type is None:
            raise MessageError("Unsupported Content")
        sent = await self.client.send_message(
            jid or self.jid,
            {
                content_type: content,
                "contextInfo": {"mentionedJid": mentions or self.mention, **opts},
                **opts,
            },
        )
        return self._wrap(sent)

    async def send_file(
        self,
        file: bytes | str,
        file_name: str | None = None,
        caption: str | None = None,
        **opts: Any,
    ) -> "Message":
        """Send bytes or the body of an http(s) URL as a document."""

        quoted = opts.pop("quoted", None)
        try:
            if not file:
                raise MessageError("No file provided")
            if isinstance(file, str) and is_url(file):
                buffer = await get_buffer(file, settings=self.settings)
            elif isinstance(file, (bytes, bytearray)):
                buffer = bytes(file)
            else:
                raise MessageError("File must be a buffer or a valid URL")
            mime = get_mime_type(buffer)
            if not mime:
                raise MessageError("Unable to detect mime type")
            content = {
                "document": buffer,
                "mimetype": mime,
                "fileName": file_name or DEFAULT_FILE_NAME,
                "caption": caption or "",
                **opts,
            }
            sent = await self.client.send_message(self.jid, content, {"quoted": quoted, **opts})
        except Exception as exc:
            raise MessageError(f"Error sending file: {exc}") from exc
        return self._wrap(sent)

    async def send_from_url(self, url: str, *, type: str | None = None, **opts: Any) -> "Message":
        if not is_url(url):
            raise MessageError("Invalid URL")
        try:
            buffer = await get_buffer(url, settings=self.settings)
            content_type = detect_type(buffer)
            if not content_type:
                raise MessageError("Unsupported Content")
            sent = await self.client.send_message(
                self.jid,
                {type or content_type: buffer, **opts},
                dict(opts),
            )
        except Exception as exc:
            raise MessageError(f"Error sending message: {exc}") from exc
        return self._wrap(sent)

    async def forward(self, jid: str, message: dict[str, Any], **opts: Any) -> "Message":
        if not jid or not message:
            raise MessageError("No jid or message provided")
        sent = await self.client.send_message(
            jid,
            {"forward": message, "contextInfo": {**opts}, **opts},
            dict(opts),
        )
        return self._wrap(sent)

    async def download(self, file: bool = False) -> bytes | Path:
        """Download the quoted media, or this message's own media."""

        if self.data is None:
            source = None
        elif self.data.quoted is not None:
            source = {"key": self.data.quoted.key.to_wire(), "message": self.data.quoted.message}
        else:
            source = self.data.media_source()
        return await download_message(
            self.client,
            source,
            as_save_file=file,
            directory=self.settings.download_dir,
        )
