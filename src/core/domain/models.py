"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- The chat client hands us loosely shaped dicts with camelCase keys; the
  models validate them once at the edge and expose snake_case attributes.
- `extra="allow"` keeps any SDK field we do not model, so nothing is lost
  when an event is wrapped and passed on.

Note:
- These models describe *what* an event looks like, not *how* it arrives.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

_SDK_CONFIG = ConfigDict(extra="allow", populate_by_name=True)


def _null_as_default(value: Any, default: Any) -> Any:
    # The SDK sends explicit nulls (no caption, no push name) for absent fields.
    return default if value is None else value


class MessageKey(BaseModel):
    """Identifies a message inside a chat."""

    model_config = _SDK_CONFIG

    id: str = Field(
        default="",
        description="Message id assigned by the sender's client.",
    )
    remote_jid: str = Field(
        default="",
        alias="remoteJid",
        description="JID of the chat (user or group) the message lives in.",
    )
    from_me: bool = Field(
        default=False,
        alias="fromMe",
        description="True when the message was sent by the bot's own account.",
    )

    @field_validator("id", "remote_jid", mode="before")
    @classmethod
    def _null_str(cls, v: Any) -> Any:
        return _null_as_default(v, "")

    @field_validator("from_me", mode="before")
    @classmethod
    def _null_bool(cls, v: Any) -> Any:
        return _null_as_default(v, False)

    def to_wire(self) -> dict[str, Any]:
        """Serialize with the SDK's field names."""
        return self.model_dump(by_alias=True)


class QuotedMessage(BaseModel):
    """Message a user replied to, as pre-parsed by the client layer."""

    model_config = _SDK_CONFIG

    key: MessageKey = Field(default_factory=MessageKey)
    sender: str = ""
    mtype: str = ""
    body: str = ""
    content_type: str = Field(
        default="",
        alias="type",
        description="Content type of the quoted message (e.g. 'imageMessage').",
    )
    message: Any = None
    is_status: bool = Field(default=False, alias="isStatus")
    sudo: bool = False
    isban: bool = False
    viewonce: bool = False

    @field_validator("sender", "mtype", "body", "content_type", mode="before")
    @classmethod
    def _null_str(cls, v: Any) -> Any:
        return _null_as_default(v, "")

    @field_validator("is_status", "sudo", "isban", "viewonce", mode="before")
    @classmethod
    def _null_bool(cls, v: Any) -> Any:
        return _null_as_default(v, False)

    @field_validator("key", mode="before")
    @classmethod
    def _null_key(cls, v: Any) -> Any:
        return _null_as_default(v, {})


class MessageData(BaseModel):
    """Incoming (or freshly sent) message event."""

    model_config = _SDK_CONFIG

    key: MessageKey = Field(default_factory=MessageKey)
    is_admin: bool = Field(default=False, alias="isAdmin")
    is_bot_admin: bool = Field(default=False, alias="isBotAdmin")
    is_group: bool = Field(default=False, alias="isGroup")
    push_name: str = Field(default="", alias="pushName")
    message: Any = None
    prefix: str = ""
    sender: str = ""
    mtype: str = Field(
        default="",
        alias="type",
        description="Content type of the message (e.g. 'conversation').",
    )
    user: Any = None
    sudo: bool = False
    isban: bool = False
    mode: str = ""
    message_timestamp: int = Field(default=0, alias="messageTimestamp")
    body: str | None = None
    mention: list[str] | None = None
    quoted: QuotedMessage | None = None

    @field_validator("push_name", "prefix", "sender", "mtype", "mode", mode="before")
    @classmethod
    def _null_str(cls, v: Any) -> Any:
        return _null_as_default(v, "")

    @field_validator("is_admin", "is_bot_admin", "is_group", "sudo", "isban", mode="before")
    @classmethod
    def _null_bool(cls, v: Any) -> Any:
        return _null_as_default(v, False)

    @field_validator("message_timestamp", mode="before")
    @classmethod
    def _null_timestamp(cls, v: Any) -> Any:
        return _null_as_default(v, 0)

    @field_validator("key", mode="before")
    @classmethod
    def _null_key(cls, v: Any) -> Any:
        return _null_as_default(v, {})

    def media_source(self) -> dict[str, Any]:
        """The `{key, message}` pair a media download needs."""
        return {"key": self.key.to_wire(), "message": self.message}


class ReplyMessage(BaseModel):
    """Flattened view over a quoted message, handy for command handlers."""

    id: str
    from_me: bool
    sender: str
    key: MessageKey
    bot: bool
    mtype: str
    sudo: bool
    isban: bool
    message: Any = None
    text: str
    status: bool
    image: bool
    video: bool
    audio: bool
    sticker: bool
    document: bool
    viewonce: bool

    @field_validator("id", "sender", "mtype", "text", mode="before")
    @classmethod
    def _null_str(cls, v: Any) -> Any:
        return _null_as_default(v, "")
