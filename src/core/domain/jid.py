"""WhatsApp JID helpers.

A JID looks like `user[_agent][:device]@server`, e.g.
`1234567890:12@s.whatsapp.net` or `120363040000000000@g.us`.
"""

from __future__ import annotations

from typing import NamedTuple

USER_SERVER = "s.whatsapp.net"
LEGACY_USER_SERVER = "c.us"
GROUP_SERVER = "g.us"


class DecodedJid(NamedTuple):
    user: str
    server: str
    device: int | None = None
    agent: int | None = None


def jid_decode(jid: str | None) -> DecodedJid | None:
    """Split a JID into its parts; `None` when there is no `@`."""

    if not jid or "@" not in jid:
        return None
    user_part, server = jid.rsplit("@", 1)
    user_agent, _, device = user_part.partition(":")
    user, _, agent = user_agent.partition("_")
    return DecodedJid(
        user=user,
        server=server,
        device=int(device) if device.isdigit() else None,
        agent=int(agent) if agent.isdigit() else None,
    )


def jid_encode(user: str, server: str) -> str:
    return f"{user}@{server}"


def jid_normalized_user(jid: str | None) -> str:
    """Drop device/agent suffixes and map legacy `c.us` to `s.whatsapp.net`."""

    decoded = jid_decode(jid)
    if decoded is None:
        return ""
    server = USER_SERVER if decoded.server == LEGACY_USER_SERVER else decoded.server
    return jid_encode(decoded.user, server)


def is_group_jid(jid: str | None) -> bool:
    return bool(jid) and jid.endswith(f"@{GROUP_SERVER}")
