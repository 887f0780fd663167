"""Outbound share links.

Every shareable entity maps to ``https://<domain>/<prefix>/<id-or-username>``.
The private app scheme is only resolvable inside the app, so it is never
emitted; ``to_public_url`` rewrites it when a caller hands one in.
"""

from dataclasses import dataclass
from enum import StrEnum
from urllib.parse import quote

from deeplink.config import LinkConfig
from deeplink.errors import UnsupportedShareKind


class ShareKind(StrEnum):
    PROFILE = "profile"
    POST = "post"
    EVENT = "event"
    STORY = "story"
    TICKET = "ticket"
    CHAT = "chat"
    ROOM = "room"


# Entity kind -> public path prefix (must stay in step with the route table)
SHARE_PREFIXES: dict[ShareKind, str] = {
    ShareKind.PROFILE: "u",
    ShareKind.POST: "p",
    ShareKind.EVENT: "e",
    ShareKind.STORY: "story",
    ShareKind.TICKET: "ticket",
    ShareKind.CHAT: "chat",
    ShareKind.ROOM: "room",
}

_DEFAULT_MESSAGES: dict[ShareKind, str] = {
    ShareKind.PROFILE: "Check out this profile!",
    ShareKind.POST: "Check out this post!",
    ShareKind.EVENT: "Check out this event!",
    ShareKind.STORY: "Check out this story!",
    ShareKind.TICKET: "Check out this ticket!",
    ShareKind.CHAT: "Join this chat!",
    ShareKind.ROOM: "Join this room!",
}

DEFAULT_TITLE = "Share"


def _coerce_kind(kind: ShareKind | str) -> ShareKind:
    try:
        return ShareKind(kind)
    except ValueError:
        raise UnsupportedShareKind(str(kind)) from None


def build_share_url(kind: ShareKind | str, ident: str, config: LinkConfig | None = None) -> str:
    """Return the canonical public URL for an entity.

    *ident* is percent-encoded as a single path segment::

        build_share_url("profile", "mikevocalz")  # "https://dvntlive.app/u/mikevocalz"
        build_share_url("post", "a/b")             # "https://dvntlive.app/p/a%2Fb"
    """
    share_kind = _coerce_kind(kind)
    if not ident:
        raise ValueError(f"Cannot build a {share_kind} link without an id.")
    cfg = config or LinkConfig()
    return f"{cfg.web_base_url}/{SHARE_PREFIXES[share_kind]}/{quote(ident, safe='')}"


def to_public_url(url: str, config: LinkConfig | None = None) -> str:
    """Rewrite a private-scheme URL to its public HTTPS form; pass others through."""
    cfg = config or LinkConfig()
    prefix = f"{cfg.scheme}://"
    if url.lower().startswith(prefix):
        rest = url[len(prefix) :].lstrip("/")
        return f"{cfg.web_base_url}/{rest}" if rest else cfg.web_base_url
    return url


def default_message(kind: ShareKind | str) -> str:
    return _DEFAULT_MESSAGES[_coerce_kind(kind)]


@dataclass(frozen=True, slots=True)
class ShareContent:
    """What gets handed to the OS share sheet."""

    url: str
    title: str = DEFAULT_TITLE
    message: str = "Check this out!"

    @property
    def text(self) -> str:
        """Message body with the link appended, as share sheets expect."""
        return f"{self.message}\n\n{self.url}"
