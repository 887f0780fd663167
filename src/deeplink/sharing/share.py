"""Share-sheet entry points.

Each helper builds the canonical public URL for an entity plus a
human-readable title and message, then hands all three to the host's
share sheet. Share-sheet errors never propagate: a dismissal is
``ShareResult.DISMISSED``, anything else is logged and ``FAILED``.
"""

import logging
from enum import StrEnum
from typing import Protocol

from deeplink.config import LinkConfig
from deeplink.sharing.builder import (
    DEFAULT_TITLE,
    ShareContent,
    ShareKind,
    build_share_url,
    default_message,
    to_public_url,
)

logger = logging.getLogger("deeplink.sharing")

CAPTION_PREVIEW_LENGTH = 100


class ShareSheet(Protocol):
    """The host's native share UI.

    Returns True when the user completed the share, False when dismissed.
    """

    def share(self, *, message: str, title: str, url: str) -> bool: ...


class ShareResult(StrEnum):
    SHARED = "shared"
    DISMISSED = "dismissed"
    FAILED = "failed"


class Sharer:
    """Builds share content for app entities and opens the share sheet."""

    __slots__ = ("_config", "_sheet")

    def __init__(self, sheet: ShareSheet, config: LinkConfig | None = None) -> None:
        self._sheet = sheet
        self._config = config or LinkConfig()

    def share(self, content: ShareContent) -> ShareResult:
        logger.debug("Sharing %s", content.url)
        try:
            completed = self._sheet.share(
                message=content.text, title=content.title, url=content.url
            )
        except Exception:
            logger.exception("Share sheet failed for %s", content.url)
            return ShareResult.FAILED
        return ShareResult.SHARED if completed else ShareResult.DISMISSED

    def _entity(self, kind: ShareKind, ident: str, title: str, message: str) -> ShareResult:
        url = build_share_url(kind, ident, self._config)
        return self.share(ShareContent(url=url, title=title, message=message))

    def share_profile(self, username: str, display_name: str | None = None) -> ShareResult:
        if display_name:
            return self._entity(
                ShareKind.PROFILE,
                username,
                f"{display_name}'s Profile",
                f"Check out {display_name}'s profile!",
            )
        return self._entity(
            ShareKind.PROFILE, username, "Share Profile", default_message(ShareKind.PROFILE)
        )

    def share_post(self, post_id: str, caption: str | None = None) -> ShareResult:
        message = (
            f"{caption[:CAPTION_PREVIEW_LENGTH]}..."
            if caption
            else default_message(ShareKind.POST)
        )
        return self._entity(ShareKind.POST, post_id, "Share Post", message)

    def share_event(self, event_id: str, event_name: str | None = None) -> ShareResult:
        if event_name:
            return self._entity(ShareKind.EVENT, event_id, event_name, f"Check out {event_name}!")
        return self._entity(
            ShareKind.EVENT, event_id, "Share Event", default_message(ShareKind.EVENT)
        )

    def share_story(self, story_id: str, username: str | None = None) -> ShareResult:
        message = (
            f"Check out {username}'s story!" if username else default_message(ShareKind.STORY)
        )
        return self._entity(ShareKind.STORY, story_id, "Share Story", message)

    def share_ticket(self, ticket_id: str) -> ShareResult:
        return self._entity(
            ShareKind.TICKET, ticket_id, "Share Ticket", default_message(ShareKind.TICKET)
        )

    def share_chat(self, chat_id: str) -> ShareResult:
        return self._entity(ShareKind.CHAT, chat_id, "Share Chat", default_message(ShareKind.CHAT))

    def share_room(self, room_id: str) -> ShareResult:
        return self._entity(ShareKind.ROOM, room_id, "Share Room", default_message(ShareKind.ROOM))

    def share_url(
        self,
        url: str,
        title: str | None = None,
        message: str | None = None,
    ) -> ShareResult:
        """Share an arbitrary link, rewriting the private scheme to HTTPS."""
        content = ShareContent(
            url=to_public_url(url, self._config),
            title=title or DEFAULT_TITLE,
            message=message or "Check this out!",
        )
        return self.share(content)
