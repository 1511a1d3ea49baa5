"""
Thread walker - rebuilds the conversation above a mention.
"""

import logging
from typing import Protocol

import httpx

from services.errors import MastodonError
from services.models import ConversationContext, Status
from utils.text import extract_text_from_html

logger = logging.getLogger(__name__)


class StatusLookup(Protocol):
    async def get_status(self, status_id: str) -> Status: ...


class ThreadWalker:
    """Follows in-reply-to links upward from a leaf status."""

    def __init__(self, statuses: StatusLookup):
        self.statuses = statuses

    async def walk(self, leaf: Status, max_depth: int) -> ConversationContext:
        """
        Collect up to `max_depth` statuses ending at `leaf`.

        Lines come back oldest first. A failed parent lookup ends the walk
        with whatever was gathered so far.
        """
        context = ConversationContext()
        current = leaf

        for depth in range(max_depth):
            text = extract_text_from_html(current.content)
            context.lines.insert(0, (current.account.username, text))
            context.attachments.extend(current.media_attachments)

            if current.in_reply_to_id is None or depth == max_depth - 1:
                break

            try:
                current = await self.statuses.get_status(current.in_reply_to_id)
            except (MastodonError, httpx.HTTPError, ValueError) as e:
                logger.warning(f"[THREAD] Error fetching parent status {current.in_reply_to_id}: {e}")
                break

        logger.info(
            f"[THREAD] Context for {leaf.id}: {len(context.lines)} posts, "
            f"{len(context.attachments)} attachments"
        )
        return context
