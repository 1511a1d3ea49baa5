"""
Stream consumer - feeds user stream events to the mention handler.

Events are handled one at a time; a mention is fully processed before the
next event is read.
"""

import asyncio
import logging
from typing import AsyncIterator

from services.mentions import MentionHandler
from services.models import (
    DeleteEvent,
    ErrorEvent,
    NotificationEvent,
    StatusEditEvent,
    StreamEvent,
    UpdateEvent,
)

logger = logging.getLogger(__name__)


class StreamConsumer:
    """Dispatches stream events and keeps simple counters for /health."""

    def __init__(self, handler: MentionHandler):
        self.handler = handler
        self.running = False
        self.stats = {"events": 0, "mentions": 0, "replies": 0, "errors": 0}

    async def dispatch(self, event: StreamEvent) -> None:
        """Handle a single event."""
        self.stats["events"] += 1

        if isinstance(event, NotificationEvent):
            notification = event.notification
            if notification.type != "mention":
                logger.info(f"[STREAM] Notification {notification.id}: {notification.type} from @{notification.account.acct}")
                return
            self.stats["mentions"] += 1
            result = await self.handler.handle(notification)
            if result.get("success"):
                self.stats["replies"] += 1
        elif isinstance(event, ErrorEvent):
            self.stats["errors"] += 1
            logger.error(f"[STREAM] Error event: {event.error}")
        elif isinstance(event, DeleteEvent):
            logger.info(f"[STREAM] Delete event: status ID {event.status_id}")
        elif isinstance(event, UpdateEvent):
            logger.info(f"[STREAM] Update event: status ID {event.status.id}")
        elif isinstance(event, StatusEditEvent):
            logger.info(f"[STREAM] Edit event: status ID {event.status.id}")
        else:
            logger.warning(f"[STREAM] Unhandled event type: {type(event).__name__}")

    async def run(self, events: AsyncIterator[StreamEvent]) -> None:
        """Consume events until the stream ends or the task is cancelled."""
        self.running = True
        logger.info("[STREAM] All systems operational. Waiting for mentions...")
        try:
            async for event in events:
                try:
                    await self.dispatch(event)
                except Exception as e:
                    # One bad event must not end the stream
                    self.stats["errors"] += 1
                    logger.error(f"[STREAM] Error handling {type(event).__name__}: {e}")
                    logger.exception(e)
        except asyncio.CancelledError:
            logger.info("[STREAM] Consumer cancelled")
            raise
        else:
            logger.error("[STREAM] User stream closed by server")
        finally:
            self.running = False
