"""
Mastodon client using httpx for the REST and streaming APIs.

Handles status lookup, posting replies, credential checks and decoding the
user stream (server-sent events) into typed events.
"""

import json
import logging
from typing import Any, AsyncIterator

import httpx
from pydantic import ValidationError

from services.errors import MastodonError
from services.models import (
    Account,
    DeleteEvent,
    ErrorEvent,
    Notification,
    NotificationEvent,
    Status,
    StatusEditEvent,
    StreamEvent,
    UpdateEvent,
    Visibility,
)
from utils.api import get_mastodon_headers

logger = logging.getLogger(__name__)


def decode_stream_event(name: str, data: str) -> StreamEvent | None:
    """
    Turn one server-sent event into a typed stream event.

    Returns None for event kinds the bot does not model.
    """
    try:
        if name == "notification":
            return NotificationEvent(Notification.model_validate(json.loads(data)))
        if name == "update":
            return UpdateEvent(Status.model_validate(json.loads(data)))
        if name == "status.update":
            return StatusEditEvent(Status.model_validate(json.loads(data)))
        if name == "delete":
            return DeleteEvent(data.strip())
    except (json.JSONDecodeError, ValidationError) as e:
        return ErrorEvent(f"Could not decode {name} event: {e}")

    logger.info(f"[STREAM] Unhandled event type: {name}")
    return None


async def iter_sse(lines: AsyncIterator[str]) -> AsyncIterator[tuple[str, str]]:
    """Group raw SSE lines into (event name, data) pairs."""
    name = "message"
    data: list[str] = []
    async for line in lines:
        if line == "":
            if data:
                yield name, "\n".join(data)
            name, data = "message", []
            continue
        if line.startswith(":"):
            # Heartbeat
            continue
        field, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]
        if field == "event":
            name = value
        elif field == "data":
            data.append(value)
    if data:
        yield name, "\n".join(data)


class UserStream:
    """An open connection to the authenticated user's stream."""

    def __init__(self, response: httpx.Response):
        self._response = response

    async def events(self) -> AsyncIterator[StreamEvent]:
        """Yield typed events until the server closes the stream."""
        async for name, data in iter_sse(self._response.aiter_lines()):
            event = decode_stream_event(name, data)
            if event is not None:
                yield event

    async def aclose(self) -> None:
        await self._response.aclose()


class MastodonClient:
    """Mastodon API client for a single bot account."""

    def __init__(
        self,
        server: str,
        access_token: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None
    ):
        """
        Initialize Mastodon client.

        Args:
            server: Server origin, e.g. "https://fuzzies.wtf".
            access_token: OAuth access token of the bot account.
            timeout: Timeout in seconds for REST calls.
            transport: Optional transport override.
        """
        self.server = server.rstrip("/")
        self.timeout = timeout
        self.http = httpx.AsyncClient(
            base_url=self.server,
            headers=get_mastodon_headers(access_token),
            timeout=timeout,
            transport=transport
        )

    async def close(self) -> None:
        await self.http.aclose()

    def _check(self, response: httpx.Response, action: str) -> Any:
        if response.status_code >= 400:
            try:
                detail = response.json().get("error", response.text)
            except (ValueError, AttributeError):
                detail = response.text
            raise MastodonError(
                f"{action} failed ({response.status_code}): {detail}",
                status_code=response.status_code
            )
        return response.json()

    async def verify_credentials(self) -> Account:
        """Return the authenticated account."""
        response = await self.http.get("/api/v1/accounts/verify_credentials")
        return Account.model_validate(self._check(response, "verify_credentials"))

    async def get_status(self, status_id: str) -> Status:
        """Fetch a single status by id."""
        response = await self.http.get(f"/api/v1/statuses/{status_id}")
        return Status.model_validate(self._check(response, f"get_status {status_id}"))

    async def reply(
        self,
        text: str,
        in_reply_to_id: str,
        visibility: Visibility,
        spoiler_text: str = ""
    ) -> Status:
        """
        Post a reply.

        Args:
            text: Reply body.
            in_reply_to_id: Status being replied to.
            visibility: Visibility of the reply.
            spoiler_text: Content warning, empty for none.

        Returns:
            The created status.
        """
        payload = {
            "status": text,
            "in_reply_to_id": in_reply_to_id,
            "visibility": visibility,
        }
        if spoiler_text:
            payload["spoiler_text"] = spoiler_text

        response = await self.http.post(
            "/api/v1/statuses",
            json=payload,
            headers={"Idempotency-Key": f"reply-{in_reply_to_id}"}
        )
        status = Status.model_validate(self._check(response, "post_status"))
        logger.info(f"[MASTODON] Posted status {status.id} in reply to {in_reply_to_id}")
        return status

    async def connect_user_stream(self) -> UserStream:
        """
        Open the user stream.

        Raises:
            MastodonError: The server refused the connection.
        """
        request = self.http.build_request(
            "GET",
            "/api/v1/streaming/user",
            headers={"Accept": "text/event-stream"},
            timeout=httpx.Timeout(self.timeout, read=None)
        )
        response = await self.http.send(request, stream=True, follow_redirects=True)
        if response.status_code >= 400:
            await response.aread()
            await response.aclose()
            raise MastodonError(
                f"streaming failed ({response.status_code}): {response.text[:200]}",
                status_code=response.status_code
            )
        logger.info("[STREAM] Connected to user stream")
        return UserStream(response)
