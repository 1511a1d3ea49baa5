"""
Data models for Mastodon entities, stream events and prompt segments.

Mastodon payloads are validated into pydantic models at the client boundary,
so the rest of the bot only sees normalized, immutable records.
"""

from dataclasses import dataclass, field
from typing import Any, Literal
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, field_validator

Visibility = Literal["public", "unlisted", "private", "direct"]


class _Entity(BaseModel):
    """Base for read-only Mastodon entities; unknown fields are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class Account(_Entity):
    id: str
    username: str
    acct: str

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> str:
        return str(value)


class Mention(_Entity):
    id: str
    username: str
    acct: str
    url: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> str:
        return str(value)


def url_suffix(url: str) -> str:
    """Lower-cased path suffix of a URL, query string ignored (".png", "")."""
    path = urlparse(url).path.lower()
    name = path.rsplit("/", 1)[-1]
    if "." not in name:
        return ""
    return "." + name.rsplit(".", 1)[-1]


class Attachment(_Entity):
    """Media attached to a status."""

    type: str
    url: str
    description: str | None = None

    @property
    def kind(self) -> str:
        """MIME-like kind of the attachment."""
        if "/" in self.type:
            return self.type
        if self.type == "image":
            return {
                ".png": "image/png",
                ".webp": "image/webp",
                ".gif": "image/gif",
            }.get(url_suffix(self.url), "image/jpeg")
        if self.type in ("gifv", "video"):
            return "video/mp4"
        if self.type == "audio":
            return "audio/mpeg"
        return "application/octet-stream"


class Status(_Entity):
    id: str
    account: Account
    content: str = ""
    visibility: Visibility = "public"
    in_reply_to_id: str | None = None
    media_attachments: list[Attachment] = []
    mentions: list[Mention] = []
    spoiler_text: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> str:
        return str(value)

    @field_validator("in_reply_to_id", mode="before")
    @classmethod
    def _normalize_parent_id(cls, value: Any) -> str | None:
        # Servers send the parent id as a string, some proxies as a number
        if value is None or value == "":
            return None
        return str(value)

    @field_validator("spoiler_text", mode="before")
    @classmethod
    def _none_spoiler(cls, value: Any) -> str:
        return value or ""


class Notification(_Entity):
    id: str
    type: str
    account: Account
    status: Status | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> str:
        return str(value)


# Stream events


@dataclass(frozen=True)
class NotificationEvent:
    notification: Notification


@dataclass(frozen=True)
class UpdateEvent:
    status: Status


@dataclass(frozen=True)
class StatusEditEvent:
    status: Status


@dataclass(frozen=True)
class DeleteEvent:
    status_id: str


@dataclass(frozen=True)
class ErrorEvent:
    error: str


StreamEvent = NotificationEvent | UpdateEvent | StatusEditEvent | DeleteEvent | ErrorEvent


# Conversation and prompt


@dataclass
class ConversationContext:
    """Thread lines (oldest first) and every attachment seen while walking."""

    lines: list[tuple[str, str]] = field(default_factory=list)
    attachments: list[Attachment] = field(default_factory=list)


@dataclass(frozen=True)
class TextSegment:
    text: str


@dataclass(frozen=True)
class ImageSegment:
    data: bytes
    format: str

    @property
    def mime_type(self) -> str:
        return f"image/{self.format}"


PromptSegment = TextSegment | ImageSegment
