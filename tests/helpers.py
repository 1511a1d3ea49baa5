"""Builders and fakes shared by the test modules."""

from services.errors import MastodonError
from services.models import Attachment, Notification, Status


def make_status(
    status_id,
    username="alice",
    content="<p>hello</p>",
    parent=None,
    attachments=(),
    visibility="public",
    mentions=(),
    acct=None,
    spoiler_text="",
):
    return Status.model_validate({
        "id": status_id,
        "account": {"id": f"acc-{username}", "username": username, "acct": acct or username},
        "content": content,
        "visibility": visibility,
        "in_reply_to_id": parent,
        "media_attachments": [
            a.model_dump() if isinstance(a, Attachment) else a for a in attachments
        ],
        "mentions": [
            {"id": f"m-{m}", "username": m.split("@")[0], "acct": m, "url": ""}
            for m in mentions
        ],
        "spoiler_text": spoiler_text,
    })


def make_notification(status, notification_type="mention", notification_id="n1"):
    return Notification.model_validate({
        "id": notification_id,
        "type": notification_type,
        "account": status.account.model_dump(),
        "status": status.model_dump(),
    })


def make_chain(depth, username="user"):
    """Statuses s1 (root) ... s<depth> (leaf), each replying to the previous."""
    statuses = {}
    for i in range(1, depth + 1):
        parent = f"s{i - 1}" if i > 1 else None
        statuses[f"s{i}"] = make_status(f"s{i}", username=f"{username}{i}", content=f"<p>post {i}</p>", parent=parent)
    return statuses


class FakeMastodon:
    """In-memory stand-in for MastodonClient."""

    def __init__(self, statuses=None, fail_ids=(), fail_post=False):
        self.statuses = dict(statuses or {})
        self.fail_ids = set(fail_ids)
        self.fail_post = fail_post
        self.lookups = []
        self.posts = []

    async def get_status(self, status_id):
        self.lookups.append(status_id)
        if status_id in self.fail_ids or status_id not in self.statuses:
            raise MastodonError(f"get_status {status_id} failed (404): Record not found", status_code=404)
        return self.statuses[status_id]

    async def reply(self, text, in_reply_to_id, visibility, spoiler_text=""):
        if self.fail_post:
            raise MastodonError("post_status failed (422): Validation failed", status_code=422)
        self.posts.append({
            "text": text,
            "in_reply_to_id": in_reply_to_id,
            "visibility": visibility,
            "spoiler_text": spoiler_text,
        })
        return make_status(f"reply-{len(self.posts)}", username="macr0")


class FakeLLM:
    """Records prompts and returns a canned response or raises."""

    def __init__(self, response="sure thing", error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def generate(self, segments):
        self.calls.append(segments)
        if self.error is not None:
            raise self.error
        return self.response
