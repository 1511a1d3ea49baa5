import json
import unittest

import httpx

from services.errors import MastodonError
from services.mastodon import MastodonClient, decode_stream_event, iter_sse
from services.models import DeleteEvent, ErrorEvent, NotificationEvent, StatusEditEvent, UpdateEvent

STATUS = {
    "id": "200",
    "account": {"id": "1", "username": "alice", "acct": "alice"},
    "content": "<p>hi</p>",
    "visibility": "public",
    "in_reply_to_id": None,
}

NOTIFICATION = {
    "id": "300",
    "type": "mention",
    "account": STATUS["account"],
    "status": STATUS,
}


async def aiter(items):
    for item in items:
        yield item


class StreamDecodingTest(unittest.IsolatedAsyncioTestCase):
    async def test_iter_sse_groups_lines(self):
        lines = [
            ":thump",
            "event: update",
            "data: {\"a\":",
            "data: 1}",
            "",
            "event: delete",
            "data: 123",
            "",
        ]
        events = [item async for item in iter_sse(aiter(lines))]
        self.assertEqual(events, [("update", "{\"a\":\n1}"), ("delete", "123")])

    async def test_iter_sse_flushes_trailing_event(self):
        events = [item async for item in iter_sse(aiter(["event: delete", "data: 9"]))]
        self.assertEqual(events, [("delete", "9")])

    def test_decode_known_events(self):
        self.assertIsInstance(decode_stream_event("notification", json.dumps(NOTIFICATION)), NotificationEvent)
        self.assertIsInstance(decode_stream_event("update", json.dumps(STATUS)), UpdateEvent)
        self.assertIsInstance(decode_stream_event("status.update", json.dumps(STATUS)), StatusEditEvent)
        self.assertEqual(decode_stream_event("delete", "123\n"), DeleteEvent("123"))

    def test_decode_bad_payload_is_error_event(self):
        self.assertIsInstance(decode_stream_event("notification", "{not json"), ErrorEvent)
        self.assertIsInstance(decode_stream_event("update", json.dumps({"id": "1"})), ErrorEvent)

    def test_decode_unknown_event_is_dropped(self):
        self.assertIsNone(decode_stream_event("filters_changed", ""))


class MastodonClientTest(unittest.IsolatedAsyncioTestCase):
    def make_client(self, handler):
        return MastodonClient("https://fuzzies.wtf/", "token", transport=httpx.MockTransport(handler))

    async def test_get_status(self):
        def handler(request):
            self.assertEqual(request.url.path, "/api/v1/statuses/200")
            self.assertEqual(request.headers["Authorization"], "Bearer token")
            return httpx.Response(200, json=STATUS)

        client = self.make_client(handler)
        try:
            status = await client.get_status("200")
        finally:
            await client.close()
        self.assertEqual(status.account.username, "alice")

    async def test_get_status_not_found(self):
        client = self.make_client(lambda request: httpx.Response(404, json={"error": "Record not found"}))
        try:
            with self.assertRaises(MastodonError) as ctx:
                await client.get_status("404")
        finally:
            await client.close()
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertIn("Record not found", str(ctx.exception))

    async def test_reply_posts_threaded_status(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={**STATUS, "id": "201", "in_reply_to_id": "200"})

        client = self.make_client(handler)
        try:
            status = await client.reply("hello", in_reply_to_id="200", visibility="unlisted", spoiler_text="cw")
        finally:
            await client.close()

        self.assertEqual(status.id, "201")
        request = seen[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(request.url.path, "/api/v1/statuses")
        self.assertEqual(
            json.loads(request.content),
            {"status": "hello", "in_reply_to_id": "200", "visibility": "unlisted", "spoiler_text": "cw"},
        )
        self.assertEqual(request.headers["Idempotency-Key"], "reply-200")

    async def test_user_stream_yields_events(self):
        body = (
            "event: notification\n"
            f"data: {json.dumps(NOTIFICATION)}\n"
            "\n"
            ":thump\n"
            "event: delete\n"
            "data: 55\n"
            "\n"
        )
        client = self.make_client(lambda request: httpx.Response(200, text=body))
        try:
            stream = await client.connect_user_stream()
            events = [event async for event in stream.events()]
            await stream.aclose()
        finally:
            await client.close()

        self.assertIsInstance(events[0], NotificationEvent)
        self.assertEqual(events[0].notification.status.id, "200")
        self.assertEqual(events[1], DeleteEvent("55"))

    async def test_user_stream_refused(self):
        client = self.make_client(lambda request: httpx.Response(401, json={"error": "The access token is invalid"}))
        try:
            with self.assertRaises(MastodonError):
                await client.connect_user_stream()
        finally:
            await client.close()


if __name__ == "__main__":
    unittest.main()
