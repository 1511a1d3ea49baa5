import unittest

from services.models import Attachment, Notification, Status, url_suffix
from tests.helpers import make_status


class StatusModelTest(unittest.TestCase):
    def test_parent_id_string_and_number_normalize_to_same_id(self):
        as_string = make_status("2", parent="109876543210")
        as_number = make_status("3", parent=109876543210)
        self.assertEqual(as_string.in_reply_to_id, "109876543210")
        self.assertEqual(as_number.in_reply_to_id, as_string.in_reply_to_id)

    def test_missing_parent_is_none(self):
        self.assertIsNone(make_status("1").in_reply_to_id)
        self.assertIsNone(make_status("1", parent="").in_reply_to_id)

    def test_unknown_fields_ignored(self):
        status = Status.model_validate({
            "id": 42,
            "account": {"id": 7, "username": "alice", "acct": "alice", "display_name": "Alice"},
            "content": "<p>hi</p>",
            "visibility": "unlisted",
            "spoiler_text": None,
            "favourites_count": 3,
        })
        self.assertEqual(status.id, "42")
        self.assertEqual(status.account.id, "7")
        self.assertEqual(status.spoiler_text, "")
        self.assertEqual(status.media_attachments, [])

    def test_notification_with_status(self):
        notification = Notification.model_validate({
            "id": "99",
            "type": "mention",
            "account": {"id": "1", "username": "bob", "acct": "bob@remote.example"},
            "status": {
                "id": "5",
                "account": {"id": "1", "username": "bob", "acct": "bob@remote.example"},
                "content": "<p>@macr0 hi</p>",
                "visibility": "direct",
            },
        })
        self.assertEqual(notification.status.visibility, "direct")
        self.assertEqual(notification.account.acct, "bob@remote.example")


class AttachmentKindTest(unittest.TestCase):
    def kind(self, media_type, url):
        return Attachment(type=media_type, url=url).kind

    def test_image_kind_follows_url_suffix(self):
        self.assertEqual(self.kind("image", "https://files.example/a/b.png"), "image/png")
        self.assertEqual(self.kind("image", "https://files.example/a/b.WEBP?x=1"), "image/webp")
        self.assertEqual(self.kind("image", "https://files.example/a/b.jpg"), "image/jpeg")
        self.assertEqual(self.kind("image", "https://files.example/a/noext"), "image/jpeg")
        self.assertEqual(self.kind("image", "https://files.example/a/b.gif"), "image/gif")

    def test_other_media(self):
        self.assertEqual(self.kind("gifv", "https://files.example/a.mp4"), "video/mp4")
        self.assertEqual(self.kind("video", "https://files.example/a.mp4"), "video/mp4")
        self.assertEqual(self.kind("audio", "https://files.example/a.mp3"), "audio/mpeg")
        self.assertEqual(self.kind("unknown", "https://files.example/a.bin"), "application/octet-stream")

    def test_mime_type_passes_through(self):
        self.assertEqual(self.kind("image/png", "https://files.example/a"), "image/png")

    def test_url_suffix(self):
        self.assertEqual(url_suffix("https://x.example/media/file.PNG"), ".png")
        self.assertEqual(url_suffix("https://x.example/media/file"), "")
        self.assertEqual(url_suffix("https://x.example/v1.2/file"), "")


if __name__ == "__main__":
    unittest.main()
