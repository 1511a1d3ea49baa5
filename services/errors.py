"""
Exceptions raised by the Mastodon and Gemini clients.
"""


class MastodonError(Exception):
    """Mastodon API answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class LLMError(Exception):
    """Gemini call failed, was blocked, or produced no text."""
