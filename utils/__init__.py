"""
Utility modules for the Macr0 bot.

Contains shared functionality used across services.
"""

from utils.api import get_gemini_headers, get_gemini_url, get_mastodon_headers

__all__ = ["get_gemini_headers", "get_gemini_url", "get_mastodon_headers"]
