"""
API configuration.

Centralized endpoints and helper functions for Mastodon and Gemini calls.
"""

# Gemini API endpoint
GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

USER_AGENT = "Macr0Bot/1.0"


def get_gemini_url(model: str) -> str:
    """Return the generateContent endpoint for `model`."""
    return GEMINI_URL.format(model=model)


def get_gemini_headers(api_key: str) -> dict:
    """
    Get headers for Gemini API requests.

    Returns:
        dict: Headers including API key and content type.
    """
    return {
        "x-goog-api-key": api_key,
        "Content-Type": "application/json",
    }


def get_mastodon_headers(access_token: str) -> dict:
    """
    Get headers for Mastodon API requests.

    Returns:
        dict: Headers including bearer authorization.
    """
    return {
        "Authorization": f"Bearer {access_token}",
        "User-Agent": USER_AGENT,
    }
