"""
LLM client for the Gemini API.

Provides an async interface for multimodal (text + image) generation.
Configured once at startup with fixed decoding and safety settings.
"""

import base64
import logging
from typing import Any

import httpx

from config.models import (
    LLM_MODEL,
    LLM_TEMPERATURE,
    LLM_TOP_K,
    SAFETY_CATEGORIES,
    SAFETY_THRESHOLD,
)
from services.errors import LLMError
from services.models import ImageSegment, PromptSegment, TextSegment
from utils.api import get_gemini_headers, get_gemini_url

logger = logging.getLogger(__name__)


class LLMClient:
    """Async client for the Gemini generateContent API."""

    def __init__(
        self,
        api_key: str,
        model: str = LLM_MODEL,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None
    ):
        """
        Initialize LLM client.

        Args:
            api_key: Gemini API key.
            model: Gemini model identifier.
            timeout: Request timeout in seconds.
            client: Optional shared HTTP client; a short-lived one is used per
                call when omitted.
        """
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client = client

    def build_payload(self, segments: list[PromptSegment]) -> dict[str, Any]:
        """Build the generateContent request body for ordered prompt segments."""
        parts = []
        for segment in segments:
            if isinstance(segment, TextSegment):
                parts.append({"text": segment.text})
            elif isinstance(segment, ImageSegment):
                parts.append({
                    "inline_data": {
                        "mime_type": segment.mime_type,
                        "data": base64.b64encode(segment.data).decode("ascii")
                    }
                })
            else:
                raise TypeError(f"Unknown prompt segment: {type(segment).__name__}")

        return {
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {
                "temperature": LLM_TEMPERATURE,
                "topK": LLM_TOP_K
            },
            "safetySettings": [
                {"category": category, "threshold": SAFETY_THRESHOLD}
                for category in SAFETY_CATEGORIES
            ]
        }

    async def generate(self, segments: list[PromptSegment]) -> str:
        """
        Generate text from an ordered list of text and image segments.

        Args:
            segments: Prompt segments in the order the model should read them.

        Returns:
            Concatenated text of every candidate part.

        Raises:
            LLMError: The API returned an error or no text.
            httpx.HTTPError: Transport failure or timeout.
        """
        payload = self.build_payload(segments)
        url = get_gemini_url(self.model)
        headers = get_gemini_headers(self.api_key)

        if self._client is not None:
            response = await self._client.post(url, headers=headers, json=payload, timeout=self.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, headers=headers, json=payload)

        if response.status_code >= 400:
            raise LLMError(f"Gemini API error {response.status_code}: {response.text[:200]}")

        data = response.json()
        content = self.get_response_text(data)
        if not content:
            block_reason = data.get("promptFeedback", {}).get("blockReason")
            raise LLMError(f"Empty response from Gemini (block reason: {block_reason})")

        logger.info(f"[LLM] Generated response: {content[:100]}...")
        return content

    @staticmethod
    def get_response_text(data: dict[str, Any]) -> str:
        """Concatenate the text parts of every candidate."""
        response = ""
        for candidate in data.get("candidates") or []:
            content = candidate.get("content") or {}
            for part in content.get("parts") or []:
                response += part.get("text", "")
        return response
