"""
Prompts module - Fixed prompt phrases.

Contains prompt templates for:
- mention_reply.py: transcript, image and turn labels for mention replies
"""

from config.prompts.mention_reply import (
    CONTINUATION_CUE_TEMPLATE,
    CONVERSATION_HEADER,
    IMAGE_ALT_TEXT_TEMPLATE,
    IMAGE_COUNT_TEMPLATE,
    IMAGE_LABEL_TEMPLATE,
    MEDIA_ALT_TEXT_SUFFIX,
    TURN_TEMPLATE,
    UNVIEWABLE_MEDIA_TEMPLATE,
)

__all__ = [
    "CONTINUATION_CUE_TEMPLATE",
    "CONVERSATION_HEADER",
    "IMAGE_ALT_TEXT_TEMPLATE",
    "IMAGE_COUNT_TEMPLATE",
    "IMAGE_LABEL_TEMPLATE",
    "MEDIA_ALT_TEXT_SUFFIX",
    "TURN_TEMPLATE",
    "UNVIEWABLE_MEDIA_TEMPLATE",
]
