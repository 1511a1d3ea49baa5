"""
Prompt assembler - builds the ordered multimodal prompt for a mention.
"""

import logging

import httpx

from config.prompts import (
    CONTINUATION_CUE_TEMPLATE,
    CONVERSATION_HEADER,
    IMAGE_ALT_TEXT_TEMPLATE,
    IMAGE_COUNT_TEMPLATE,
    IMAGE_LABEL_TEMPLATE,
    MEDIA_ALT_TEXT_SUFFIX,
    TURN_TEMPLATE,
    UNVIEWABLE_MEDIA_TEMPLATE,
)
from services.media import download_image, get_media_type_description, is_supported_image_type
from services.models import Attachment, ConversationContext, ImageSegment, PromptSegment, TextSegment

logger = logging.getLogger(__name__)


class PromptAssembler:
    """Turns a conversation and its media into prompt segments."""

    def __init__(self, http: httpx.AsyncClient, bot_name: str):
        """
        Args:
            http: Client used to download attachment images.
            bot_name: Name the model answers as; used for the closing cue.
        """
        self.http = http
        self.bot_name = bot_name

    async def assemble(
        self,
        system_persona: str,
        context: ConversationContext,
        current_user: str,
        current_text: str,
        images: list[Attachment]
    ) -> list[PromptSegment]:
        """
        Build the prompt in fixed order: persona, image count, transcript,
        media, current turn, continuation cue.

        Raises:
            httpx.TransportError: An image could not be fetched at all.
        """
        segments: list[PromptSegment] = [TextSegment(system_persona)]

        if images:
            segments.append(TextSegment(IMAGE_COUNT_TEMPLATE.format(count=len(images))))

        segments.append(TextSegment(CONVERSATION_HEADER))
        segments.extend(
            TextSegment(TURN_TEMPLATE.format(speaker=speaker, text=text))
            for speaker, text in context.lines
        )

        for index, attachment in enumerate(images, start=1):
            segments.extend(await self._media_segments(index, attachment))

        segments.append(TextSegment(TURN_TEMPLATE.format(speaker=current_user, text=current_text)))
        segments.append(TextSegment(CONTINUATION_CUE_TEMPLATE.format(name=self.bot_name)))
        return segments

    async def _media_segments(self, index: int, attachment: Attachment) -> list[PromptSegment]:
        kind = attachment.kind
        if is_supported_image_type(kind):
            image = await download_image(self.http, attachment.url)
            if image is not None:
                data, file_format = image
                segments: list[PromptSegment] = [
                    ImageSegment(data, file_format),
                    TextSegment(IMAGE_LABEL_TEMPLATE.format(index=index)),
                ]
                if attachment.description:
                    segments.append(TextSegment(IMAGE_ALT_TEXT_TEMPLATE.format(description=attachment.description)))
                return segments

        media = get_media_type_description(kind)
        if attachment.description:
            media += MEDIA_ALT_TEXT_SUFFIX.format(description=attachment.description)
        logger.info(f"[PROMPT] Attachment {index} ({kind}) sent as placeholder")
        return [TextSegment(UNVIEWABLE_MEDIA_TEMPLATE.format(index=index, media=media))]
