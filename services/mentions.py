"""
Mention handler service.

Processes one Mastodon mention notification end to end:
1. Filter out self-mentions, followers-only posts and unapproved DMs
2. Extract the text and declared mentions
3. Walk the thread for context
4. Assemble the prompt and generate a reply (fallback text on failure)
5. Strip echoed mentions and clean the reply
6. Prepend the canonical mention list
7. Downgrade public visibility to unlisted
8. Post the reply
"""

import logging
import time
from typing import Any

import httpx

from config.personality import FALLBACK_REPLY
from services.errors import MastodonError
from services.llm import LLMClient
from services.mastodon import MastodonClient
from services.models import Notification, Status, Visibility
from services.prompt import PromptAssembler
from services.thread import ThreadWalker
from utils.text import (
    build_mention_prefix,
    clean_response,
    extract_mentions,
    extract_text_from_html,
    prepend_mentions,
    truncate_reply,
)

logger = logging.getLogger(__name__)


def reply_visibility(visibility: Visibility) -> Visibility:
    """Bot replies never land on public timelines."""
    if visibility == "public":
        return "unlisted"
    return visibility


class MentionHandler:
    """Turns mention notifications into threaded AI replies."""

    def __init__(
        self,
        mastodon: MastodonClient,
        llm: LLMClient,
        assembler: PromptAssembler,
        system_prompt: str,
        bot_handle: str,
        local_domain: str,
        dm_allowlist: list[str] | None = None,
        thread_max_depth: int = 20,
        max_reply_chars: int = 500
    ):
        """
        Initialize mention handler.

        Args:
            mastodon: Client used to look up parents and post the reply.
            llm: Completion client.
            assembler: Prompt builder.
            system_prompt: Persona text that opens every prompt.
            bot_handle: The bot's own acct.
            local_domain: Host used to qualify bare handles.
            dm_allowlist: Accounts allowed to reach the bot by DM.
            thread_max_depth: Maximum number of posts in the context.
            max_reply_chars: Character limit of a posted reply.
        """
        self.mastodon = mastodon
        self.llm = llm
        self.assembler = assembler
        self.walker = ThreadWalker(mastodon)
        self.system_prompt = system_prompt
        self.bot_handle = bot_handle
        self.local_domain = local_domain
        self.dm_allowlist = set(dm_allowlist or [])
        self.thread_max_depth = thread_max_depth
        self.max_reply_chars = max_reply_chars

    def skip_reason(self, notification: Notification) -> str | None:
        """Why this notification gets no reply, or None if it should."""
        status = notification.status
        author = notification.account.acct

        if status is None:
            return "no_status"
        if author == self.bot_handle:
            return "from_self"
        if status.visibility == "private":
            return "private"
        if status.visibility == "direct" and author not in self.dm_allowlist:
            return "direct_not_allowed"
        return None

    async def handle(self, notification: Notification) -> dict[str, Any]:
        """
        Handle one mention notification.

        Returns:
            Result dict with success status.
        """
        reason = self.skip_reason(notification)
        if reason:
            logger.info(f"[MENTIONS] Ignoring notification {notification.id} from @{notification.account.acct}: {reason}")
            return {"success": False, "skipped": reason}

        start_time = time.time()
        status = notification.status
        author = notification.account

        # Extract
        thread_mentions = [mention.acct for mention in status.mentions]
        content = extract_text_from_html(status.content.strip())
        logger.info(f"[MENTIONS] @{author.acct}: Received mention: {content}")

        # Generate
        used_fallback = False
        try:
            response = await self._generate(status, author.username, content)
        except Exception as e:
            logger.error(f"[MENTIONS] @{author.acct}: Error generating AI response: {e}")
            logger.exception(e)
            response = FALLBACK_REPLY
            used_fallback = True
        else:
            _, response = extract_mentions(response)
            response = clean_response(response)
            if not response:
                logger.warning(f"[MENTIONS] @{author.acct}: Nothing left after cleaning, using fallback")
                response = FALLBACK_REPLY
                used_fallback = True

        # Mentions
        mentions = build_mention_prefix(thread_mentions, author.acct, self.bot_handle, self.local_domain)
        prefix = " ".join(mentions) + " " if mentions else ""
        response = prepend_mentions(mentions, truncate_reply(prefix, response, self.max_reply_chars))

        visibility = reply_visibility(status.visibility)

        # Post
        try:
            posted = await self.mastodon.reply(
                response,
                in_reply_to_id=status.id,
                visibility=visibility,
                spoiler_text=status.spoiler_text
            )
        except (MastodonError, httpx.HTTPError, ValueError) as e:
            # ValueError covers undecodable or invalid response bodies
            logger.error(f"[MENTIONS] @{author.acct}: Error posting response: {e}")
            return {"success": False, "error": str(e), "status_id": status.id}

        duration = round(time.time() - start_time, 1)
        logger.info(f"[MENTIONS] @{author.acct}: Posted response in {duration}s: {response}")

        return {
            "success": True,
            "status_id": status.id,
            "reply_id": posted.id,
            "reply": response,
            "visibility": visibility,
            "fallback": used_fallback
        }

    async def _generate(self, status: Status, username: str, content: str) -> str:
        """Walk the thread, build the prompt and call the model."""
        context = await self.walker.walk(status, self.thread_max_depth)
        prompt = await self.assembler.assemble(
            self.system_prompt,
            context,
            username,
            content,
            context.attachments
        )
        logger.info(f"[MENTIONS] @{username}: Prompt has {len(prompt)} segments")
        return await self.llm.generate(prompt)
