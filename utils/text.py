"""
Text helpers for the mention pipeline.

HTML flattening, mention parsing and rewriting, and cleanup of model output.
"""

import logging
import re
import unicodedata

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction

logger = logging.getLogger(__name__)

MENTION_PATTERN = re.compile(r"(?<![\w@])@[\w.-]+(?:@[\w.-]+)?")

# Characters removed by clean_response (symbol, other / symbol, modifier)
EMOJI_CATEGORIES = {"So", "Sk"}

_NON_TEXT_NODES = (Comment, Declaration, Doctype, ProcessingInstruction)


def extract_text_from_html(content: str) -> str:
    """
    Flatten markup to its text nodes, in document order.

    Whitespace is kept as found. Returns `content` unchanged if it cannot be
    parsed.
    """
    try:
        soup = BeautifulSoup(content, "html.parser")
    except Exception as e:
        logger.warning(f"[HTML] Error parsing HTML: {e}")
        return content

    parts = []
    stack = [soup]
    while stack:
        node = stack.pop()
        if isinstance(node, NavigableString):
            if not isinstance(node, _NON_TEXT_NODES):
                parts.append(str(node))
        elif isinstance(node, Tag):
            # Reversed so the first child is popped first
            stack.extend(reversed(node.contents))
    return "".join(parts)


def extract_mentions(content: str) -> tuple[list[str], str]:
    """Return the `@user[@domain]` tokens in `content` and the text without them."""
    mentions = MENTION_PATTERN.findall(content)
    remaining = MENTION_PATTERN.sub("", content)
    return mentions, remaining


def _qualify(handle: str, local_domain: str) -> str:
    handle = handle.lstrip("@")
    if "@" in handle:
        return "@" + handle
    return f"@{handle}@{local_domain}"


def build_mention_prefix(
    thread_mentions: list[str],
    original_author: str,
    bot_handle: str,
    local_domain: str
) -> list[str]:
    """
    Canonical mention list for a reply.

    Every handle in `thread_mentions` plus `original_author`, qualified with
    `local_domain` when bare, deduplicated and sorted. The bot's own handle
    is never included.

    Args:
        thread_mentions: Handles mentioned in the triggering status.
        original_author: Handle of the account that mentioned the bot.
        bot_handle: The bot's own handle (bare or qualified).
        local_domain: Host of the bot's server.

    Returns:
        Sorted list of `@user@host` strings.
    """
    bot = _qualify(bot_handle, local_domain)
    mention_set = set()
    for handle in [*thread_mentions, original_author]:
        if not handle or not handle.lstrip("@"):
            continue
        qualified = _qualify(handle, local_domain)
        if qualified == bot:
            continue
        mention_set.add(qualified)
    return sorted(mention_set)


def prepend_mentions(mentions: list[str], response: str) -> str:
    """Prefix `response` with the mentions, separated by single spaces."""
    if not mentions:
        return response
    if not response:
        return " ".join(mentions)
    return " ".join(mentions) + " " + response


def clean_response(response: str) -> str:
    """
    Tidy generated text before posting.

    Strips emoji-like symbols, collapses repeated spaces and puts exactly one
    space after each period (none before). Idempotent.
    """
    # Remove emojis
    response = "".join(
        ch for ch in response if unicodedata.category(ch) not in EMOJI_CATEGORIES
    )

    # Fix double spaces
    while "  " in response:
        response = response.replace("  ", " ")

    # Fix spacing around periods. Dots separated only by spaces form one mark,
    # so "..." stays together instead of becoming ". . ."
    response = re.sub(
        r" *(\.(?: *\.)*) *",
        lambda m: m.group(1).replace(" ", "") + " ",
        response
    )
    # No trailing space before a line break
    response = re.sub(r" +\n", "\n", response)

    return response.strip()


def truncate_reply(prefix: str, body: str, limit: int) -> str:
    """
    Shorten `body` so `prefix + body` fits in `limit` characters.

    The prefix is never cut; the body gets a trailing "..." when shortened.
    """
    if len(prefix) + len(body) <= limit:
        return body
    room = limit - len(prefix) - 3
    if room <= 0:
        return ""
    return body[:room].rstrip() + "..."
