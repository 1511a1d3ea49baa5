"""
Macr0 - Mastodon mention bot.

FastAPI application that listens to the bot account's user stream and
answers mentions with Gemini-generated replies.
"""

import asyncio
import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from config.personality import build_system_prompt
from config.settings import get_settings
from services.llm import LLMClient
from services.mastodon import MastodonClient, UserStream
from services.mentions import MentionHandler
from services.prompt import PromptAssembler
from services.stream import StreamConsumer
from utils.api import USER_AGENT

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def _log_consumer_exit(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.error(f"[STREAM] Stream consumer crashed: {error!r}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown."""
    settings = get_settings()

    # Startup
    logger.info("Starting application...")

    mastodon = MastodonClient(
        settings.server_origin,
        settings.mastodon_access_token,
        timeout=settings.request_timeout
    )
    media_http = httpx.AsyncClient(
        timeout=settings.request_timeout,
        headers={"User-Agent": USER_AGENT}
    )
    stream: UserStream | None = None
    consumer_task: asyncio.Task | None = None

    try:
        # Fails fast on bad credentials or an unreachable server
        me = await mastodon.verify_credentials()
        logger.info("=" * 50)
        logger.info(f"MASTODON ACCOUNT: @{me.acct} on {settings.local_domain}")
        logger.info("=" * 50)

        handler = MentionHandler(
            mastodon=mastodon,
            llm=LLMClient(settings.gemini_api_key, timeout=settings.llm_timeout),
            assembler=PromptAssembler(media_http, settings.bot_name),
            system_prompt=build_system_prompt(settings.bot_name, settings.local_domain),
            bot_handle=settings.mastodon_username,
            local_domain=settings.local_domain,
            dm_allowlist=settings.dm_allowlist,
            thread_max_depth=settings.thread_max_depth,
            max_reply_chars=settings.max_reply_chars
        )
        consumer = StreamConsumer(handler)
        app.state.consumer = consumer
        logger.info("Services initialized")

        stream = await mastodon.connect_user_stream()
        consumer_task = asyncio.create_task(consumer.run(stream.events()))
        consumer_task.add_done_callback(_log_consumer_exit)

        yield

    finally:
        # Shutdown
        logger.info("Shutting down application...")
        if consumer_task is not None:
            consumer_task.cancel()
            try:
                await consumer_task
            except asyncio.CancelledError:
                pass
            except Exception as e:
                logger.error(f"Stream consumer stopped with error: {e}")
        if stream is not None:
            await stream.aclose()
        await media_http.aclose()
        await mastodon.close()
        logger.info("Application shutdown complete")


app = FastAPI(
    title="Macr0",
    description="Mastodon mention bot backed by Gemini",
    version=VERSION,
    lifespan=lifespan
)


@app.get("/health")
async def health_check():
    """Health check endpoint with stream status."""
    consumer: StreamConsumer | None = getattr(app.state, "consumer", None)
    streaming = consumer is not None and consumer.running
    return {
        "status": "healthy" if streaming else "degraded",
        "stream": "connected" if streaming else "disconnected",
        "stats": consumer.stats if consumer else {},
        "version": VERSION
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
