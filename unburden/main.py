"""Application entrypoint."""

from __future__ import annotations

import asyncio
import logging
import sys

from unburden.commands import CommandDispatcher
from unburden.config import Settings, load_settings
from unburden.generation import ContentGenerator
from unburden.llm.gemini import GeminiProvider
from unburden.repetition import RepetitionTracker

logging.basicConfig(level=logging.INFO)
LOGGER = logging.getLogger(__name__)


def _generation_deadline(settings: Settings) -> float:
    """Upper bound for one generation: every attempt plus every backoff wait."""

    retries = settings.retry_max_retries
    backoff = settings.retry_base_delay_seconds * (2**retries - 1)
    return settings.request_timeout_seconds * (retries + 1) + backoff


async def run() -> None:
    """Initialize app layers and answer commands read from stdin."""

    settings = load_settings()

    provider = GeminiProvider(settings)
    generator = ContentGenerator(
        llm=provider,
        tracker=RepetitionTracker(settings.affirmation_history_size),
        request_timeout_seconds=_generation_deadline(settings),
    )
    dispatcher = CommandDispatcher(generator, history_window=settings.chat_history_window)

    loop = asyncio.get_running_loop()
    try:
        while True:
            line = await loop.run_in_executor(None, sys.stdin.readline)
            if not line:
                break
            reply = await dispatcher.dispatch(line)
            if reply is not None:
                print(reply, flush=True)
    finally:
        LOGGER.info("Companion shutdown complete")


def main() -> None:
    """Synchronous wrapper for asyncio entrypoint."""

    asyncio.run(run())


if __name__ == "__main__":
    main()
