#!/usr/bin/env python3
"""Delete expired stories from the document store.

Run periodically, e.g. from cron. Seen markers and reactions of purged
stories stay in the relational store.
"""

import asyncio
import sys

import logfire

from social.config import Settings
from social.domain.service import StoryService
from social.util.di.container import create_container
from social.util.logging import setup_logging
from social.util.observability import configure_logfire, tracked


async def purge() -> int:
    container = create_container()
    try:
        async with container() as request_container:
            story_service = await request_container.get(StoryService)
            return await story_service.purge_expired()
    finally:
        await container.close()


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    with tracked("Story purge"):
        deleted = asyncio.run(purge())
    logfire.info("Expired stories purged", count=deleted)
    return 0


if __name__ == "__main__":
    sys.exit(main())
