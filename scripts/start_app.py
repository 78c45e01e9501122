#!/usr/bin/env python3
"""Serve the API with uvicorn."""

import sys

import uvicorn

from social.config import Settings
from social.util.logging import setup_logging
from social.util.observability import configure_logfire, tracked


def main() -> int:
    settings = Settings()
    # Before the app import so startup errors are reported
    configure_logfire(settings)
    setup_logging(settings)

    with tracked("Serving API", port=settings.port):
        uvicorn.run(
            "social.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
