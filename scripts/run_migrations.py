#!/usr/bin/env python3
"""Upgrade the relational store schema to the latest revision.

The document store has no migrations; its collections are created when the
API first connects.
"""

import sys

from alembic import command
from alembic.config import Config

from social.config import Settings
from social.util.logging import setup_logging
from social.util.observability import configure_logfire, tracked


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    # A failure exits non-zero so the API never starts on a stale schema
    with tracked("Database migration", revision="head"):
        command.upgrade(Config("alembic.ini"), "head")
    return 0


if __name__ == "__main__":
    sys.exit(main())
