"""Standard library logging setup.

Application modules log through `logging.getLogger(__name__)`; records are
printed to stdout and forwarded to Logfire.
"""

import logging
import sys

import logfire

from social.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries that are chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "asyncpg")


def _level_for(settings: Settings) -> int:
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "test":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure the root logger for the current process.

    Also warns when session tokens would be signed with the built-in
    development secret.

    Args:
        settings: Application settings
    """
    level = _level_for(settings)

    stdout = logging.StreamHandler(sys.stdout)
    stdout.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logging.basicConfig(
        level=level,
        handlers=[stdout, logfire.LogfireLoggingHandler()],
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("social").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        "Logging configured: environment=%s level=%s",
        settings.environment,
        logging.getLevelName(level),
    )

    if settings.auth.uses_default_secret and settings.environment != "test":
        logger.warning(
            "AUTH__JWT_SECRET is not set; session tokens use the insecure default secret"
        )
