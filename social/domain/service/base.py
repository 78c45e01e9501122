"""Base service class for domain services."""

from collections.abc import Awaitable

import logfire
from sqlalchemy.exc import SQLAlchemyError

from social.domain.error import StorageError


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    async def _best_effort(self, operation: str, step: Awaitable[None], **attrs) -> bool:
        """Run a secondary write whose failure must not fail the request.

        Used for denormalized counters and notifications. Failures are
        logged and reported through the return value.

        Args:
            operation: Name used in the log event
            step: Awaitable performing the write
            **attrs: Extra log attributes (ids only)

        Returns:
            True if the write succeeded
        """
        try:
            await step
            return True
        except (SQLAlchemyError, StorageError) as e:
            logfire.error(
                "Secondary write failed",
                operation=operation,
                error=str(e),
                error_type=type(e).__name__,
                **attrs,
            )
            return False
