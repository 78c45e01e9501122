"""Logfire setup for the API, the stores and the identity provider client.

Log ids and outcomes, never credentials:

    logfire.info("Firebase login succeeded", user_id=user.id)

    with logfire.span("identity_service.reconcile", subject_id=claim.subject_id):
        ...

Attribute names that look like credentials are scrubbed before export as a
second line of defence.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from social.config import Settings

SERVICE_NAME = "social-api"
SERVICE_VERSION = "1.0.0"

# Added to Logfire's default patterns (password, secret, auth, jwt, ...)
CREDENTIAL_PATTERNS = [
    r"id_?token",
    r"password_hash",
    r"bearer",
    r"private_key",
]


def _should_send(settings: Settings) -> bool:
    """Explicit setting wins, otherwise send only when a token is configured."""
    observability = settings.observability
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the current process.

    Set OBSERVABILITY__LOGFIRE_TOKEN to export to Logfire cloud, and
    OBSERVABILITY__SEND_TO_LOGFIRE to force exporting on or off.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=CREDENTIAL_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request, attributes):
    """Span attributes for a request.

    Records whether the caller presented credentials, never the header.
    """
    result = {**attributes}
    if hasattr(request, "method"):
        result["method"] = request.method
    if hasattr(request, "url"):
        result["path"] = request.url.path
    result["has_credentials"] = "authorization" in request.headers
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request handled by the application.

    Headers are not captured since Authorization carries bearer tokens.

    Args:
        app: FastAPI application instance
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine, store: str) -> None:
    """Trace queries on one of the two stores.

    Args:
        engine: SQLAlchemy async engine
        store: "relational" or "documents"
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.info(
        "SQLAlchemy instrumented",
        store=store,
        url=engine.url.render_as_string(hide_password=True),
    )


def instrument_httpx() -> None:
    """Trace outbound requests (signing key fetches)."""
    logfire.instrument_httpx()


@contextmanager
def tracked(operation: str, **attributes) -> Iterator[None]:
    """Run a process-level operation inside a span, reporting failures.

    Used by the scripts so startup, migration and maintenance failures reach
    Logfire before the process exits. Exceptions are re-raised.

    Args:
        operation: Human-readable operation name
        **attributes: Extra span attributes
    """
    with logfire.span(operation, **attributes):
        try:
            yield
        except Exception as e:
            logfire.exception(f"{operation} failed", error_type=type(e).__name__)
            raise
