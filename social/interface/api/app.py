"""FastAPI application."""

from typing import Optional

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from social.config import Settings
from social.interface.api.errors import register_error_handlers
from social.interface.api.routes import (
    auth,
    comments,
    feed,
    friends,
    health,
    likes,
    notifications,
    posts,
    saved,
    stories,
    users,
)
from social.util.di.container import create_container, setup_di
from social.util.observability import instrument_fastapi


def create_app(container: Optional[AsyncContainer] = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use, defaults to the production container
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Social API",
        description="Backend API for a social network: posts, comments, likes, follows, friends, stories and notifications",
        version="1.0.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    register_error_handlers(app_instance)

    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    # Health check stays outside the versioned prefix
    app_instance.include_router(health.router)
    for module in (
        auth,
        users,
        posts,
        feed,
        comments,
        likes,
        saved,
        friends,
        stories,
        notifications,
    ):
        app_instance.include_router(module.router, prefix=settings.api_prefix)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
