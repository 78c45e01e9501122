"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from social.util.di import build_providers


def create_container() -> AsyncContainer:
    """Production container: every component uses its real implementation.

    Settings are read from the environment when first requested.
    """
    # FastapiProvider exposes the Request to request-scoped factories
    return make_async_container(*build_providers(), FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach a container to the application."""
    setup_dishka(container, app)
