"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Use cases orchestrate domain services for one API operation."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
