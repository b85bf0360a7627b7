"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services.

    A use case runs inside one request-scoped unit of work: whatever it
    writes is committed together when the request succeeds.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
