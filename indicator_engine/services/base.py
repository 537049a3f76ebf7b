"""
Base Service Interface

Services expose one async entry point over a typed request/response pair.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseService(ABC, Generic[InputT, OutputT]):
    """
    Base class for engine services.

    A service declares its request and response models, validates the
    request before running, and reports whether it can accept work.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name used in logs and errors."""
        pass

    @abstractmethod
    async def execute(self, input_data: InputT) -> OutputT:
        """
        Run the service on one request.

        Raises:
            ServiceError: If the request cannot be processed
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass

    async def validate_input(self, input_data: InputT) -> InputT:
        """Pydantic already checked field types; override for semantic checks."""
        return input_data


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, service_name: str, message: str, details: Optional[dict] = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class ValidationError(ServiceError):
    """Request is well-typed but cannot be analyzed (e.g. no candles)."""
    pass
