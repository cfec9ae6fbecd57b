"""Interfaces and abstract base classes for inline diff services.

This module defines the abstract interfaces that all service implementations
should follow, ensuring consistent API and enabling dependency injection.
"""

from abc import abstractmethod
from typing import Any, Protocol

from ..models import DiffOperation, LineDiff, LineDiffResult, LineSelectEvent


class IDiffEngine(Protocol):
    """Protocol for line diff engines."""

    @abstractmethod
    def compute_line_diff(
        self, old_content: str, new_content: str
    ) -> list[DiffOperation]:
        """Compute line-aligned equal/insert/delete operations."""
        ...


class IAnnotationService(Protocol):
    """Protocol for turning diff operations into line records."""

    @abstractmethod
    def annotate(
        self, operations: list[DiffOperation], context_size: int | None = None
    ) -> list[LineDiff]:
        """Annotate operations with line numbers, applying context windowing."""
        ...


class IInlineDiffService(Protocol):
    """Protocol for inline diff computation."""

    @abstractmethod
    def compute(
        self, old_text: Any, new_text: Any, context_size: int | None = None
    ) -> LineDiffResult:
        """Compute the inline diff between two texts."""
        ...

    @abstractmethod
    def select_line(self, index: int, line: LineDiff) -> LineSelectEvent:
        """Describe the selection of a computed line."""
        ...


class ILineSelectListener(Protocol):
    """Protocol for callbacks notified when a line is selected."""

    def __call__(self, event: LineSelectEvent) -> None: ...


class ServiceError(Exception):
    """Base exception for service-related errors."""

    def __init__(self, message: str, service_name: str | None = None):
        self.service_name = service_name
        super().__init__(f"{f'[{service_name}] ' if service_name else ''}{message}")


class InlineDiffError(ServiceError):
    """Exception raised for inline diff computation errors."""

    pass


class DiffEngineError(ServiceError):
    """Exception raised when the diff engine fails."""

    pass


class DiffContractError(DiffEngineError):
    """Exception raised when diff engine output breaks its contract."""

    pass
