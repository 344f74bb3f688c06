"""Errors raised by the generator.

Every failure is reported once, synchronously, with a human-readable message.
Nothing here is retryable: generation is pure computation over the catalog.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for everything the generator raises on purpose."""


class InvalidArgument(GenerationError, ValueError):
    """Unknown framework or environment, or a missing required option."""


class UnknownOperation(GenerationError, KeyError):
    """Catalog lookup miss."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown operation: {self.name}"


class CatalogError(GenerationError):
    """The endpoint catalog violates one of its load-time invariants."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation
