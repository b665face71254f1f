"""
Error types shared across noisegate.

StandardError is the capability an upstream error opts into when it carries a
machine-readable code next to its message. Matching only inspects the error
value it is handed: exception chaining (__cause__ / __context__) is never
followed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


class NoiseGateError(Exception):
    """Base exception for all noisegate errors."""

    pass


class ConfigError(NoiseGateError):
    """Raised when configuration loading or validation fails."""

    pass


@dataclass(frozen=True)
class ErrorDescriptor:
    """Machine-readable part of a structured error."""

    code: str
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class StandardError(Protocol):
    """Any error exposing a base descriptor with a code."""

    def base(self) -> ErrorDescriptor | None:
        """Return the descriptor, or None when the error has no code."""
        ...  # pragma: no cover


class BaseError(Exception):
    """Structured upstream error carrying a code, a message and optional details."""

    def __init__(self, code: str, message: str = "", details: dict[str, Any] | None = None) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"{code}: {message}" if message else code)

    def base(self) -> ErrorDescriptor:
        return ErrorDescriptor(code=self.code, message=self.message, details=dict(self.details))
