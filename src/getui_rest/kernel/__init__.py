"""Kernel – framework-agnostic building blocks (errors, clock, digests, ids)."""

from getui_rest.kernel.errors import (
    ApplicationError,
    BaseError,
    DomainError,
    ExternalServiceError,
    GetuiError,
    InfrastructureError,
    SerializationError,
    TimeoutError,
    ValidationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "ExternalServiceError",
    "GetuiError",
    "InfrastructureError",
    "SerializationError",
    "TimeoutError",
    "ValidationError",
]
