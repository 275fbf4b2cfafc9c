"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   └── ValidationError
    ├── ApplicationError     (application.py)
    │   └── GetuiError
    └── InfrastructureError  (infrastructure.py)
        ├── ExternalServiceError
        ├── TimeoutError
        └── SerializationError
"""

from getui_rest.kernel.errors.application import ApplicationError, GetuiError
from getui_rest.kernel.errors.base import BaseError
from getui_rest.kernel.errors.domain import DomainError, ValidationError
from getui_rest.kernel.errors.infrastructure import (
    ExternalServiceError,
    InfrastructureError,
    SerializationError,
    TimeoutError,
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
