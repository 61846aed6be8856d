"""Primitives: exceptions."""

from __future__ import annotations

from .exceptions import (
    ConfigurationError,
    CQRSDDDError,
    InfrastructureError,
    MessageTypeNotRegisteredError,
    PersistenceNotConfiguredError,
    SerializationError,
)

__all__ = [
    "ConfigurationError",
    "CQRSDDDError",
    "InfrastructureError",
    "MessageTypeNotRegisteredError",
    "PersistenceNotConfiguredError",
    "SerializationError",
]
