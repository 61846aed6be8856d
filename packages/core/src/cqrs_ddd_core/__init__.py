"""cqrs-ddd-core — Foundation package for the CQRS/DDD toolkit.

Zero broker dependencies: message base classes, attributes, serialization and
the transport port that infrastructure adapters implement.
"""

from __future__ import annotations

# ── CQRS ─────────────────────────────────────────────────────────
from .cqrs import (
    AttributeValue,
    Command,
    Event,
    Message,
    MessageAttributes,
    MessageRegistry,
)
from .dependencies import CoreDependencies

# ── Ports ────────────────────────────────────────────────────────
from .ports import IMessageSerializer, ITransport, TransportMessage

# ── Primitives ───────────────────────────────────────────────────
from .primitives import (
    ConfigurationError,
    CQRSDDDError,
    InfrastructureError,
    MessageTypeNotRegisteredError,
    PersistenceNotConfiguredError,
    SerializationError,
)
from .serialization import JsonMessageSerializer

__all__ = [
    "AttributeValue",
    "Command",
    "ConfigurationError",
    "CoreDependencies",
    "CQRSDDDError",
    "Event",
    "IMessageSerializer",
    "ITransport",
    "InfrastructureError",
    "JsonMessageSerializer",
    "Message",
    "MessageAttributes",
    "MessageRegistry",
    "MessageTypeNotRegisteredError",
    "PersistenceNotConfiguredError",
    "SerializationError",
    "TransportMessage",
]
