"""In-memory Service Bus stand-ins for testing."""

from __future__ import annotations

from .client import (
    InMemoryEntity,
    InMemoryReceivedMessage,
    InMemoryReceiver,
    InMemorySender,
    InMemoryServiceBusClient,
)

__all__ = [
    "InMemoryEntity",
    "InMemoryReceivedMessage",
    "InMemoryReceiver",
    "InMemorySender",
    "InMemoryServiceBusClient",
]
