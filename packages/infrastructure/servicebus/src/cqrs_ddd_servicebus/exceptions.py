"""Transport-specific exceptions for cqrs-ddd-servicebus."""

from __future__ import annotations

from azure.core.exceptions import AzureError
from azure.servicebus.exceptions import MessageAlreadySettled

from cqrs_ddd_core.primitives.exceptions import (
    ConfigurationError,
    InfrastructureError,
    SerializationError,
)

BROKER_ERRORS = (AzureError, MessageAlreadySettled)
"""Errors raised by the azure SDK for a failed broker call."""


class MessagingError(InfrastructureError):
    """Base class for all messaging-related infrastructure errors."""


class TransportConfigurationError(MessagingError, ConfigurationError):
    """Raised at construction when no usable endpoint is configured."""


class TransportOperationError(MessagingError):
    """Raised when a broker call (send, receive, settle) fails.

    ``operation`` names the failed call; the broker error is chained as
    ``__cause__``.
    """

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} failed: {message}")


class MessagingSerializationError(MessagingError, SerializationError):
    """Raised when a message body cannot be encoded for sending or decoded on receipt."""
