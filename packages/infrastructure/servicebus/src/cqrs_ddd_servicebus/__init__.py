"""Azure Service Bus transport for CQRS/DDD: queues and topic subscriptions."""

from __future__ import annotations

from .attributes import (
    decode_application_properties,
    decode_attributes,
    encode_attributes,
    encode_message_attributes,
)
from .composer import compose_outbound_message
from .config import DEFAULT_WAIT_TIME_MS, ServiceBusTransportConfiguration
from .connection import ServiceBusConnectionManager
from .endpoint import (
    BoundEndpoint,
    QueueEndpoint,
    SubscriptionEndpoint,
    bind_endpoint,
    resolve_endpoint,
)
from .exceptions import (
    MessagingError,
    MessagingSerializationError,
    TransportConfigurationError,
    TransportOperationError,
)
from .lifecycle import MessageLifecycle, SettlementState
from .transport import ServiceBusTransport

__all__ = [
    "BoundEndpoint",
    "DEFAULT_WAIT_TIME_MS",
    "MessageLifecycle",
    "MessagingError",
    "MessagingSerializationError",
    "QueueEndpoint",
    "ServiceBusConnectionManager",
    "ServiceBusTransport",
    "ServiceBusTransportConfiguration",
    "SettlementState",
    "SubscriptionEndpoint",
    "TransportConfigurationError",
    "TransportOperationError",
    "bind_endpoint",
    "compose_outbound_message",
    "decode_application_properties",
    "decode_attributes",
    "encode_attributes",
    "encode_message_attributes",
    "resolve_endpoint",
]
