"""Endpoint resolution — bind a transport to a queue or a topic subscription."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from azure.servicebus import ServiceBusReceiveMode

from .exceptions import TransportConfigurationError

if TYPE_CHECKING:
    from .config import ServiceBusTransportConfiguration

logger = logging.getLogger("cqrs_ddd.servicebus.endpoint")


@dataclass(frozen=True)
class QueueEndpoint:
    """Send to and receive from a single queue."""

    queue_name: str


@dataclass(frozen=True)
class SubscriptionEndpoint:
    """Send to a topic; receive from one of its subscriptions."""

    topic_name: str
    subscription_name: str


Endpoint = Union[QueueEndpoint, SubscriptionEndpoint]


@dataclass(frozen=True)
class BoundEndpoint:
    """The sender/receiver pair a transport uses for its whole lifetime."""

    endpoint: Endpoint
    sender: Any
    receiver: Any


def resolve_endpoint(configuration: ServiceBusTransportConfiguration) -> Endpoint:
    """Pick the endpoint shape from *configuration*.

    A queue name wins when present. Otherwise both topic and subscription
    names are required; anything less raises ``TransportConfigurationError``.
    """
    if configuration.queue_name:
        return QueueEndpoint(configuration.queue_name)
    if configuration.topic_name and configuration.subscription_name:
        return SubscriptionEndpoint(
            configuration.topic_name, configuration.subscription_name
        )
    raise TransportConfigurationError(
        "Queue or Topic Name (together with Subscription name) should be set."
    )


def bind_endpoint(client: Any, endpoint: Endpoint) -> BoundEndpoint:
    """Create the sender and peek-lock receiver for *endpoint* on *client*."""
    if isinstance(endpoint, QueueEndpoint):
        receiver = client.get_queue_receiver(
            endpoint.queue_name, receive_mode=ServiceBusReceiveMode.PEEK_LOCK
        )
        sender = client.get_queue_sender(endpoint.queue_name)
        logger.debug("Bound to queue %s", endpoint.queue_name)
    else:
        receiver = client.get_subscription_receiver(
            endpoint.topic_name,
            endpoint.subscription_name,
            receive_mode=ServiceBusReceiveMode.PEEK_LOCK,
        )
        sender = client.get_topic_sender(endpoint.topic_name)
        logger.debug(
            "Bound to subscription %s/%s",
            endpoint.topic_name,
            endpoint.subscription_name,
        )
    return BoundEndpoint(endpoint=endpoint, sender=sender, receiver=receiver)
