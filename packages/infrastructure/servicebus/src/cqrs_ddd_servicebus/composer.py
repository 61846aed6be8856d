"""Outbound composer — build a ServiceBusMessage from a bus message."""

from __future__ import annotations

from typing import TYPE_CHECKING

from azure.servicebus import ServiceBusMessage

from cqrs_ddd_core.cqrs.attributes import MessageAttributes
from cqrs_ddd_core.primitives.exceptions import SerializationError

from .attributes import encode_message_attributes
from .exceptions import MessagingSerializationError

if TYPE_CHECKING:
    from cqrs_ddd_core.cqrs.messages import Message
    from cqrs_ddd_core.ports.serialization import IMessageSerializer

CONTENT_TYPE = "application/json"


def compose_outbound_message(
    message: Message,
    attributes: MessageAttributes | None = None,
    *,
    serializer: IMessageSerializer,
) -> ServiceBusMessage:
    """Assemble the wire message for *message*.

    The body is pre-serialized by *serializer*; the receiving transport
    reverses it with the same serializer. ``subject`` carries the message
    type name so subscriptions can filter without reading the body.
    """
    attributes = attributes or MessageAttributes()
    try:
        body = serializer.serialize(message)
    except (SerializationError, TypeError, ValueError) as e:
        raise MessagingSerializationError(str(e)) from e

    return ServiceBusMessage(
        body,
        correlation_id=attributes.correlation_id,
        subject=message.message_name(),
        content_type=CONTENT_TYPE,
        application_properties=encode_message_attributes(attributes),
    )
