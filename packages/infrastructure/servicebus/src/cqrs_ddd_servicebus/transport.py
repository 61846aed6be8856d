"""ServiceBusTransport — ITransport over an Azure Service Bus queue or subscription."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from azure.servicebus import ServiceBusReceivedMessage

from cqrs_ddd_core.ports.transport import ITransport
from cqrs_ddd_core.serialization import JsonMessageSerializer

from .composer import compose_outbound_message
from .endpoint import bind_endpoint, resolve_endpoint
from .exceptions import BROKER_ERRORS, TransportOperationError
from .lifecycle import MessageLifecycle

if TYPE_CHECKING:
    from cqrs_ddd_core.cqrs.attributes import MessageAttributes
    from cqrs_ddd_core.cqrs.messages import Command, Event, Message
    from cqrs_ddd_core.dependencies import CoreDependencies
    from cqrs_ddd_core.ports.serialization import IMessageSerializer
    from cqrs_ddd_core.ports.transport import TransportMessage

    from .config import ServiceBusTransportConfiguration
    from .endpoint import Endpoint

LOGGER_NAME = "cqrs_ddd.servicebus.transport"


class ServiceBusTransport(ITransport[ServiceBusReceivedMessage]):
    """Service Bus adapter implementing ITransport.

    Binds one sender and one peek-lock receiver at construction, either to a
    queue or to a topic (send) and one of its subscriptions (receive), and
    keeps them for its whole lifetime. Messages are read strictly one at a
    time; each read message must be settled with exactly one of
    ``delete_message``, ``return_message`` or ``fail``.

    Bodies are sent as JSON text produced by the bus's message serializer
    and read back with the same serializer.
    """

    def __init__(self, configuration: ServiceBusTransportConfiguration) -> None:
        """Resolve and bind the endpoint.

        Raises:
            TransportConfigurationError: neither a queue nor a complete
                topic/subscription pair is configured.
        """
        self._configuration = configuration
        self._endpoint = resolve_endpoint(configuration)
        bound = bind_endpoint(configuration.service_bus_client, self._endpoint)
        self._sender = bound.sender
        self._receiver = bound.receiver
        self._serializer: IMessageSerializer = JsonMessageSerializer()
        self._logger = logging.getLogger(LOGGER_NAME)
        self._lifecycle = MessageLifecycle(
            self._receiver,
            max_wait_time=configuration.max_wait_time,
            decode_body=self._deserialize,
            logger=self._logger,
        )

    @property
    def endpoint(self) -> Endpoint:
        return self._endpoint

    def prepare(self, dependencies: CoreDependencies) -> None:
        """Adopt the bus's logger factory and message serializer."""
        self._serializer = dependencies.message_serializer
        self._logger = dependencies.logger_factory(LOGGER_NAME)
        self._lifecycle.logger = self._logger

    async def initialize(self) -> None:
        """Nothing to provision; queues and subscriptions must already exist."""
        self._logger.debug("Service Bus transport ready on %s", self._endpoint)

    async def dispose(self) -> None:
        """Close the bound sender and receiver."""
        await self._sender.close()
        await self._receiver.close()

    async def publish(
        self, event: Event, attributes: MessageAttributes | None = None
    ) -> None:
        await self._publish_message(event, attributes)

    async def send(
        self, command: Command, attributes: MessageAttributes | None = None
    ) -> None:
        await self._publish_message(command, attributes)

    async def read_next_message(
        self,
    ) -> TransportMessage[ServiceBusReceivedMessage] | None:
        return await self._lifecycle.receive_one()

    async def delete_message(
        self, message: TransportMessage[ServiceBusReceivedMessage]
    ) -> None:
        await self._lifecycle.complete(message)

    async def return_message(
        self, message: TransportMessage[ServiceBusReceivedMessage]
    ) -> None:
        await self._lifecycle.abandon(message)

    async def fail(
        self,
        message: TransportMessage[ServiceBusReceivedMessage],
        *,
        reason: str | None = None,
        error_description: str | None = None,
    ) -> None:
        """Dead-letter *message*; *reason* is recorded on the dead-lettered copy."""
        await self._lifecycle.dead_letter(
            message, reason=reason, error_description=error_description
        )

    def _deserialize(self, body: str) -> Any:
        return self._serializer.deserialize(body)

    async def _publish_message(
        self, message: Message, attributes: MessageAttributes | None
    ) -> None:
        outbound = compose_outbound_message(
            message, attributes, serializer=self._serializer
        )
        try:
            await self._sender.send_messages(outbound)
        except BROKER_ERRORS as e:
            raise TransportOperationError("send", str(e)) from e
        self._logger.debug("Sent %s", outbound.subject)
