"""In-memory Service Bus namespace with peek-lock semantics, for tests."""

from __future__ import annotations

import asyncio
import itertools
import uuid
from collections import deque
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from azure.servicebus import ServiceBusReceiveMode
from azure.servicebus.exceptions import ServiceBusError

from ..lifecycle import SettlementState

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

DEFAULT_MAX_DELIVERY_COUNT = 10

_sequence = itertools.count(1)


def _body_bytes(message: Any) -> bytes:
    body = message.body
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)
    if isinstance(body, str):
        return body.encode("utf-8")
    return b"".join(body)


class InMemoryReceivedMessage:
    """Stand-in for ``ServiceBusReceivedMessage``.

    Each delivery is a separate instance owning its own lock; once settled
    it cannot be settled again.
    """

    def __init__(
        self,
        *,
        message_id: str,
        body: bytes,
        correlation_id: str | None,
        subject: str | None,
        content_type: str | None,
        application_properties: dict[str | bytes, Any] | None,
        delivery_count: int = 0,
        sequence_number: int | None = None,
    ) -> None:
        self.message_id = message_id
        self._body = body
        self.correlation_id = correlation_id
        self.subject = subject
        self.content_type = content_type
        self.application_properties = application_properties
        self.delivery_count = delivery_count
        self.sequence_number = sequence_number or next(_sequence)
        self.enqueued_time_utc = datetime.now(timezone.utc)
        self.dead_letter_reason: str | None = None
        self.dead_letter_error_description: str | None = None
        self.state = SettlementState.IDLE

    @property
    def body(self) -> Iterator[bytes]:
        # Data bodies are exposed as byte sections, like the SDK does.
        return iter((self._body,))

    def __str__(self) -> str:
        return self._body.decode("utf-8")

    def redelivery(self) -> InMemoryReceivedMessage:
        """Return a fresh copy of this message for its next delivery."""
        return InMemoryReceivedMessage(
            message_id=self.message_id,
            body=self._body,
            correlation_id=self.correlation_id,
            subject=self.subject,
            content_type=self.content_type,
            application_properties=(
                dict(self.application_properties)
                if self.application_properties is not None
                else None
            ),
            delivery_count=self.delivery_count,
            sequence_number=self.sequence_number,
        )

    @classmethod
    def from_outbound(cls, message: Any) -> InMemoryReceivedMessage:
        properties = message.application_properties
        return cls(
            message_id=message.message_id or str(uuid.uuid4()),
            body=_body_bytes(message),
            correlation_id=message.correlation_id,
            subject=message.subject,
            content_type=message.content_type,
            # AMQP hands property keys back as bytes.
            application_properties=(
                {key.encode("utf-8"): value for key, value in properties.items()}
                if properties
                else None
            ),
        )


class InMemoryEntity:
    """A queue or a topic subscription: active messages plus a dead-letter queue."""

    def __init__(
        self, path: str, *, max_delivery_count: int = DEFAULT_MAX_DELIVERY_COUNT
    ) -> None:
        self.path = path
        self.max_delivery_count = max_delivery_count
        self.dead_letters: list[InMemoryReceivedMessage] = []
        self.completed: list[InMemoryReceivedMessage] = []
        self._active: deque[InMemoryReceivedMessage] = deque()
        self._locked: dict[int, InMemoryReceivedMessage] = {}
        self._arrived = asyncio.Event()

    @property
    def active_count(self) -> int:
        return len(self._active)

    @property
    def locked_count(self) -> int:
        return len(self._locked)

    def enqueue(self, message: InMemoryReceivedMessage) -> None:
        self._active.append(message)
        self._arrived.set()

    async def take(
        self, max_message_count: int, max_wait_time: float | None
    ) -> list[InMemoryReceivedMessage]:
        """Lock and return up to *max_message_count* messages."""
        if not self._active:
            try:
                await asyncio.wait_for(self._arrived.wait(), timeout=max_wait_time)
            except asyncio.TimeoutError:
                return []

        batch: list[InMemoryReceivedMessage] = []
        while self._active and len(batch) < max_message_count:
            message = self._active.popleft()
            message.delivery_count += 1
            message.state = SettlementState.LOCKED
            self._locked[message.sequence_number] = message
            batch.append(message)
        if not self._active:
            self._arrived.clear()
        return batch

    def settle(self, message: InMemoryReceivedMessage, state: SettlementState) -> None:
        """Move a locked message to a terminal *state*."""
        if not state.is_terminal:
            raise ValueError(f"{state.value!r} is not a settlement outcome")
        if message.state.is_terminal:
            raise ServiceBusError(
                f"Message {message.message_id} has already been settled "
                f"(state: {message.state.value})."
            )
        if message.state is not SettlementState.LOCKED:
            raise ServiceBusError(f"Message {message.message_id} is not locked.")
        if self._locked.get(message.sequence_number) is not message:
            raise ServiceBusError(
                f"Message {message.message_id} is not locked by entity {self.path}."
            )
        del self._locked[message.sequence_number]
        message.state = state

        if state is SettlementState.COMPLETED:
            self.completed.append(message)
        elif state is SettlementState.DEAD_LETTERED:
            self.dead_letters.append(message)
        elif message.delivery_count >= self.max_delivery_count:
            copy = message.redelivery()
            copy.state = SettlementState.DEAD_LETTERED
            copy.dead_letter_reason = "MaxDeliveryCountExceeded"
            self.dead_letters.append(copy)
        else:
            self.enqueue(message.redelivery())


class InMemorySender:
    """Stand-in for ``ServiceBusSender`` writing to one or more entities."""

    def __init__(self, targets: Callable[[], list[InMemoryEntity]]) -> None:
        self._targets = targets
        self.closed = False

    async def send_messages(self, message: Any) -> None:
        messages = message if isinstance(message, list) else [message]
        for outbound in messages:
            template = InMemoryReceivedMessage.from_outbound(outbound)
            for entity in self._targets():
                entity.enqueue(template.redelivery())

    async def close(self) -> None:
        self.closed = True


class InMemoryReceiver:
    """Stand-in for a peek-lock ``ServiceBusReceiver``.

    ``max_message_count_override`` makes the receiver ignore the requested
    count, to exercise consumers against a broker that over-delivers.
    """

    def __init__(
        self, entity: InMemoryEntity, *, max_message_count_override: int | None = None
    ) -> None:
        self._entity = entity
        self._override = max_message_count_override
        self.closed = False

    async def receive_messages(
        self, max_message_count: int | None = 1, max_wait_time: float | None = None
    ) -> list[InMemoryReceivedMessage]:
        count = self._override or max_message_count or 1
        return await self._entity.take(count, max_wait_time)

    async def complete_message(self, message: InMemoryReceivedMessage) -> None:
        self._entity.settle(message, SettlementState.COMPLETED)

    async def abandon_message(self, message: InMemoryReceivedMessage) -> None:
        self._entity.settle(message, SettlementState.ABANDONED)

    async def dead_letter_message(
        self,
        message: InMemoryReceivedMessage,
        reason: str | None = None,
        error_description: str | None = None,
    ) -> None:
        message.dead_letter_reason = reason
        message.dead_letter_error_description = error_description
        self._entity.settle(message, SettlementState.DEAD_LETTERED)

    async def close(self) -> None:
        self.closed = True


class InMemoryServiceBusClient:
    """Stand-in for ``azure.servicebus.aio.ServiceBusClient``.

    Queues and subscriptions are created on first use. Sending to a topic
    delivers a copy to every subscription that exists at send time.
    """

    def __init__(
        self,
        *,
        max_delivery_count: int = DEFAULT_MAX_DELIVERY_COUNT,
        max_message_count_override: int | None = None,
    ) -> None:
        self._max_delivery_count = max_delivery_count
        self._override = max_message_count_override
        self._queues: dict[str, InMemoryEntity] = {}
        self._subscriptions: dict[str, dict[str, InMemoryEntity]] = {}

    def queue(self, queue_name: str) -> InMemoryEntity:
        """Return (creating if needed) the named queue."""
        if queue_name not in self._queues:
            self._queues[queue_name] = InMemoryEntity(
                queue_name, max_delivery_count=self._max_delivery_count
            )
        return self._queues[queue_name]

    def subscription(self, topic_name: str, subscription_name: str) -> InMemoryEntity:
        """Return (creating if needed) the named subscription of a topic."""
        subscriptions = self._subscriptions.setdefault(topic_name, {})
        if subscription_name not in subscriptions:
            subscriptions[subscription_name] = InMemoryEntity(
                f"{topic_name}/Subscriptions/{subscription_name}",
                max_delivery_count=self._max_delivery_count,
            )
        return subscriptions[subscription_name]

    def get_queue_sender(self, queue_name: str, **kwargs: Any) -> InMemorySender:  # noqa: ARG002
        entity = self.queue(queue_name)
        return InMemorySender(lambda: [entity])

    def get_topic_sender(self, topic_name: str, **kwargs: Any) -> InMemorySender:  # noqa: ARG002
        return InMemorySender(
            lambda: list(self._subscriptions.get(topic_name, {}).values())
        )

    def get_queue_receiver(
        self,
        queue_name: str,
        *,
        receive_mode: ServiceBusReceiveMode = ServiceBusReceiveMode.PEEK_LOCK,
        **kwargs: Any,  # noqa: ARG002
    ) -> InMemoryReceiver:
        self._check_receive_mode(receive_mode)
        return InMemoryReceiver(
            self.queue(queue_name), max_message_count_override=self._override
        )

    def get_subscription_receiver(
        self,
        topic_name: str,
        subscription_name: str,
        *,
        receive_mode: ServiceBusReceiveMode = ServiceBusReceiveMode.PEEK_LOCK,
        **kwargs: Any,  # noqa: ARG002
    ) -> InMemoryReceiver:
        self._check_receive_mode(receive_mode)
        return InMemoryReceiver(
            self.subscription(topic_name, subscription_name),
            max_message_count_override=self._override,
        )

    async def close(self) -> None:
        """Nothing to release."""

    @staticmethod
    def _check_receive_mode(receive_mode: ServiceBusReceiveMode) -> None:
        if receive_mode != ServiceBusReceiveMode.PEEK_LOCK:
            raise ValueError("InMemoryServiceBusClient only supports peek-lock")
