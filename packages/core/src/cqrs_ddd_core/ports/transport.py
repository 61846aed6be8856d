"""ITransport — the contract a message bus drives a broker adapter through."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from ..cqrs.attributes import MessageAttributes
    from ..cqrs.messages import Command, Event
    from ..dependencies import CoreDependencies

TRaw = TypeVar("TRaw")


@dataclass(frozen=True)
class TransportMessage(Generic[TRaw]):
    """A message received from a transport and still locked by it.

    ``raw`` is the broker's own handle and owns the lock; hand the whole
    ``TransportMessage`` back to exactly one of ``delete_message``,
    ``return_message`` or ``fail`` and do not reuse it afterwards.
    """

    id: str | None
    raw: TRaw
    domain_message: Any
    attributes: MessageAttributes


@runtime_checkable
class ITransport(Protocol[TRaw]):
    """
    Port between the bus and a message broker.

    The bus reads one message at a time, dispatches it, then settles it:
    ``delete_message`` on success, ``return_message`` to retry later, ``fail``
    when the message can never be processed. Retry policy is the bus's
    concern; transports report failures by raising.
    """

    def prepare(self, dependencies: CoreDependencies) -> None:
        """Receive logger factory, serializer and other shared services."""
        ...

    async def initialize(self) -> None:
        """Perform any broker-side setup before the first read."""
        ...

    async def dispose(self) -> None:
        """Release broker connections held by the transport."""
        ...

    async def send(
        self, command: Command, attributes: MessageAttributes | None = None
    ) -> None:
        """Send *command* to its single destination."""
        ...

    async def publish(
        self, event: Event, attributes: MessageAttributes | None = None
    ) -> None:
        """Publish *event* to every subscriber."""
        ...

    async def read_next_message(self) -> TransportMessage[TRaw] | None:
        """Return the next locked message, or ``None`` when none arrived."""
        ...

    async def delete_message(self, message: TransportMessage[TRaw]) -> None:
        """Acknowledge *message*; it will not be delivered again."""
        ...

    async def return_message(self, message: TransportMessage[TRaw]) -> None:
        """Release *message* back to the broker for redelivery."""
        ...

    async def fail(self, message: TransportMessage[TRaw]) -> None:
        """Move *message* out of normal delivery (dead-letter)."""
        ...
