"""MessageLifecycle — receive one locked message at a time and settle it.

A received message moves through::

    IDLE -> LOCKED -> COMPLETED | ABANDONED | DEAD_LETTERED

Exactly one terminal transition is expected per message. Settling a message
twice is a caller error; the broker rejects it and the rejection surfaces as
``TransportOperationError``.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import TYPE_CHECKING, Any

from cqrs_ddd_core.ports.transport import TransportMessage
from cqrs_ddd_core.primitives.exceptions import SerializationError

from .attributes import decode_attributes
from .exceptions import (
    BROKER_ERRORS,
    MessagingSerializationError,
    TransportOperationError,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

_log = logging.getLogger("cqrs_ddd.servicebus.lifecycle")

EXPECTED_MESSAGE_COUNT = 1


class SettlementState(str, enum.Enum):
    """Where a received message stands with the broker."""

    IDLE = "idle"
    LOCKED = "locked"
    COMPLETED = "completed"
    ABANDONED = "abandoned"
    DEAD_LETTERED = "dead_lettered"

    @property
    def is_terminal(self) -> bool:
        return self not in (SettlementState.IDLE, SettlementState.LOCKED)


def read_body(raw: Any) -> Any:
    """Return the body of a received message as text where it is binary.

    Data bodies arrive as an iterable of byte sections; value bodies (already
    structured by the sender's SDK) are returned unchanged.
    """
    body = raw.body
    if body is None or isinstance(body, (str, dict, list, int, float, bool)):
        return body
    if isinstance(body, (bytes, bytearray)):
        return bytes(body).decode("utf-8")
    return b"".join(body).decode("utf-8")


class MessageLifecycle:
    """Peek-lock receive and settlement over a single receiver.

    Args:
        receiver: A Service Bus receiver bound in peek-lock mode.
        max_wait_time: Seconds a receive waits for a message to arrive.
        decode_body: Turns a text body into the domain message.
        logger: Destination for lifecycle records.
    """

    def __init__(
        self,
        receiver: Any,
        *,
        max_wait_time: float,
        decode_body: Callable[[str], Any],
        logger: logging.Logger | None = None,
    ) -> None:
        self._receiver = receiver
        self._max_wait_time = max_wait_time
        self._decode_body = decode_body
        self.logger = logger or _log

    async def receive_one(self) -> TransportMessage[Any] | None:
        """Wait up to ``max_wait_time`` for one message and lock it.

        Returns ``None`` when nothing arrived. If the broker hands back more
        messages than requested, all of them are abandoned and ``None`` is
        returned so none of them is processed outside the one-at-a-time
        discipline.
        """
        try:
            received = await self._receiver.receive_messages(
                max_message_count=EXPECTED_MESSAGE_COUNT,
                max_wait_time=self._max_wait_time,
            )
        except BROKER_ERRORS as e:
            raise TransportOperationError("receive", str(e)) from e

        if not received:
            return None

        if len(received) > EXPECTED_MESSAGE_COUNT:
            self.logger.error(
                "Received more than the expected number of messages",
                extra={"expected": EXPECTED_MESSAGE_COUNT, "received": len(received)},
            )
            await self._abandon_all(received)
            return None

        return await self._to_transport_message(received[0])

    async def complete(self, message: TransportMessage[Any]) -> None:
        """LOCKED -> COMPLETED: remove the message from the broker for good."""
        await self._settle("complete", self._receiver.complete_message, message)

    async def abandon(self, message: TransportMessage[Any]) -> None:
        """LOCKED -> ABANDONED: release the lock so the message is redelivered."""
        await self._settle("abandon", self._receiver.abandon_message, message)

    async def dead_letter(
        self,
        message: TransportMessage[Any],
        *,
        reason: str | None = None,
        error_description: str | None = None,
    ) -> None:
        """LOCKED -> DEAD_LETTERED: move the message to the dead-letter queue."""
        await self._settle(
            "dead_letter",
            self._receiver.dead_letter_message,
            message,
            reason=reason,
            error_description=error_description,
        )

    async def _settle(
        self,
        operation: str,
        call: Callable[..., Awaitable[None]],
        message: TransportMessage[Any],
        **kwargs: Any,
    ) -> None:
        try:
            await call(message.raw, **kwargs)
        except BROKER_ERRORS as e:
            raise TransportOperationError(operation, str(e)) from e
        self.logger.debug("Settled message %s: %s", message.id, operation)

    async def _abandon_all(self, received: Sequence[Any]) -> None:
        results = await asyncio.gather(
            *(self._receiver.abandon_message(raw) for raw in received),
            return_exceptions=True,
        )
        for raw, result in zip(received, results):
            if isinstance(result, Exception):
                self.logger.warning(
                    "Failed to abandon message %s",
                    getattr(raw, "message_id", None),
                    exc_info=result,
                )

    async def _to_transport_message(self, raw: Any) -> TransportMessage[Any]:
        try:
            body = read_body(raw)
            domain_message = (
                self._decode_body(body) if isinstance(body, str) else body
            )
        except (SerializationError, TypeError, ValueError) as e:
            # Broker dead-letters it once max delivery count is reached.
            await self._release_undecodable(raw)
            raise MessagingSerializationError(str(e)) from e

        message_id = raw.message_id
        correlation_id = raw.correlation_id
        return TransportMessage(
            id=str(message_id) if message_id is not None else None,
            raw=raw,
            domain_message=domain_message,
            attributes=decode_attributes(
                raw.application_properties,
                correlation_id=(
                    str(correlation_id) if correlation_id is not None else None
                ),
            ),
        )

    async def _release_undecodable(self, raw: Any) -> None:
        try:
            await self._receiver.abandon_message(raw)
        except BROKER_ERRORS:
            self.logger.warning(
                "Failed to abandon undecodable message %s",
                getattr(raw, "message_id", None),
                exc_info=True,
            )
