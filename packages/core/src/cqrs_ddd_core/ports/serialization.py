from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..cqrs.messages import Message


@runtime_checkable
class IMessageSerializer(Protocol):
    """
    Port for turning messages into transport bodies and back.

    The default implementation is
    :class:`~cqrs_ddd_core.serialization.JsonMessageSerializer`.
    """

    def serialize(self, message: Message) -> str:
        """Encode *message* to text suitable for a transport body."""
        ...

    def deserialize(self, raw: str | bytes) -> Message | dict[str, Any]:
        """Decode a transport body back into a message (or a plain dict)."""
        ...
