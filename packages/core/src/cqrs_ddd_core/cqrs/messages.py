"""Message base classes — commands and events carried by a transport."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class Message(BaseModel):
    """Base for everything a transport can carry.

    Every message declares a type name used as the wire ``subject`` and as the
    ``$name`` discriminator of the serialized body. It defaults to the class
    name; set ``message_type`` on a subclass to pin a stable name that survives
    class renames::

        class PlaceOrder(Command):
            message_type = "shop/place-order"

            order_id: str
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    message_type: ClassVar[str | None] = None

    @classmethod
    def message_name(cls) -> str:
        """Return the declared type name of this message class."""
        declared = cls.__dict__.get("message_type")
        return declared or cls.__name__


class Command(Message):
    """Intent to change state, sent to exactly one owner.

    Named with imperative verbs (e.g. ``PlaceOrder``, ``TransferFunds``).
    """

    command_id: str = Field(default_factory=lambda: str(uuid.uuid4()))


class Event(Message):
    """Notification that something happened, published to any subscriber."""

    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
