"""JsonMessageSerializer — JSON roundtrip with MessageRegistry hydration."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from .primitives.exceptions import MessageTypeNotRegisteredError, SerializationError

if TYPE_CHECKING:
    from .cqrs.message_registry import MessageRegistry
    from .cqrs.messages import Message

MESSAGE_NAME_KEY = "$name"


def _json_serializer(obj: Any) -> Any:
    """Serialize datetime and other non-JSON types."""
    if hasattr(obj, "isoformat"):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class JsonMessageSerializer:
    """Serialize/deserialize messages to/from JSON text.

    The serialized object carries the message type name under ``$name`` so the
    receiving side can hydrate it through a ``MessageRegistry``. Without a
    registry (or for unregistered names) the decoded dict is returned as-is,
    unless ``strict`` is set, in which case unknown names are an error.
    """

    def __init__(
        self, registry: MessageRegistry | None = None, *, strict: bool = False
    ) -> None:
        self._registry = registry
        self._strict = strict

    def serialize(self, message: Message) -> str:
        """Encode *message* to a JSON string."""
        try:
            data = message.model_dump(mode="json")
            data[MESSAGE_NAME_KEY] = message.message_name()
            return json.dumps(data, default=_json_serializer)
        except (TypeError, ValueError) as e:
            raise SerializationError(str(e)) from e

    def deserialize(self, raw: str | bytes) -> Message | dict[str, Any]:
        """Decode JSON text to a message instance (or a plain dict)."""
        try:
            if isinstance(raw, (bytes, bytearray)):
                raw = raw.decode("utf-8")
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
            raise SerializationError(str(e)) from e

        if not isinstance(data, dict):
            if self._strict:
                raise SerializationError(
                    f"Expected a JSON object, got {type(data).__name__}"
                )
            return {"value": data}

        name = data.get(MESSAGE_NAME_KEY)
        message_class = (
            self._registry.get(name) if self._registry and name is not None else None
        )
        if message_class is None:
            if self._strict:
                raise MessageTypeNotRegisteredError(str(name))
            return data

        payload = {k: v for k, v in data.items() if k != MESSAGE_NAME_KEY}
        try:
            return message_class.model_validate(payload)
        except ValueError as e:
            raise SerializationError(str(e)) from e
