"""Tests for JsonMessageSerializer."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from cqrs_ddd_core.cqrs.message_registry import MessageRegistry
from cqrs_ddd_core.cqrs.messages import Command, Event
from cqrs_ddd_core.primitives.exceptions import (
    MessageTypeNotRegisteredError,
    SerializationError,
)
from cqrs_ddd_core.serialization import MESSAGE_NAME_KEY, JsonMessageSerializer


class PlaceOrder(Command):
    order_id: str
    quantity: int = 1


class OrderPlaced(Event):
    message_type = "shop/order-placed"

    order_id: str


@pytest.fixture
def registry() -> MessageRegistry:
    registry = MessageRegistry()
    registry.register_command(PlaceOrder)
    registry.register_event(OrderPlaced)
    return registry


def test_serialize_adds_message_name() -> None:
    text = JsonMessageSerializer().serialize(PlaceOrder(order_id="o-1"))
    data = json.loads(text)
    assert data[MESSAGE_NAME_KEY] == "PlaceOrder"
    assert data["order_id"] == "o-1"
    assert data["quantity"] == 1


def test_serialize_encodes_datetimes_as_iso() -> None:
    when = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    data = json.loads(
        JsonMessageSerializer().serialize(OrderPlaced(order_id="o", occurred_at=when))
    )
    assert data["occurred_at"].startswith("2024-01-02T03:04:05")


def test_deserialize_hydrates_registered_message(registry: MessageRegistry) -> None:
    serializer = JsonMessageSerializer(registry)
    original = PlaceOrder(order_id="o-1", quantity=3)

    restored = serializer.deserialize(serializer.serialize(original))

    assert isinstance(restored, PlaceOrder)
    assert restored == original


def test_deserialize_accepts_bytes(registry: MessageRegistry) -> None:
    serializer = JsonMessageSerializer(registry)
    raw = serializer.serialize(OrderPlaced(order_id="o-9")).encode("utf-8")

    restored = serializer.deserialize(raw)

    assert isinstance(restored, OrderPlaced)
    assert restored.order_id == "o-9"


def test_deserialize_without_registry_returns_dict() -> None:
    restored = JsonMessageSerializer().deserialize('{"$name": "X", "a": 1}')
    assert restored == {"$name": "X", "a": 1}


def test_deserialize_non_object_is_wrapped() -> None:
    assert JsonMessageSerializer().deserialize("42") == {"value": 42}


def test_strict_rejects_unregistered_name(registry: MessageRegistry) -> None:
    serializer = JsonMessageSerializer(registry, strict=True)
    with pytest.raises(MessageTypeNotRegisteredError) as exc_info:
        serializer.deserialize('{"$name": "Unknown"}')
    assert exc_info.value.message_name == "Unknown"


def test_invalid_json_raises_serialization_error() -> None:
    with pytest.raises(SerializationError) as exc_info:
        JsonMessageSerializer().deserialize("not json")
    assert exc_info.value.__cause__ is not None


def test_invalid_payload_for_registered_type_raises(
    registry: MessageRegistry,
) -> None:
    serializer = JsonMessageSerializer(registry)
    with pytest.raises(SerializationError):
        serializer.deserialize('{"$name": "PlaceOrder"}')
