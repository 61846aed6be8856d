import pytest
from pydantic import ValidationError

from cqrs_ddd_core.cqrs.attributes import MessageAttributes
from cqrs_ddd_core.cqrs.messages import Command, Event

# --- Test Models ---


class PlaceOrder(Command):
    order_id: str


class OrderPlaced(Event):
    message_type = "shop/order-placed"

    order_id: str


class PriorityOrderPlaced(OrderPlaced):
    priority: int = 1


# --- Tests ---


def test_message_name_defaults_to_class_name() -> None:
    assert PlaceOrder.message_name() == "PlaceOrder"
    assert PlaceOrder(order_id="1").message_name() == "PlaceOrder"


def test_message_name_uses_declared_type() -> None:
    assert OrderPlaced.message_name() == "shop/order-placed"


def test_declared_type_is_not_inherited() -> None:
    """A subclass is a different message and gets its own name."""
    assert PriorityOrderPlaced.message_name() == "PriorityOrderPlaced"


def test_message_type_is_not_a_field() -> None:
    data = OrderPlaced(order_id="1").model_dump()
    assert "message_type" not in data
    assert data["order_id"] == "1"


def test_command_immutability() -> None:
    """Verifies that commands are immutable."""
    cmd = PlaceOrder(order_id="1")
    with pytest.raises(ValidationError, match="frozen"):
        cmd.order_id = "2"


def test_commands_and_events_get_unique_ids() -> None:
    assert PlaceOrder(order_id="1").command_id != PlaceOrder(order_id="1").command_id
    first, second = OrderPlaced(order_id="1"), OrderPlaced(order_id="1")
    assert first.event_id != second.event_id
    assert first.occurred_at.tzinfo is not None


def test_message_attributes_default_to_empty_tiers() -> None:
    attrs = MessageAttributes()
    assert attrs.correlation_id is None
    assert attrs.attributes == {}
    assert attrs.sticky_attributes == {}


def test_message_attributes_are_immutable() -> None:
    attrs = MessageAttributes(correlation_id="c-1", attributes={"a": 1})
    with pytest.raises(ValidationError, match="frozen"):
        attrs.correlation_id = "c-2"


def test_message_attributes_reject_non_primitive_values() -> None:
    with pytest.raises(ValidationError):
        MessageAttributes(attributes={"nested": {"not": "allowed"}})
