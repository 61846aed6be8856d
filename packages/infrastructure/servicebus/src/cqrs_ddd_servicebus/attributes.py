"""Attribute codec — MessageAttributes <-> Service Bus application properties.

Service Bus carries metadata in a flat ``application_properties`` bag while
the bus works with two attribute tiers. Each tier is flattened by prefixing
its keys (``attributes-foo``, ``stickyAttributes-bar``), so the same key may
live in both tiers without colliding. The prefixes keep their camel-case
spelling so messages stay readable by other bus implementations sharing the
same queues.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Literal

from cqrs_ddd_core.cqrs.attributes import MessageAttributes

if TYPE_CHECKING:
    from collections.abc import Mapping

    from cqrs_ddd_core.cqrs.attributes import AttributeValue

AttributeTier = Literal["attributes", "stickyAttributes"]

ATTRIBUTES: AttributeTier = "attributes"
STICKY_ATTRIBUTES: AttributeTier = "stickyAttributes"

# Carried in the message's own correlation_id field, never in the bag.
_CORRELATION_KEYS = frozenset({"correlationId", "correlation_id"})


def tier_prefix(tier: AttributeTier) -> str:
    return f"{tier}-"


def _text(value: str | bytes) -> str:
    # The AMQP layer hands back property keys (and string values) as bytes.
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    return value


def _decode_value(value: Any) -> AttributeValue:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return _text(value)
    return value


def decode_application_properties(
    tier: AttributeTier,
    properties: Mapping[str | bytes, Any] | None,
) -> dict[str, AttributeValue]:
    """Extract one tier from a received property bag.

    Keys carrying the tier's prefix are stored with the prefix stripped. Keys
    with no recognised prefix belong to the ``attributes`` tier. A ``None``
    value means the attribute was absent when the message was sent, so the
    key is left out rather than stored as ``None``.
    """
    if not properties:
        return {}

    prefix = tier_prefix(tier)
    sticky_prefix = tier_prefix(STICKY_ATTRIBUTES)
    decoded: dict[str, AttributeValue] = {}

    for raw_key, raw_value in properties.items():
        key = _text(raw_key)
        if raw_value is None:
            continue
        value = _decode_value(raw_value)

        if key.startswith(prefix):
            decoded[key[len(prefix) :]] = value
        elif tier == ATTRIBUTES and not key.startswith(sticky_prefix):
            decoded[key] = value

    return decoded


def decode_attributes(
    properties: Mapping[str | bytes, Any] | None,
    correlation_id: str | None = None,
) -> MessageAttributes:
    """Rebuild the full attribute record of a received message."""
    return MessageAttributes(
        correlation_id=correlation_id,
        attributes=decode_application_properties(ATTRIBUTES, properties),
        sticky_attributes=decode_application_properties(STICKY_ATTRIBUTES, properties),
    )


def encode_attributes(
    tier: AttributeTier,
    values: Mapping[str, AttributeValue],
) -> dict[str, AttributeValue]:
    """Flatten one tier into prefixed application properties.

    Absent values are written as an explicit ``None`` since the property bag
    has no notion of a missing value.
    """
    prefix = tier_prefix(tier)
    return {
        f"{prefix}{key}": value
        for key, value in values.items()
        if key not in _CORRELATION_KEYS
    }


def encode_message_attributes(
    attributes: MessageAttributes,
) -> dict[str, AttributeValue]:
    """Merge both tiers of *attributes* into one application property bag."""
    return {
        **encode_attributes(ATTRIBUTES, attributes.attributes),
        **encode_attributes(STICKY_ATTRIBUTES, attributes.sticky_attributes),
    }
