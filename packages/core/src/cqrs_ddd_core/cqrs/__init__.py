"""CQRS primitives: messages, attributes, registry."""

from __future__ import annotations

from .attributes import AttributeValue, MessageAttributes
from .message_registry import MessageRegistry
from .messages import Command, Event, Message

__all__ = [
    "AttributeValue",
    "Command",
    "Event",
    "Message",
    "MessageAttributes",
    "MessageRegistry",
]
