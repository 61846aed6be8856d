"""MessageRegistry — maps message type names to their classes for deserialization."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .messages import Command, Event, Message


class MessageRegistry:
    """Registry for mapping message type names to their Command and Event classes.

    Used by :class:`~cqrs_ddd_core.serialization.JsonMessageSerializer` to
    reconstruct messages from payloads received over a transport.

    **Explicit registration** is required via ``register_command()`` or
    ``register_event()``. Create instances per application context for
    isolation.

    Usage::

        registry = MessageRegistry()
        registry.register_command(PlaceOrder)
        registry.register_event(OrderPlaced)

        serializer = JsonMessageSerializer(registry)
    """

    def __init__(self) -> None:
        self._commands: dict[str, type[Command]] = {}
        self._events: dict[str, type[Event]] = {}

    # ── Registration ────────────────────────────────────────────

    def register_command(
        self, command_class: type[Command], name: str | None = None
    ) -> None:
        """Register a command class under *name* (defaults to its message name)."""
        self._commands[name or command_class.message_name()] = command_class

    def register_event(self, event_class: type[Event], name: str | None = None) -> None:
        """Register an event class under *name* (defaults to its message name)."""
        self._events[name or event_class.message_name()] = event_class

    # ── Lookup ──────────────────────────────────────────────────

    def get(self, message_type: str) -> type[Message] | None:
        """Look up a message class by type name; commands take precedence."""
        return self._commands.get(message_type) or self._events.get(message_type)
