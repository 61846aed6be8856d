"""Framework and infrastructure exceptions for cqrs-ddd-core."""

from __future__ import annotations


class CQRSDDDError(Exception):
    """Root exception for the entire cqrs-ddd toolkit."""


class InfrastructureError(CQRSDDDError):
    """Base class for all infrastructure-related errors."""


class ConfigurationError(CQRSDDDError):
    """Raised when a component is constructed with an unusable configuration.

    Configuration errors are fatal: the component must not be used in a
    partially configured state.
    """


class SerializationError(CQRSDDDError):
    """Raised when a message cannot be serialized or deserialized."""


class MessageTypeNotRegisteredError(SerializationError):
    """Raised when a payload names a message type the registry does not know."""

    def __init__(self, message_name: str) -> None:
        self.message_name = message_name
        super().__init__(f"Message type {message_name!r} is not registered")


class PersistenceNotConfiguredError(ConfigurationError):
    """Raised when a subsystem needs persistence before it has been supplied.

    Carries a ``help`` hint pointing at the missing configuration step.
    """

    def __init__(self) -> None:
        self.help = (
            "Ensure that CoreDependencies(persistence=...) has been supplied "
            "prior to initialization"
        )
        super().__init__("Persistence not configured")
