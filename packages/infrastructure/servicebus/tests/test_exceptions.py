"""Tests for the transport exception hierarchy."""

from __future__ import annotations

import pytest
from azure.servicebus.exceptions import MessageAlreadySettled, ServiceBusError

from cqrs_ddd_core.primitives.exceptions import (
    ConfigurationError,
    CQRSDDDError,
    InfrastructureError,
    SerializationError,
)
from cqrs_ddd_servicebus.exceptions import (
    BROKER_ERRORS,
    MessagingError,
    MessagingSerializationError,
    TransportConfigurationError,
    TransportOperationError,
)


@pytest.mark.parametrize(
    ("error", "bases"),
    [
        (MessagingError, (InfrastructureError, CQRSDDDError)),
        (TransportConfigurationError, (MessagingError, ConfigurationError)),
        (TransportOperationError, (MessagingError,)),
        (MessagingSerializationError, (MessagingError, SerializationError)),
    ],
)
def test_hierarchy(error: type[Exception], bases: tuple[type[Exception], ...]) -> None:
    for base in bases:
        assert issubclass(error, base)


def test_operation_error_names_operation() -> None:
    error = TransportOperationError("abandon", "lock lost")
    assert error.operation == "abandon"
    assert str(error) == "abandon failed: lock lost"


def test_sdk_failures_are_broker_errors() -> None:
    assert isinstance(ServiceBusError("x"), BROKER_ERRORS)
    assert issubclass(MessageAlreadySettled, BROKER_ERRORS)
