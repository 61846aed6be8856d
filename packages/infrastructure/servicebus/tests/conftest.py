"""Pytest fixtures for Service Bus transport tests."""

from __future__ import annotations

from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from cqrs_ddd_servicebus.memory import InMemoryServiceBusClient


@pytest.fixture
def memory_client() -> InMemoryServiceBusClient:
    return InMemoryServiceBusClient()


@pytest.fixture
def mock_receiver() -> MagicMock:
    receiver = MagicMock()
    receiver.receive_messages = AsyncMock(return_value=[])
    receiver.complete_message = AsyncMock()
    receiver.abandon_message = AsyncMock()
    receiver.dead_letter_message = AsyncMock()
    receiver.close = AsyncMock()
    return receiver


@pytest.fixture
def mock_sender() -> MagicMock:
    sender = MagicMock()
    sender.send_messages = AsyncMock()
    sender.close = AsyncMock()
    return sender


@pytest.fixture
def mock_client(mock_receiver: MagicMock, mock_sender: MagicMock) -> MagicMock:
    client = MagicMock()
    client.get_queue_receiver = MagicMock(return_value=mock_receiver)
    client.get_subscription_receiver = MagicMock(return_value=mock_receiver)
    client.get_queue_sender = MagicMock(return_value=mock_sender)
    client.get_topic_sender = MagicMock(return_value=mock_sender)
    return client


@pytest.fixture
def received_factory() -> Callable[..., MagicMock]:
    """Build stand-ins for ServiceBusReceivedMessage."""

    def make(
        body: Any = b'{"order_id": "o-1"}',
        *,
        message_id: str | None = "m-1",
        correlation_id: str | None = None,
        application_properties: dict[Any, Any] | None = None,
    ) -> MagicMock:
        raw = MagicMock()
        raw.body = iter((body,)) if isinstance(body, bytes) else body
        raw.message_id = message_id
        raw.correlation_id = correlation_id
        raw.application_properties = application_properties
        return raw

    return make
