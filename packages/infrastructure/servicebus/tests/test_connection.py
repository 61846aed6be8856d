"""Tests for ServiceBusConnectionManager."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cqrs_ddd_servicebus.connection import ServiceBusConnectionManager
from cqrs_ddd_servicebus.endpoint import QueueEndpoint, SubscriptionEndpoint
from cqrs_ddd_servicebus.exceptions import TransportConfigurationError

CLIENT = "cqrs_ddd_servicebus.connection.ServiceBusClient"


def test_requires_connection_string_or_namespace_with_credential() -> None:
    with pytest.raises(TransportConfigurationError):
        ServiceBusConnectionManager()
    with pytest.raises(TransportConfigurationError):
        ServiceBusConnectionManager(fully_qualified_namespace="ns.servicebus.windows.net")


def test_client_from_connection_string_is_created_once() -> None:
    with patch(CLIENT) as client_cls:
        manager = ServiceBusConnectionManager("Endpoint=sb://ns/", retry_total=2)

        first = manager.get_client()
        second = manager.get_client()

    assert first is second
    client_cls.from_connection_string.assert_called_once_with(
        "Endpoint=sb://ns/", retry_total=2
    )


def test_client_from_namespace_and_credential() -> None:
    credential = MagicMock()
    with patch(CLIENT) as client_cls:
        manager = ServiceBusConnectionManager(
            fully_qualified_namespace="ns.servicebus.windows.net",
            credential=credential,
        )
        client = manager.get_client()

    client_cls.assert_called_once_with("ns.servicebus.windows.net", credential)
    assert client is client_cls.return_value


def test_create_transport_binds_shared_client(mock_client: MagicMock) -> None:
    with patch(CLIENT) as client_cls:
        client_cls.from_connection_string.return_value = mock_client
        manager = ServiceBusConnectionManager("Endpoint=sb://ns/")

        queue = manager.create_transport(queue_name="q1", wait_time_ms=250)
        subscription = manager.create_transport(
            topic_name="t1", subscription_name="s1"
        )

    assert queue.endpoint == QueueEndpoint("q1")
    assert subscription.endpoint == SubscriptionEndpoint("t1", "s1")
    client_cls.from_connection_string.assert_called_once()
    mock_client.get_queue_receiver.assert_called_once()
    mock_client.get_subscription_receiver.assert_called_once()


@pytest.mark.asyncio
async def test_close_releases_client() -> None:
    with patch(CLIENT) as client_cls:
        sdk_client = client_cls.from_connection_string.return_value
        sdk_client.close = AsyncMock()

        async with ServiceBusConnectionManager("Endpoint=sb://ns/") as manager:
            manager.get_client()

        sdk_client.close.assert_awaited_once()
        assert manager.get_client() is sdk_client
        assert client_cls.from_connection_string.call_count == 2


@pytest.mark.asyncio
async def test_close_without_client_is_a_no_op() -> None:
    manager = ServiceBusConnectionManager("Endpoint=sb://ns/")
    await manager.close()
