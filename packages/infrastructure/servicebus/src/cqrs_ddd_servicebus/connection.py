"""ServiceBusClient management and transport construction."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from azure.servicebus.aio import ServiceBusClient

from .config import DEFAULT_WAIT_TIME_MS, ServiceBusTransportConfiguration
from .exceptions import TransportConfigurationError
from .transport import ServiceBusTransport

if TYPE_CHECKING:
    from types import TracebackType


class ServiceBusConnectionManager:
    """Manages one aio ServiceBusClient shared by the transports built from it.

    Configure either a connection string or a fully-qualified namespace with
    a credential (e.g. ``azure.identity.aio.DefaultAzureCredential``). The
    client is created on first use and closed by ``close()``.
    """

    def __init__(
        self,
        connection_string: str | None = None,
        *,
        fully_qualified_namespace: str | None = None,
        credential: Any = None,
        **client_kwargs: Any,
    ) -> None:
        """Configure how to reach the namespace; optional SDK client kwargs."""
        if not connection_string and not (fully_qualified_namespace and credential):
            raise TransportConfigurationError(
                "Either a connection string or a namespace with a credential "
                "should be set."
            )
        self._connection_string = connection_string
        self._namespace = fully_qualified_namespace
        self._credential = credential
        self._client_kwargs = client_kwargs
        self._client: ServiceBusClient | None = None

    def get_client(self) -> ServiceBusClient:
        """Return the shared client; create it if needed."""
        if self._client is None:
            if self._connection_string:
                self._client = ServiceBusClient.from_connection_string(
                    self._connection_string, **self._client_kwargs
                )
            else:
                self._client = ServiceBusClient(
                    self._namespace, self._credential, **self._client_kwargs
                )
        return self._client

    def create_transport(
        self,
        *,
        queue_name: str | None = None,
        topic_name: str | None = None,
        subscription_name: str | None = None,
        wait_time_ms: int = DEFAULT_WAIT_TIME_MS,
    ) -> ServiceBusTransport:
        """Build a transport bound to the given endpoint on the shared client."""
        configuration = ServiceBusTransportConfiguration(
            service_bus_client=self.get_client(),
            queue_name=queue_name,
            topic_name=topic_name,
            subscription_name=subscription_name,
            wait_time_ms=wait_time_ms,
        )
        return ServiceBusTransport(configuration)

    async def close(self) -> None:
        """Close the client if open."""
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def __aenter__(self) -> ServiceBusConnectionManager:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
