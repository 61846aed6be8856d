"""ServiceBusTransportConfiguration — endpoint names and receive tuning."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

DEFAULT_WAIT_TIME_MS = 60_000


class ServiceBusTransportConfiguration(BaseModel):
    """Configuration for :class:`~cqrs_ddd_servicebus.transport.ServiceBusTransport`.

    Set either ``queue_name`` or both ``topic_name`` and ``subscription_name``.
    The shape is checked when the transport is constructed.

    ``wait_time_ms`` bounds how long one receive call waits for a message. It
    is a millisecond duration; the legacy ``waitTimeSeconds`` key is accepted
    as an alias but is read as milliseconds too. A receive cannot be
    interrupted mid-wait, so it also bounds shutdown latency.
    """

    model_config = ConfigDict(
        frozen=True, arbitrary_types_allowed=True, populate_by_name=True
    )

    service_bus_client: Any = Field(
        ..., description="Connected azure.servicebus.aio.ServiceBusClient"
    )
    queue_name: str | None = None
    topic_name: str | None = None
    subscription_name: str | None = None
    wait_time_ms: int = Field(
        default=DEFAULT_WAIT_TIME_MS,
        gt=0,
        validation_alias=AliasChoices("wait_time_ms", "waitTimeSeconds"),
    )

    @property
    def max_wait_time(self) -> float:
        """Receive wait in seconds, as the azure SDK expects it."""
        return self.wait_time_ms / 1000
