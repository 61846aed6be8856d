"""MessageAttributes — metadata travelling alongside a message body."""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field

AttributeValue = Union[str, int, float, bool, None]
"""Primitive values a transport can carry in its property bag."""


class MessageAttributes(BaseModel):
    """Two-tier attribute record for a message.

    ``attributes`` are transient and scoped to the receiver of this message.
    ``sticky_attributes`` are meant to be copied onto every message sent while
    handling this one, so they propagate along a chain of related messages.
    The correlation id has its own field and is never stored inside either tier.
    """

    model_config = ConfigDict(frozen=True)

    correlation_id: str | None = None
    attributes: dict[str, AttributeValue] = Field(default_factory=dict)
    sticky_attributes: dict[str, AttributeValue] = Field(default_factory=dict)
