"""CoreDependencies — shared services handed to transports by the bus."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .primitives.exceptions import PersistenceNotConfiguredError
from .serialization import JsonMessageSerializer

if TYPE_CHECKING:
    from collections.abc import Callable

    from .ports.serialization import IMessageSerializer


class CoreDependencies:
    """Services the bus passes to ``ITransport.prepare``.

    ``logger_factory`` maps a logger name to a ``logging.Logger``; by default
    it is ``logging.getLogger`` so transports log into the host's standard
    logging configuration.
    """

    def __init__(
        self,
        logger_factory: Callable[[str], logging.Logger] = logging.getLogger,
        message_serializer: IMessageSerializer | None = None,
        persistence: Any = None,
    ) -> None:
        self.logger_factory = logger_factory
        self.message_serializer: IMessageSerializer = (
            message_serializer or JsonMessageSerializer()
        )
        self._persistence = persistence

    @property
    def persistence(self) -> Any:
        """Return the configured persistence; fail fast if none was supplied."""
        if self._persistence is None:
            raise PersistenceNotConfiguredError()
        return self._persistence

    @property
    def has_persistence(self) -> bool:
        return self._persistence is not None
