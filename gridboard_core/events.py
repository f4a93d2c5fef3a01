from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List

from loguru import logger

from .location import Location
from .pieces import Piece


@dataclass(frozen=True)
class BoardChanged:
    """Published after a cell's content was replaced."""
    location: Location
    piece: Piece


ChangeHandler = Callable[[BoardChanged], None]


class ChangeNotifier:
    """Ordered subscription list for BoardChanged events.

    Subscribing an already registered handler and unsubscribing an unknown one
    are both no-ops. Dispatch iterates a snapshot, so handlers may change the
    subscription list while an event is being delivered; the change applies
    from the next event on.
    """

    def __init__(self) -> None:
        self._handlers: List[ChangeHandler] = []

    def subscribe(self, handler: ChangeHandler) -> None:
        if handler in self._handlers:
            return
        self._handlers.append(handler)
        logger.debug("subscribed {} ({} handlers)", handler, len(self._handlers))

    def unsubscribe(self, handler: ChangeHandler) -> None:
        if handler not in self._handlers:
            return
        self._handlers.remove(handler)
        logger.debug("unsubscribed {} ({} handlers)", handler, len(self._handlers))

    def is_subscribed(self, handler: ChangeHandler) -> bool:
        return handler in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def publish(self, event: BoardChanged) -> None:
        for handler in tuple(self._handlers):
            handler(event)
