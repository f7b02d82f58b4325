from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

# Event channels emitted by Simulation.
TURN = "turn"
FINISHED = "finished"


class EventBus:
    """Lightweight synchronous publish/subscribe bus.

    Lets a presentation layer observe a simulation without the engine knowing
    about it. Handlers are called in subscription order, on the caller's thread,
    and exceptions raised by a handler propagate to the emitter.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Callable[..., Any]]] = {}

    def subscribe(self, event: str, handler: Callable[..., Any]) -> None:
        """Register ``handler`` for ``event`` (e.g. TURN or FINISHED).

        The handler receives the payload as keyword arguments: ``simulation``
        and, for TURN, ``record``. Registering the same handler twice is a no-op.
        """
        handlers = self._handlers.setdefault(event, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug("Subscribed handler %s to event '%s'", handler, event)

    def unsubscribe(self, event: str, handler: Callable[..., Any]) -> None:
        handlers = self._handlers.get(event)
        if not handlers:
            return
        if handler in handlers:
            handlers.remove(handler)
            logger.debug("Unsubscribed handler %s from event '%s'", handler, event)
        if not handlers:
            del self._handlers[event]

    def clear(self) -> None:
        self._handlers.clear()

    def emit(self, event: str, **kwargs: Any) -> List[Any]:
        """Call every handler of ``event`` with ``kwargs`` and collect their results."""
        handlers = list(self._handlers.get(event, []))
        if not handlers:
            return []
        logger.debug("Emitting '%s' to %d handlers", event, len(handlers))
        return [handler(**kwargs) for handler in handlers]


__all__ = ["EventBus", "TURN", "FINISHED"]
