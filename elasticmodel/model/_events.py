from __future__ import annotations

from typing import Any, Callable

from ..core import get_logger
from ..core.exceptions import BadRequestError

logger = get_logger(__name__)

EVENTS = (
    "booting",
    "booted",
    "retrieved",
    "saving",
    "creating",
    "created",
    "updating",
    "updated",
    "saved",
    "deleting",
    "deleted",
    "replicating",
)

# A listener returning False stops the operation of these events.
HALTING_EVENTS = ("saving", "creating", "updating", "deleting")


class EventDispatcher:
    """Model lifecycle listeners keyed by model class and event."""

    _listeners: dict[tuple[type, str], list[Callable[[Any], Any]]]

    def __init__(self) -> None:
        self._listeners = dict()

    def listen(
        self,
        model_type: type,
        event: str,
        listener: Callable[[Any], Any],
    ) -> None:
        if event not in EVENTS:
            raise BadRequestError(f"Model event {event} not supported")
        self._listeners.setdefault((model_type, event), []).append(listener)

    def observe(self, model_type: type, observer: Any) -> None:
        """Register the methods of an observer named after events."""
        for event in EVENTS:
            method = getattr(observer, event, None)
            if callable(method):
                self.listen(model_type, event, method)

    def has_listeners(self, model_type: type, event: str) -> bool:
        return bool(self._listeners.get((model_type, event)))

    def dispatch(self, event: str, model: Any, halt: bool = False) -> bool:
        """Call the listeners of an event.

        Args:
            event:
                Event name.
            model:
                Model passed to each listener.
            halt:
                Stop at the first listener returning False.

        Returns:
            False when a listener halted the event, True otherwise.
        """
        listeners = self._listeners.get((type(model), event), [])
        for listener in list(listeners):
            result = listener(model)
            if halt and result is False:
                logger.debug(
                    "Event %s halted for %s", event, type(model).__name__
                )
                return False
        return True

    def forget(self, model_type: type) -> None:
        for key in [k for k in self._listeners if k[0] is model_type]:
            self._listeners.pop(key)

    def flush(self) -> None:
        self._listeners.clear()
