"""
Observer registry for notifying the presentation layer about loads.

The core never renders anything; it emits loading-state changes, fatal error
messages and non-fatal validation warnings to whoever subscribed.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any

from powerbid.observability.logger import get_logger

logger = get_logger(__name__)

EventCallback = Callable[[Any], None]


class LoadEvent(str, Enum):
    """Events emitted by the load orchestrator."""

    LOADING_STATE_CHANGED = "loading_state_changed"  # payload: bool
    DATA_ERROR = "data_error"  # payload: str message
    VALIDATION_WARNING = "validation_warning"  # payload: list[str]


class LoadEventBus:
    """
    Per-pipeline listener registry.

    Listeners run synchronously in subscription order. A listener that raises
    is logged and skipped; it never aborts the load that emitted the event.
    """

    def __init__(self) -> None:
        self._listeners: dict[LoadEvent, list[EventCallback]] = {event: [] for event in LoadEvent}

    def subscribe(self, event: LoadEvent, callback: EventCallback) -> Callable[[], None]:
        """
        Register a listener for one event type.

        Returns:
            Callback that removes the listener again
        """
        self._listeners[event].append(callback)

        def remove_listener() -> None:
            """Remove the listener."""
            if callback in self._listeners[event]:
                self._listeners[event].remove(callback)

        return remove_listener

    def emit(self, event: LoadEvent, payload: Any) -> None:
        """Deliver payload to every listener of event."""
        for callback in list(self._listeners[event]):
            try:
                callback(payload)
            except Exception:
                logger.exception(
                    f"Listener for {event.value} raised",
                    extra={"event": event.value},
                )

    def listener_count(self, event: LoadEvent) -> int:
        return len(self._listeners[event])
