"""
Runtime event bus.

Execution publishes what happened to each block and extrinsic; listeners
(receipt indexers, metrics, tests) subscribe by event name. Delivery is
synchronous and in emit order. A failing listener is logged and skipped, it
never changes the outcome of execution.
"""
from typing import Dict, List, Callable, Any, Optional
import logging

logger = logging.getLogger(__name__)

BLOCK_EXECUTED = "block_executed"
BLOCK_REJECTED = "block_rejected"
EXTRINSIC_APPLIED = "extrinsic_applied"
EXTRINSIC_FAILED = "extrinsic_failed"


class EventBus:
    def __init__(self):
        self.listeners: Dict[str, List[Callable]] = {}

    def subscribe(self, event_type: str, callback: Callable) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: Event name (e.g., 'extrinsic_failed')
            callback: Called with the event's keyword arguments
        """
        self.listeners.setdefault(event_type, []).append(callback)
        logger.debug(f"Subscribed to event: {event_type}")

    def unsubscribe(self, event_type: str, callback: Callable) -> None:
        if event_type in self.listeners:
            try:
                self.listeners[event_type].remove(callback)
                logger.debug(f"Unsubscribed from event: {event_type}")
            except ValueError:
                logger.warning(f"Callback not found for event: {event_type}")

    def emit(self, event_type: str, **data: Any) -> int:
        """
        Deliver an event to every subscriber.

        Returns:
            Number of listeners that handled the event without raising
        """
        listeners = list(self.listeners.get(event_type, []))
        if not listeners:
            return 0

        logger.debug(f"Emitting event: {event_type} to {len(listeners)} listener(s)")

        delivered = 0
        for callback in listeners:
            try:
                callback(**data)
                delivered += 1
            except Exception as e:
                logger.error(f"Error in event callback for {event_type}: {e}", exc_info=True)
        return delivered

    def clear(self, event_type: Optional[str] = None) -> None:
        """Clear listeners for one event type, or all of them."""
        if event_type:
            self.listeners.pop(event_type, None)
        else:
            self.listeners.clear()

