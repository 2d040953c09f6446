"""
Event notification for Kafka managers

A manager notifies an event dispatcher once an operation completed. The
dispatcher is optional: without one, notification does nothing.
"""
import logging
import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Protocol, Type

KAFKA_EVENT_NAME = "kafka_bundle.kafka"


@dataclass
class KafkaEvent:
    """Event carrying the origin of a notification"""
    origin: str
    timestamp: float = field(default_factory=time.time)


class EventDispatcher(Protocol):
    """Anything able to receive a named event"""

    def dispatch(self, event_name: str, event: KafkaEvent) -> None:  # pragma: no cover - interface
        ...


class NotifyEventMixin:
    """Adds optional event notification to a manager"""

    event_dispatcher: Optional[EventDispatcher] = None
    event_class: Type[KafkaEvent] = KafkaEvent

    def set_event_dispatcher(
            self,
            dispatcher: EventDispatcher,
            event_class: Type[KafkaEvent] = KafkaEvent
    ) -> None:
        self.event_dispatcher = dispatcher
        self.event_class = event_class

    def notify_event(self, origin: str) -> None:
        """Dispatch an event for the given origin, if a dispatcher is set"""
        if self.event_dispatcher is None:
            return
        self.event_dispatcher.dispatch(KAFKA_EVENT_NAME, self.event_class(origin=origin))


class LoggingEventDispatcher:
    """Dispatcher that writes every event to the log"""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def dispatch(self, event_name: str, event: KafkaEvent) -> None:
        self.logger.info(f"{event_name}: origin={event.origin}")


class CallbackEventDispatcher:
    """Dispatcher calling the listeners registered for an event name"""

    def __init__(self):
        self.listeners: Dict[str, List[Callable[[KafkaEvent], None]]] = defaultdict(list)

    def add_listener(self, event_name: str, listener: Callable[[KafkaEvent], None]) -> None:
        self.listeners[event_name].append(listener)

    def dispatch(self, event_name: str, event: KafkaEvent) -> None:
        for listener in self.listeners.get(event_name, []):
            listener(event)
