"""
Producer manager: fans one message out to every registered topic
"""
import logging
from typing import Any, List, Optional, Tuple, Union

from .client import MSG_FLAGS, PARTITION_UA, error_message
from .events import NotifyEventMixin
from .exceptions import (
    EntityNotSetException,
    KafkaException,
    LogLevelNotSetException,
    NoBrokerSetException,
)


class ProducerManager(NotifyEventMixin):
    """Configuration-gated façade over a producer client

    Setup must happen in order: producer, then brokers and log level (in
    any order), then topics. Not thread-safe; use one manager per worker.
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)
        self._producer: Optional[Any] = None
        self._brokers: Optional[str] = None
        self._log_level: Optional[int] = None
        self._topics: List[Any] = []

    @property
    def producer(self) -> Optional[Any]:
        return self._producer

    @property
    def brokers(self) -> Optional[str]:
        return self._brokers

    @property
    def log_level(self) -> Optional[int]:
        return self._log_level

    @property
    def topics(self) -> Tuple[Any, ...]:
        return tuple(self._topics)

    def get_origin(self) -> str:
        return 'producer'

    def set_producer(self, producer: Any) -> 'ProducerManager':
        self._producer = producer
        return self

    def set_log_level(self, level: int) -> 'ProducerManager':
        self._check_producer_set()

        self._producer.set_log_level(level)
        self._log_level = level
        self.logger.debug(f"Log level set to {level}")

        return self

    def add_brokers(self, brokers: str) -> 'ProducerManager':
        self._check_producer_set()

        self._producer.add_brokers(brokers)
        self._brokers = brokers
        self.logger.debug(f"Brokers added: {brokers}")

        return self

    def add_topic(self, name: str, topic_config: Any = None) -> None:
        self._check_producer_set()
        self._check_brokers_set()
        self._check_log_level_set()

        self._topics.append(self._producer.new_topic(name, topic_config))
        self.logger.debug(f"Topic '{name}' registered")

    def produce(
            self,
            message: Union[bytes, str],
            key: Optional[Union[bytes, str]] = None,
            partition: int = PARTITION_UA
    ) -> None:
        """Publish a message to every registered topic, in registration order

        Stops at the first failing topic; topics already published stay
        published. Any failure is raised as KafkaException carrying the
        original message.
        """
        for topic in self._topics:
            try:
                topic.produce(partition, MSG_FLAGS, message, key)
            except Exception as e:
                reason = error_message(e)
                self.logger.error(f"Failed to produce to {topic!r}: {reason}")
                raise KafkaException(reason) from e

        self.notify_event(self.get_origin())

    def _check_producer_set(self) -> None:
        if self._producer is None:
            raise EntityNotSetException()

    def _check_brokers_set(self) -> None:
        if self._brokers is None:
            raise NoBrokerSetException()

    def _check_log_level_set(self) -> None:
        if self._log_level is None:
            raise LogLevelNotSetException()
