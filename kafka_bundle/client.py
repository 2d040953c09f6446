"""
Producer client capability on top of confluent-kafka

confluent_kafka.Producer takes its whole configuration at construction time,
so brokers, log level and topic-level properties are collected first and
the underlying producer is built on first use.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from confluent_kafka import KafkaException as ConfluentKafkaException
from confluent_kafka import Producer

from .config import ProducerConfig, TopicConfig

# librdkafka RD_KAFKA_PARTITION_UA: let the partitioner pick
PARTITION_UA = -1

# Message flags accepted by KafkaTopic.produce
MSG_FLAGS = 0

MIN_LOG_LEVEL = 0
MAX_LOG_LEVEL = 7


def _to_bytes(value: Optional[Union[bytes, str]]) -> Optional[bytes]:
    if value is None or isinstance(value, bytes):
        return value
    return str(value).encode('utf-8')


def error_message(error: Exception) -> str:
    """Human-readable text of an error raised by the client

    confluent_kafka.KafkaException wraps a KafkaError whose str() is a repr;
    its reason is available through KafkaError.str().
    """
    if isinstance(error, ConfluentKafkaException) and error.args:
        kafka_error = error.args[0]
        if hasattr(kafka_error, "str"):
            return kafka_error.str()
    return str(error)


def topic_properties(topic_config: Union[TopicConfig, Mapping[str, Any], None]) -> Dict[str, Any]:
    """Topic-level properties of a TopicConfig or a plain librdkafka mapping"""
    if topic_config is None:
        return {}
    if isinstance(topic_config, TopicConfig):
        return topic_config.to_dict()
    if isinstance(topic_config, Mapping):
        return dict(topic_config)
    raise TypeError(
        f"topic configuration must be a TopicConfig or a mapping (got: {type(topic_config).__name__})"
    )


class KafkaTopic:
    """Handle for publishing to one topic through a KafkaProducerClient"""

    def __init__(
            self,
            client: 'KafkaProducerClient',
            name: str,
            config: Union[TopicConfig, Mapping[str, Any], None] = None
    ):
        self.client = client
        self.name = name
        self.config = config

    def produce(
            self,
            partition: int,
            msgflags: int,
            payload: Union[bytes, str],
            key: Optional[Union[bytes, str]] = None
    ) -> None:
        """Enqueue a single message on this topic"""
        if msgflags != MSG_FLAGS:
            raise ValueError(f"msgflags must be {MSG_FLAGS} (got: {msgflags})")
        self.client.send(self.name, payload, key=key, partition=partition)

    def __repr__(self) -> str:
        return f"KafkaTopic(name={self.name!r})"


class KafkaProducerClient:
    """Kafka producer client configured step by step"""

    def __init__(self, config: Optional[ProducerConfig] = None):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.config = config or ProducerConfig()

        self.brokers: List[str] = []
        self.log_level: Optional[int] = None
        self.topics: List[KafkaTopic] = []
        self.producer: Optional[Producer] = None

        # Statistics
        self.success_count = 0
        self.error_count = 0

    def _check_not_started(self, what: str) -> None:
        if self.producer is not None:
            raise RuntimeError(f"Cannot change {what}: producer already started")

    def set_log_level(self, level: int) -> None:
        """Set the librdkafka log level (syslog severity 0-7)"""
        if not MIN_LOG_LEVEL <= level <= MAX_LOG_LEVEL:
            raise ValueError(
                f"log level must be between {MIN_LOG_LEVEL} and {MAX_LOG_LEVEL} (got: {level})"
            )
        self._check_not_started("log level")
        self.log_level = level

    def add_brokers(self, brokers: str) -> None:
        """Add comma-separated broker addresses to the bootstrap list"""
        addresses = [b.strip() for b in brokers.split(',') if b.strip()]
        if not addresses:
            raise ValueError("brokers must not be empty")
        self._check_not_started("brokers")

        for address in addresses:
            if address not in self.brokers:
                self.brokers.append(address)

    def new_topic(
            self,
            name: str,
            topic_config: Union[TopicConfig, Mapping[str, Any], None] = None
    ) -> KafkaTopic:
        """Create a topic handle bound to this client

        Topic-level properties end up in the single producer configuration,
        so a property already set to another value by a registered topic
        is rejected.
        """
        if not name:
            raise ValueError("topic name must not be empty")
        properties = topic_properties(topic_config)
        if properties:
            self._check_not_started("topic configuration")

        for other in self.topics:
            for prop, value in topic_properties(other.config).items():
                if prop in properties and properties[prop] != value:
                    raise ValueError(
                        f"Topic '{name}' sets '{prop}'={properties[prop]!r} but topic "
                        f"'{other.name}' already set it to {value!r}"
                    )

        topic = KafkaTopic(self, name, topic_config)
        self.topics.append(topic)
        return topic

    def build_config(self) -> Dict[str, Any]:
        """Merge producer, topic-level and step-by-step settings"""
        if not self.brokers:
            raise ValueError("No brokers configured")

        config = self.config.to_dict()
        for topic in self.topics:
            for prop, value in topic_properties(topic.config).items():
                if prop in config and config[prop] != value:
                    self.logger.warning(
                        f"Topic '{topic.name}' overrides '{prop}': "
                        f"{config[prop]!r} -> {value!r}"
                    )
                config[prop] = value

        config['bootstrap.servers'] = ','.join(self.brokers)
        if self.log_level is not None:
            config['log_level'] = self.log_level
        return config

    def _ensure_producer(self) -> Producer:
        if self.producer is None:
            try:
                self.producer = Producer(self.build_config())
                self.logger.info(f"Producer initialized (brokers={','.join(self.brokers)})")
            except Exception as e:
                self.logger.error(f"Failed to initialize producer: {e}")
                raise
        return self.producer

    def _delivery_callback(self, err, msg):
        """Async delivery callback"""
        if err:
            self.error_count += 1
            self.logger.error(f"Delivery failed for topic '{msg.topic()}': {err}")
        else:
            self.success_count += 1

    def send(
            self,
            topic: str,
            value: Union[bytes, str],
            key: Optional[Union[bytes, str]] = None,
            partition: int = PARTITION_UA
    ) -> None:
        """Send a message to Kafka (non-blocking)"""
        producer = self._ensure_producer()
        try:
            producer.produce(
                topic,
                value=_to_bytes(value),
                key=_to_bytes(key),
                partition=partition,
                callback=self._delivery_callback
            )

            # Serve delivery callbacks without blocking
            producer.poll(0)

        except Exception as e:
            self.logger.error(f"Failed to send message to '{topic}': {error_message(e)}")
            self.error_count += 1
            raise

    def poll(self, timeout: float = 0) -> int:
        """Serve delivery callbacks"""
        if self.producer is None:
            return 0
        return self.producer.poll(timeout)

    def flush(self, timeout: float = 30) -> int:
        """Flush pending messages"""
        if self.producer is None:
            return 0
        try:
            pending = self.producer.flush(timeout)

            if pending > 0:
                self.logger.warning(f"{pending} messages still pending after flush")

            self.logger.info(
                f"Success={self.success_count:,}, "
                f"Errors={self.error_count:,}"
            )

            return pending

        except Exception as e:
            self.logger.error(f"Failed to flush producer: {e}")
            raise

    def close(self) -> None:
        """Close the producer"""
        self.flush()
        self.logger.info("Producer closed")

    def get_stats(self) -> Dict[str, int]:
        """Get producer statistics"""
        return {
            'success_count': self.success_count,
            'error_count': self.error_count,
            'total_sent': self.success_count + self.error_count
        }
