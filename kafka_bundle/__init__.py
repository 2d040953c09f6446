"""
Kafka Bundle
Configuration-gated producer manager publishing to many topics at once
"""

__version__ = "1.0.0"

from .config import ProducerConfig, TopicConfig, LogConfig, load_producer_config
from .client import KafkaProducerClient, KafkaTopic, PARTITION_UA
from .events import (
    KAFKA_EVENT_NAME,
    CallbackEventDispatcher,
    KafkaEvent,
    LoggingEventDispatcher,
)
from .exceptions import (
    KafkaBundleError,
    EntityNotSetException,
    NoBrokerSetException,
    LogLevelNotSetException,
    KafkaException,
)
from .manager import ProducerManager
from .factory import build_producer_manager

__all__ = [
    'ProducerConfig',
    'TopicConfig',
    'LogConfig',
    'load_producer_config',
    'KafkaProducerClient',
    'KafkaTopic',
    'PARTITION_UA',
    'KAFKA_EVENT_NAME',
    'CallbackEventDispatcher',
    'KafkaEvent',
    'LoggingEventDispatcher',
    'KafkaBundleError',
    'EntityNotSetException',
    'NoBrokerSetException',
    'LogLevelNotSetException',
    'KafkaException',
    'ProducerManager',
    'build_producer_manager',
]
