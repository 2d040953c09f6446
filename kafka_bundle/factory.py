"""
Build a ready-to-use ProducerManager from configuration
"""
import logging
from typing import Optional

from .client import KafkaProducerClient
from .config import ProducerConfig, TopicConfig
from .events import EventDispatcher
from .manager import ProducerManager

logger = logging.getLogger(__name__)


def build_producer_manager(
        config: ProducerConfig,
        topic_config: Optional[TopicConfig] = None,
        dispatcher: Optional[EventDispatcher] = None,
        client=None
) -> ProducerManager:
    """
    Create a manager and configure it in the required order

    Args:
        config: Producer configuration (brokers, log level, topic names)
        topic_config: Topic-level configuration shared by every topic
        dispatcher: Event dispatcher notified after each produce
        client: Producer capability; a KafkaProducerClient by default
    """
    if not config.brokers:
        raise ValueError("brokers must be configured")

    manager = ProducerManager()
    (
        manager
        .set_producer(client if client is not None else KafkaProducerClient(config))
        .add_brokers(config.brokers)
        .set_log_level(config.log_level)
    )

    for name in config.topics:
        manager.add_topic(name, topic_config)

    if dispatcher is not None:
        manager.set_event_dispatcher(dispatcher)

    logger.info(
        f"Producer manager ready (brokers={config.brokers}, "
        f"topics={', '.join(config.topics) or '-'})"
    )
    return manager
