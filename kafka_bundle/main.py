"""
Command-line entry point: publish messages to every configured topic
"""
import argparse
import logging
import signal
import sys
from typing import Iterable, List, Optional

from .client import PARTITION_UA, KafkaProducerClient
from .config import LogConfig, ProducerConfig, load_producer_config
from .events import LoggingEventDispatcher
from .exceptions import KafkaBundleError
from .factory import build_producer_manager


class ProducerApplication:
    """Main application orchestrator"""

    def __init__(self, producer_config: ProducerConfig):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.producer_config = producer_config
        self.client = KafkaProducerClient(producer_config)
        self.manager = build_producer_manager(
            producer_config,
            dispatcher=LoggingEventDispatcher(),
            client=self.client
        )

    def run(self, messages: Iterable[str], key: Optional[str] = None, partition: int = PARTITION_UA) -> int:
        """Produce every message, then flush; returns the number produced"""
        count = 0
        try:
            for message in messages:
                self.manager.produce(message, key, partition)
                count += 1
        finally:
            self.client.flush()

        self.logger.info(f"Produced {count:,} messages to {len(self.manager.topics)} topics")
        return count


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Publish messages to every configured Kafka topic"
    )
    parser.add_argument('messages', nargs='*', help="messages to publish (default: read stdin lines)")
    parser.add_argument('--key', default=None, help="message key")
    parser.add_argument('--partition', type=int, default=PARTITION_UA, help="target partition")
    parser.add_argument('--brokers', default=None, help="override KAFKA_BROKERS")
    parser.add_argument('--topic', action='append', dest='topics', help="override KAFKA_TOPICS (repeatable)")
    parser.add_argument('--log-level', type=int, default=None, help="override KAFKA_LOG_LEVEL")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    LogConfig.setup_logging()
    args = parse_args(argv)

    # Handle graceful shutdown
    def signal_handler(sig, frame):
        logging.info("Interrupted! Shutting down...")
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)

    messages = args.messages or (line.rstrip('\n') for line in sys.stdin)
    try:
        producer_config = load_producer_config()
        if args.brokers:
            producer_config.brokers = args.brokers
        if args.topics:
            producer_config.topics = args.topics
        if args.log_level is not None:
            producer_config.log_level = args.log_level

        app = ProducerApplication(producer_config)
        app.run(messages, key=args.key, partition=args.partition)
    except (KafkaBundleError, ValueError) as e:
        logging.error(f"{type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
