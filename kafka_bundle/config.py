"""
Configuration classes for the Kafka bundle
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


@dataclass
class ProducerConfig:
    """Producer configuration with sensible defaults"""

    # Connection
    brokers: str = ""
    client_id: Optional[str] = None

    # librdkafka syslog level (0=emerg .. 7=debug)
    log_level: int = 6

    # Reliability
    acks: str = 'all'
    enable_idempotence: bool = False

    # Batching
    linger_ms: int = 5
    compression_type: Optional[str] = None

    # Timeouts
    request_timeout_ms: int = 30000

    # Topics registered on the manager, in fan-out order
    topics: List[str] = field(default_factory=list)

    # Raw librdkafka properties, applied last
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to Kafka producer config dict

        Brokers and log level are not included: they are applied through
        the manager's configuration calls.
        """
        config = {
            'acks': self.acks,
            'enable.idempotence': self.enable_idempotence,
            'linger.ms': self.linger_ms,
            'request.timeout.ms': self.request_timeout_ms,
        }
        if self.client_id:
            config['client.id'] = self.client_id
        if self.compression_type:
            config['compression.type'] = self.compression_type
        config.update(self.extra)
        return config


@dataclass
class TopicConfig:
    """Topic-level producer configuration"""
    acks: Optional[str] = None
    message_timeout_ms: Optional[int] = None
    partitioner: Optional[str] = None
    compression_type: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Get topic-level config, only the properties that are set"""
        config = {
            'acks': self.acks,
            'message.timeout.ms': self.message_timeout_ms,
            'partitioner': self.partitioner,
            'compression.type': self.compression_type,
        }
        config = {k: v for k, v in config.items() if v is not None}
        config.update(self.extra)
        return config


def _get_str(env: Mapping[str, str], key: str, default: Optional[str] = None) -> Optional[str]:
    value = env.get(key)
    if value is None:
        return default
    value = value.strip()
    return value if value else default


def _get_int(env: Mapping[str, str], key: str, default: int) -> int:
    value = _get_str(env, key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"{key} must be an integer (got: {value})") from e


def _get_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    value = _get_str(env, key)
    if value is None:
        return default
    return value.lower() in ('1', 'true', 'yes', 'y')


def load_producer_config(env: Optional[Mapping[str, str]] = None) -> ProducerConfig:
    """Load producer configuration from environment variables"""
    source = os.environ if env is None else env
    defaults = ProducerConfig()

    topics = _get_str(source, 'KAFKA_TOPICS', '')
    return ProducerConfig(
        brokers=_get_str(source, 'KAFKA_BROKERS', ''),
        client_id=_get_str(source, 'KAFKA_CLIENT_ID'),
        log_level=_get_int(source, 'KAFKA_LOG_LEVEL', defaults.log_level),
        acks=_get_str(source, 'KAFKA_ACKS', defaults.acks),
        enable_idempotence=_get_bool(
            source, 'KAFKA_ENABLE_IDEMPOTENCE', defaults.enable_idempotence
        ),
        linger_ms=_get_int(source, 'KAFKA_LINGER_MS', defaults.linger_ms),
        compression_type=_get_str(source, 'KAFKA_COMPRESSION'),
        topics=[name.strip() for name in topics.split(',') if name.strip()],
    )


class LogConfig:
    """Logging configuration"""

    @staticmethod
    def setup_logging(level=logging.INFO):
        """Setup logging configuration"""
        logging.basicConfig(
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            level=level,
            datefmt='%Y-%m-%d %H:%M:%S'
        )
