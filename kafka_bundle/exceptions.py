"""
Exceptions raised by the Kafka bundle
"""
from typing import Optional


class KafkaBundleError(Exception):
    """Base class for all bundle errors"""

    default_message = ""

    def __init__(self, message: Optional[str] = None):
        super().__init__(self.default_message if message is None else message)


class EntityNotSetException(KafkaBundleError):
    """The producer entity has not been set on the manager"""

    default_message = "Producer entity is not set"


class NoBrokerSetException(KafkaBundleError):
    """A topic was added before any broker"""

    default_message = "No broker set"


class LogLevelNotSetException(KafkaBundleError):
    """A topic was added before the log level"""

    default_message = "Log level is not set"


class KafkaException(KafkaBundleError):
    """Publishing to one of the registered topics failed"""
