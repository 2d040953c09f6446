import pytest

import kafka_bundle.client as client_module


class FakeTopic:
    def __init__(self, name, published, error=None):
        self.name = name
        self._published = published
        self._error = error

    def produce(self, partition, msgflags, payload, key=None):
        if self._error is not None:
            raise self._error
        self._published.append((self.name, partition, msgflags, payload, key))


class FakeProducer:
    """Records every call made by the manager"""

    def __init__(self, failures=None):
        self.calls = []
        self.published = []
        self.failures = failures or {}

    def set_log_level(self, level):
        self.calls.append(("set_log_level", level))

    def add_brokers(self, brokers):
        self.calls.append(("add_brokers", brokers))

    def new_topic(self, name, topic_config):
        self.calls.append(("new_topic", name, topic_config))
        return FakeTopic(name, self.published, self.failures.get(name))


class RecordingDispatcher:
    def __init__(self):
        self.events = []

    def dispatch(self, event_name, event):
        self.events.append((event_name, event))


class FakeConfluentProducer:
    """Stands in for confluent_kafka.Producer"""

    instances = []

    def __init__(self, config):
        self.config = config
        self.produced = []
        self.polls = []
        self.flushes = []
        self.error = None
        FakeConfluentProducer.instances.append(self)

    def produce(self, topic, value=None, key=None, partition=-1, callback=None):
        if self.error is not None:
            raise self.error
        self.produced.append(
            {"topic": topic, "value": value, "key": key, "partition": partition, "callback": callback}
        )

    def poll(self, timeout):
        self.polls.append(timeout)
        return 0

    def flush(self, timeout):
        self.flushes.append(timeout)
        return 0


@pytest.fixture
def fake_producer():
    return FakeProducer()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def confluent(monkeypatch):
    FakeConfluentProducer.instances = []
    monkeypatch.setattr(client_module, "Producer", FakeConfluentProducer)
    return FakeConfluentProducer
