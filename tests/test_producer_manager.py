"""Tests for the ProducerManager setup order and publish fan-out."""
import pytest

from kafka_bundle.events import KAFKA_EVENT_NAME, KafkaEvent
from kafka_bundle.exceptions import (
    EntityNotSetException,
    KafkaException,
    LogLevelNotSetException,
    NoBrokerSetException,
)
from kafka_bundle.manager import ProducerManager

from conftest import FakeProducer


def configured(producer, topics=()):
    manager = ProducerManager()
    manager.set_producer(producer).add_brokers("localhost:9092").set_log_level(6)
    for name in topics:
        manager.add_topic(name, None)
    return manager


def test_get_origin_is_constant():
    manager = ProducerManager()
    assert manager.get_origin() == "producer"
    manager.set_producer(FakeProducer())
    assert manager.get_origin() == "producer"


@pytest.mark.parametrize(
    "call",
    [
        lambda m: m.set_log_level(6),
        lambda m: m.add_brokers("localhost:9092"),
        lambda m: m.add_topic("orders", None),
    ],
)
def test_operations_without_producer_fail(call):
    manager = ProducerManager()
    with pytest.raises(EntityNotSetException):
        call(manager)
    assert manager.log_level is None
    assert manager.brokers is None
    assert manager.topics == ()


def test_add_topic_without_brokers_fails(fake_producer):
    manager = ProducerManager().set_producer(fake_producer).set_log_level(6)
    with pytest.raises(NoBrokerSetException):
        manager.add_topic("orders", None)
    assert ("new_topic", "orders", None) not in fake_producer.calls


def test_add_topic_without_log_level_fails(fake_producer):
    manager = ProducerManager().set_producer(fake_producer).add_brokers("localhost:9092")
    with pytest.raises(LogLevelNotSetException):
        manager.add_topic("orders", None)
    assert manager.topics == ()


def test_brokers_checked_before_log_level(fake_producer):
    manager = ProducerManager().set_producer(fake_producer)
    with pytest.raises(NoBrokerSetException):
        manager.add_topic("orders", None)


@pytest.mark.parametrize("log_level_first", [True, False])
def test_brokers_and_log_level_in_any_order(fake_producer, log_level_first):
    manager = ProducerManager().set_producer(fake_producer)
    if log_level_first:
        manager.set_log_level(3).add_brokers("b1:9092")
    else:
        manager.add_brokers("b1:9092").set_log_level(3)

    manager.add_topic("orders", None)

    assert manager.brokers == "b1:9092"
    assert manager.log_level == 3
    assert [t.name for t in manager.topics] == ["orders"]


def test_configuration_is_forwarded(fake_producer):
    topic_config = object()
    manager = configured(fake_producer)
    manager.add_topic("orders", topic_config)

    assert fake_producer.calls == [
        ("add_brokers", "localhost:9092"),
        ("set_log_level", 6),
        ("new_topic", "orders", topic_config),
    ]


def test_setters_are_fluent(fake_producer):
    manager = ProducerManager()
    assert manager.set_producer(fake_producer) is manager
    assert manager.add_brokers("localhost:9092") is manager
    assert manager.set_log_level(6) is manager
    assert manager.add_topic("orders", None) is None


def test_produce_fans_out_in_registration_order(fake_producer, dispatcher):
    manager = configured(fake_producer, ["orders", "events"])
    manager.set_event_dispatcher(dispatcher)

    manager.produce("hello", None, -1)

    assert fake_producer.published == [
        ("orders", -1, 0, "hello", None),
        ("events", -1, 0, "hello", None),
    ]
    assert len(dispatcher.events) == 1
    event_name, event = dispatcher.events[0]
    assert event_name == KAFKA_EVENT_NAME
    assert isinstance(event, KafkaEvent)
    assert event.origin == "producer"


def test_produce_defaults_to_unassigned_partition(fake_producer):
    manager = configured(fake_producer, ["orders"])
    manager.produce("hello")
    assert fake_producer.published == [("orders", -1, 0, "hello", None)]


def test_produce_passes_key_and_partition(fake_producer):
    manager = configured(fake_producer, ["orders"])
    manager.produce(b"payload", key="k1", partition=2)
    assert fake_producer.published == [("orders", 2, 0, b"payload", "k1")]


def test_produce_without_topics_still_notifies(fake_producer, dispatcher):
    manager = configured(fake_producer)
    manager.set_event_dispatcher(dispatcher)

    manager.produce("hello")

    assert fake_producer.published == []
    assert [e.origin for _, e in dispatcher.events] == ["producer"]


def test_produce_without_dispatcher_is_silent(fake_producer):
    manager = configured(fake_producer, ["orders"])
    manager.produce("hello")
    assert len(fake_producer.published) == 1


def test_failing_topic_stops_fan_out(dispatcher):
    producer = FakeProducer(failures={"events": RuntimeError("broker down")})
    manager = configured(producer, ["orders", "events", "audit"])
    manager.set_event_dispatcher(dispatcher)

    with pytest.raises(KafkaException) as exc_info:
        manager.produce("hello")

    assert str(exc_info.value) == "broker down"
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert producer.published == [("orders", -1, 0, "hello", None)]
    assert dispatcher.events == []


def test_every_produce_notifies_once(fake_producer, dispatcher):
    manager = configured(fake_producer, ["orders"])
    manager.set_event_dispatcher(dispatcher)

    manager.produce("one")
    manager.produce("two")

    assert len(dispatcher.events) == 2
    assert len(fake_producer.published) == 2


def test_topics_snapshot_is_read_only(fake_producer):
    manager = configured(fake_producer, ["orders"])
    topics = manager.topics
    assert isinstance(topics, tuple)
    manager.add_topic("events", None)
    assert len(topics) == 1
    assert len(manager.topics) == 2
