"""Tests for the hello queue consumer."""

import logging
from unittest.mock import Mock

import pika
import pytest

from hello_messaging.contracts import IMessageHandler, IRabbitMQConnection
from hello_messaging.consumer import HelloConsumer
from hello_messaging.delivery import AckMode
from hello_messaging.errors import BrokerOperationError, QueueDeclarationMismatchError
from hello_messaging.logging_message_handler import LoggingMessageHandler
from hello_messaging.queue_config import QueueConfig


@pytest.fixture
def mock_connection():
    connection = Mock(spec=IRabbitMQConnection)
    channel = Mock()
    connection.connect.return_value = channel
    return connection


@pytest.fixture
def handler():
    return Mock(spec=IMessageHandler)


def make_consumer(connection, handler, ack_mode=AckMode.AUTO):
    return HelloConsumer(
        connection=connection,
        queue_config=QueueConfig(),
        message_handler=handler,
        ack_mode=ack_mode,
    )


def deliver(consumer, channel, body, delivery_tag=1):
    method = Mock()
    method.delivery_tag = delivery_tag
    consumer._on_message(channel, method, Mock(), body)


def test_start_declares_queue_and_registers_auto_ack_consumer(mock_connection, handler):
    channel = mock_connection.connect.return_value
    channel.start_consuming.side_effect = KeyboardInterrupt()
    consumer = make_consumer(mock_connection, handler)

    consumer.start()

    channel.queue_declare.assert_called_once_with(
        queue="hello", durable=False, exclusive=False, auto_delete=False
    )
    channel.basic_qos.assert_not_called()
    channel.basic_consume.assert_called_once_with(
        queue="hello",
        on_message_callback=consumer._on_message,
        auto_ack=True,
    )
    channel.stop_consuming.assert_called_once()
    mock_connection.close.assert_called_once()


def test_start_logs_waiting_banner(mock_connection, handler, caplog):
    channel = mock_connection.connect.return_value
    channel.start_consuming.side_effect = KeyboardInterrupt()

    with caplog.at_level(logging.INFO, logger="hello_messaging.consumer.hello_consumer"):
        make_consumer(mock_connection, handler).start()

    assert " [*] Waiting for messages in hello." in caplog.messages


def test_manual_ack_mode_uses_prefetch_and_explicit_acks(mock_connection, handler):
    channel = mock_connection.connect.return_value
    channel.start_consuming.side_effect = KeyboardInterrupt()
    consumer = make_consumer(mock_connection, handler, AckMode.MANUAL)

    consumer.start()

    channel.basic_qos.assert_called_once_with(prefetch_count=1)
    assert channel.basic_consume.call_args.kwargs["auto_ack"] is False


def test_auto_ack_message_is_handed_to_handler_without_ack(handler):
    consumer = make_consumer(Mock(spec=IRabbitMQConnection), handler)
    channel = Mock()

    deliver(consumer, channel, b"Hello, RabbitMQ!")

    handler.handle.assert_called_once_with(b"Hello, RabbitMQ!")
    channel.basic_ack.assert_not_called()
    channel.basic_nack.assert_not_called()


def test_deliveries_reach_handler_once_each_in_order(handler):
    consumer = make_consumer(Mock(spec=IRabbitMQConnection), handler)
    channel = Mock()

    for tag, body in enumerate([b"one", b"two", b"three"], start=1):
        deliver(consumer, channel, body, delivery_tag=tag)

    assert [c.args[0] for c in handler.handle.call_args_list] == [b"one", b"two", b"three"]


def test_auto_ack_handler_failure_is_logged_and_consumption_continues(handler, caplog):
    handler.handle.side_effect = [RuntimeError("boom"), None]
    consumer = make_consumer(Mock(spec=IRabbitMQConnection), handler)
    channel = Mock()

    deliver(consumer, channel, b"first")
    deliver(consumer, channel, b"second")

    assert handler.handle.call_count == 2
    assert any("boom" in message for message in caplog.messages)
    channel.basic_nack.assert_not_called()


def test_manual_ack_acknowledges_after_handler(handler):
    consumer = make_consumer(Mock(spec=IRabbitMQConnection), handler, AckMode.MANUAL)
    channel = Mock()

    deliver(consumer, channel, b"payload", delivery_tag=7)

    channel.basic_ack.assert_called_once_with(delivery_tag=7)


def test_manual_ack_rejects_failed_message(handler):
    handler.handle.side_effect = ValueError("bad payload")
    consumer = make_consumer(Mock(spec=IRabbitMQConnection), handler, AckMode.MANUAL)
    channel = Mock()

    deliver(consumer, channel, b"payload", delivery_tag=3)

    channel.basic_ack.assert_not_called()
    channel.basic_nack.assert_called_once_with(delivery_tag=3, requeue=False)


def test_connection_loss_propagates_after_release(mock_connection, handler):
    channel = mock_connection.connect.return_value
    channel.start_consuming.side_effect = pika.exceptions.StreamLostError("lost")

    with pytest.raises(pika.exceptions.AMQPConnectionError):
        make_consumer(mock_connection, handler).start()

    mock_connection.close.assert_called_once()


def test_channel_errors_become_broker_operation_errors(mock_connection, handler):
    channel = mock_connection.connect.return_value
    channel.basic_consume.side_effect = pika.exceptions.ChannelClosedByBroker(
        403, "ACCESS_REFUSED"
    )

    with pytest.raises(BrokerOperationError):
        make_consumer(mock_connection, handler).start()

    mock_connection.close.assert_called_once()


def test_declaration_mismatch_stops_before_consuming(mock_connection, handler):
    channel = mock_connection.connect.return_value
    channel.queue_declare.side_effect = pika.exceptions.ChannelClosedByBroker(
        406, "PRECONDITION_FAILED - inequivalent arg 'durable'"
    )

    with pytest.raises(QueueDeclarationMismatchError):
        make_consumer(mock_connection, handler).start()

    channel.basic_consume.assert_not_called()


def test_logging_message_handler_logs_decoded_payload(caplog):
    handler = LoggingMessageHandler()

    with caplog.at_level(logging.INFO, logger="hello_messaging.logging_message_handler"):
        handler.handle(b"Hello, RabbitMQ! Now is 2024-01-01 00:00:00")

    assert caplog.messages == [" [x] Received: Hello, RabbitMQ! Now is 2024-01-01 00:00:00"]
