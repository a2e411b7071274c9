"""In-memory broker doubles shared by the flow tests."""

from collections import deque

import pika
import pytest

from hello_messaging.contracts import IRabbitMQConnection


class FakeBroker:
    """Holds queues and their declaration flags the way a broker would."""

    def __init__(self):
        self.queues = {}
        self.declarations = {}

    def declare(self, queue, **flags):
        existing = self.declarations.get(queue)
        if existing is not None and existing != flags:
            raise pika.exceptions.ChannelClosedByBroker(
                406, f"PRECONDITION_FAILED - inequivalent arg for queue '{queue}'"
            )
        self.declarations[queue] = flags
        self.queues.setdefault(queue, deque())


class FakeChannel:
    def __init__(self, broker):
        self.broker = broker
        self.is_closed = False
        self.consumers = []
        self.acked = []

    def queue_declare(self, queue, durable, exclusive, auto_delete):
        self.broker.declare(queue, durable=durable, exclusive=exclusive, auto_delete=auto_delete)

    def confirm_delivery(self):
        pass

    def basic_qos(self, prefetch_count):
        pass

    def basic_publish(self, exchange, routing_key, body, properties=None, mandatory=False):
        self.broker.queues[routing_key].append(body)

    def basic_consume(self, queue, on_message_callback, auto_ack=False):
        self.consumers.append((queue, on_message_callback))

    def basic_ack(self, delivery_tag):
        self.acked.append(delivery_tag)

    def start_consuming(self):
        tag = 0
        for queue, callback in self.consumers:
            messages = self.broker.queues[queue]
            while messages:
                tag += 1
                method = pika.spec.Basic.Deliver(delivery_tag=tag, routing_key=queue)
                callback(self, method, pika.BasicProperties(), messages.popleft())
        # Nothing left to deliver: behave like an operator pressing Ctrl+C.
        raise KeyboardInterrupt()

    def stop_consuming(self):
        pass

    def close(self):
        self.is_closed = True


class FakeConnection(IRabbitMQConnection):
    def __init__(self, broker):
        self.broker = broker
        self.channel = None
        self.closed = False

    @property
    def is_open(self):
        return self.channel is not None and not self.closed

    def connect(self):
        if self.channel is None or self.channel.is_closed:
            self.channel = FakeChannel(self.broker)
        return self.channel

    def close(self):
        if self.channel is not None:
            self.channel.close()
        self.closed = True


@pytest.fixture
def broker():
    return FakeBroker()


@pytest.fixture
def connection_factory(broker):
    created = []

    def make_connection(rabbitmq_url):
        connection = FakeConnection(broker)
        created.append(connection)
        return connection

    make_connection.created = created
    return make_connection
