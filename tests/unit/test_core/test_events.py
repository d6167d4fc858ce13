"""Tests for the event bus."""

from dataclasses import dataclass

from buildwatch.core.events import EventBus


@dataclass(frozen=True)
class Ping:
    value: int


@dataclass(frozen=True)
class Pong:
    value: int


class TestEventBus:
    """Test EventBus publish/subscribe."""

    def test_handlers_called_in_subscription_order(self):
        """Test handlers receive events in the order they subscribed."""
        bus = EventBus()
        calls: list[str] = []
        bus.subscribe(Ping, lambda e: calls.append(f"first:{e.value}"))
        bus.subscribe(Ping, lambda e: calls.append(f"second:{e.value}"))

        bus.publish(Ping(1))

        assert calls == ["first:1", "second:1"]

    def test_dispatch_by_exact_type(self):
        """Test handlers only see their own event type."""
        bus = EventBus()
        pings: list[Ping] = []
        bus.subscribe(Ping, pings.append)

        bus.publish(Pong(1))
        bus.publish(Ping(2))

        assert pings == [Ping(2)]

    def test_unsubscribe(self):
        """Test an unsubscribed handler no longer receives events."""
        bus = EventBus()
        pings: list[Ping] = []
        bus.subscribe(Ping, pings.append)
        bus.unsubscribe(Ping, pings.append)

        bus.publish(Ping(1))

        assert pings == []
        assert bus.has_subscribers(Ping) is False

    def test_unsubscribe_unknown_handler_is_noop(self):
        bus = EventBus()
        bus.unsubscribe(Ping, print)

    def test_failing_handler_does_not_block_others(self):
        """Test a raising handler is logged and the rest still run."""
        bus = EventBus()
        pings: list[Ping] = []

        def broken(event):
            raise ValueError("nope")

        bus.subscribe(Ping, broken)
        bus.subscribe(Ping, pings.append)

        bus.publish(Ping(3))

        assert pings == [Ping(3)]
