"""
Unit tests for serialization boundary notification.
"""
import functools

from dataportal.infrastructure.serialization import (
    BoundaryNotifier,
    SerializationNotification,
)

events = []


class LineItem:
    def __init__(self, sku: str):
        self.sku = sku

    def on_serializing(self):
        events.append(("serializing", self.sku))

    def on_deserialized(self):
        events.append(("deserialized", self.sku))


class Invoice:
    def __init__(self):
        self.number = "INV-1"
        self.lines = [LineItem("a"), LineItem("b")]
        self.by_sku = {"a": self.lines[0]}
        self.parent = None

    def on_serializing(self):
        events.append(("serializing", self.number))


class Plain:
    def __init__(self, child):
        self.child = child


def setup_function() -> None:
    events.clear()


def test_default_notifier_satisfies_protocol() -> None:
    """Test that the default notifier is a BoundaryNotifier."""
    assert isinstance(SerializationNotification(), BoundaryNotifier)


def test_notifies_root_then_children_once() -> None:
    """Test that each object in the graph is notified exactly once, parent first."""
    invoice = Invoice()

    SerializationNotification().on_serializing(invoice)

    assert events == [
        ("serializing", "INV-1"),
        ("serializing", "a"),
        ("serializing", "b"),
    ]


def test_cycles_terminate() -> None:
    """Test that back references do not cause repeated notices."""
    invoice = Invoice()
    invoice.parent = invoice
    invoice.lines[1].owner = invoice

    SerializationNotification().on_serializing(invoice)

    assert len(events) == 3


def test_objects_without_hooks_are_traversed() -> None:
    """Test that children of hookless objects are still notified."""
    SerializationNotification().on_deserialized(Plain(Plain(LineItem("z"))))

    assert events == [("deserialized", "z")]


def test_only_requested_hook_runs() -> None:
    """Test that objects without the requested hook are skipped."""
    SerializationNotification().on_deserialized(Invoice())

    assert events == [("deserialized", "a"), ("deserialized", "b")]


def test_atomic_values_are_ignored() -> None:
    """Test notifying plain values is a no-op."""
    notifier = SerializationNotification()

    notifier.on_serializing("text")
    notifier.on_serializing(None)
    notifier.on_serializing([1, 2.5, b"x"])

    assert events == []


class CachedHook:
    def __init__(self, name: str):
        self.name = name

    @functools.lru_cache
    def on_serializing(self):
        events.append(("serializing", self.name))


def test_decorated_hooks_are_called() -> None:
    """Test that hooks wrapped by method decorators still run."""
    SerializationNotification().on_serializing(Plain(CachedHook("cached")))

    assert events == [("serializing", "cached")]
