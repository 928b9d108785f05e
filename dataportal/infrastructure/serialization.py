"""
Serialization boundary notification.

When a call crosses a process boundary the portal tells the domain object
it has just been deserialized (update) or is about to be serialized (all
operations that return an object). SerializationNotification delivers the
notice to every object in the graph that defines a hook:

    class Order:
        def on_deserialized(self) -> None:
            self._rebuild_indexes()
"""
import inspect
from typing import Any, Iterable, Protocol, runtime_checkable

from dataportal.operations._invoker import is_instance_method

_ATOMIC_TYPES = (str, bytes, bytearray, int, float, complex, bool, type(None))


@runtime_checkable
class BoundaryNotifier(Protocol):
    """Receives serialization boundary notices for a domain object."""

    def on_serializing(self, obj: Any) -> None:
        ...

    def on_deserialized(self, obj: Any) -> None:
        ...


class SerializationNotification:
    """
    Default boundary notifier.

    Walks the object graph rooted at the domain object (instance attributes,
    list/tuple/set items and dict values), visiting each object once, and
    calls its `on_serializing()` or `on_deserialized()` hook where defined.
    Parents are notified before their children.
    """

    def on_serializing(self, obj: Any) -> None:
        self._notify(obj, "on_serializing")

    def on_deserialized(self, obj: Any) -> None:
        self._notify(obj, "on_deserialized")

    def _notify(self, root: Any, hook: str) -> None:
        visited: set[int] = set()
        pending = [root]
        while pending:
            current = pending.pop()
            if id(current) in visited or _is_leaf(current):
                continue
            visited.add(id(current))

            try:
                callback = inspect.getattr_static(type(current), hook)
            except AttributeError:
                callback = None
            if is_instance_method(callback):
                callback.__get__(current, type(current))()

            # Reversed so children are visited in declaration order
            pending.extend(reversed(list(_children(current))))


def _is_leaf(value: Any) -> bool:
    return (
        isinstance(value, _ATOMIC_TYPES)
        or isinstance(value, type)
        or inspect.isroutine(value)
        or inspect.ismodule(value)
    )


def _children(value: Any) -> Iterable[Any]:
    if isinstance(value, dict):
        return value.values()
    if isinstance(value, (list, tuple, set, frozenset)):
        return value
    attributes = getattr(value, "__dict__", None)
    if isinstance(attributes, dict):
        return attributes.values()
    return ()
