"""
Unit tests for update handler.
"""
from unittest.mock import MagicMock

import pytest

from dataportal.core.errors import MethodNotFound, SecurityViolation
from dataportal.operations.update.handler import update_handler
from dataportal.security.principal import BusinessPrincipal
from dataportal.types import CallContext


class Order:
    """Domain object recording the order of events."""

    def __init__(self):
        self.events = []

    def on_update(self):
        self.events.append("update")


class Snapshot:
    def on_fetch(self, criteria):
        pass


@pytest.fixture
def principal() -> BusinessPrincipal:
    return BusinessPrincipal.login("alice", "AppAuth")


@pytest.fixture
def recording_notifier() -> MagicMock:
    notifier = MagicMock()
    notifier.on_deserialized.side_effect = lambda obj: obj.events.append("deserialized")
    notifier.on_serializing.side_effect = lambda obj: obj.events.append("serializing")
    return notifier


def test_update_returns_same_object(principal: BusinessPrincipal, recording_notifier: MagicMock) -> None:
    """Test that update works on the supplied instance without notices locally."""
    order = Order()

    result = update_handler(
        CallContext(principal=principal),
        order,
        authentication="AppAuth",
        notifier=recording_notifier,
    )

    assert result is order
    assert order.events == ["update"]


def test_update_remote_notice_order(principal: BusinessPrincipal, recording_notifier: MagicMock) -> None:
    """Test deserialized, update, serializing ordering for remote calls."""
    order = Order()

    update_handler(
        CallContext(principal=principal, is_remote=True),
        order,
        authentication="AppAuth",
        notifier=recording_notifier,
    )

    assert order.events == ["deserialized", "update", "serializing"]
    recording_notifier.on_deserialized.assert_called_once_with(order)
    recording_notifier.on_serializing.assert_called_once_with(order)


def test_update_wrong_identity_kind_touches_nothing(recording_notifier: MagicMock) -> None:
    """Test that a rejected principal stops the call before any notice or update."""
    order = Order()
    other = BusinessPrincipal.login("mallory", "OtherAuth")

    with pytest.raises(SecurityViolation):
        update_handler(
            CallContext(principal=other, is_remote=True),
            order,
            authentication="AppAuth",
            notifier=recording_notifier,
        )

    assert order.events == []
    recording_notifier.on_deserialized.assert_not_called()


def test_update_without_on_update(principal: BusinessPrincipal, recording_notifier: MagicMock) -> None:
    """Test that a missing on_update is reported after the deserialized notice."""
    snapshot = Snapshot()
    snapshot.events = []

    with pytest.raises(MethodNotFound, match="on_update"):
        update_handler(
            CallContext(principal=principal, is_remote=True),
            snapshot,
            authentication="AppAuth",
            notifier=recording_notifier,
        )

    assert snapshot.events == ["deserialized"]
    recording_notifier.on_serializing.assert_not_called()
