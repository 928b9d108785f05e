"""
Unit tests for fetch handler.
"""
from unittest.mock import MagicMock

import pytest

from dataportal.core.errors import TypeResolutionError
from dataportal.operations.fetch.handler import fetch_handler
from dataportal.types import CallContext


class Product:
    """Domain object using nested criteria."""

    class Criteria:
        def __init__(self, sku: str):
            self.sku = sku

    def __init__(self):
        self.sku = None
        self.events = []

    def _on_fetch(self, criteria):
        self.sku = criteria.sku
        self.events.append("fetch")


def test_fetch_with_nested_criteria_under_host_security() -> None:
    """Test fetch through the legacy criteria convention with host security."""
    notifier = MagicMock()

    result = fetch_handler(
        CallContext(),
        Product.Criteria("SKU-1"),
        authentication="host",
        notifier=notifier,
    )

    assert isinstance(result, Product)
    assert result.sku == "SKU-1"
    notifier.on_serializing.assert_not_called()


def test_fetch_remote_notifies_after_fetch() -> None:
    """Test that the serializing notice follows the fetch."""
    notifier = MagicMock()
    notifier.on_serializing.side_effect = lambda obj: obj.events.append("serializing")

    result = fetch_handler(
        CallContext(is_remote=True),
        Product.Criteria("SKU-1"),
        authentication="host",
        notifier=notifier,
    )

    assert result.events == ["fetch", "serializing"]
    notifier.on_deserialized.assert_not_called()


def test_fetch_unresolvable_criteria() -> None:
    """Test that criteria without a domain type is rejected."""
    with pytest.raises(TypeResolutionError):
        fetch_handler(
            CallContext(),
            {"sku": "SKU-1"},
            authentication="host",
            notifier=MagicMock(),
        )
