"""
Sample domain objects for end-to-end portal tests.
"""
from typing import Optional

from dataportal.domain.criteria import CriteriaBase
from dataportal.security.principal import current_principal

# Stand-in for a data store the domain objects write to
STORE: dict[str, dict] = {}


class WidgetCriteria(CriteriaBase):
    name: str


class Widget:
    """Domain object supporting every lifecycle operation."""

    def __init__(self):
        self.id: Optional[str] = None
        self.name: Optional[str] = None
        self.color = "grey"
        self.owner: Optional[str] = None
        self.parts: list["Part"] = []
        self.notices: list[str] = []

    def on_create(self, criteria: WidgetCriteria) -> None:
        self.name = criteria.name
        self.owner = current_principal().identity.name

    def on_fetch(self, criteria: WidgetCriteria) -> None:
        row = STORE[criteria.name]
        self.id = row["id"]
        self.name = criteria.name
        self.color = row["color"]
        self.parts = [Part(label) for label in row["parts"]]

    def _on_update(self) -> None:
        STORE[self.name] = {
            "id": self.id or self.name,
            "color": self.color,
            "parts": [part.label for part in self.parts],
        }

    def on_serializing(self) -> None:
        self.notices.append("serializing")

    def on_deserialized(self) -> None:
        self.notices.append("deserialized")


class Part:
    def __init__(self, label: str):
        self.label = label
        self.notices: list[str] = []

    def on_serializing(self) -> None:
        self.notices.append("serializing")


class Gadget:
    """Domain object that can be fetched but not deleted."""

    class Criteria:
        def __init__(self, name: str):
            self.name = name

    def __init__(self):
        self.name: Optional[str] = None
        STORE.setdefault("_constructed", []).append("Gadget")

    def on_fetch(self, criteria: "Gadget.Criteria") -> None:
        self.name = criteria.name


class OutOfStock(Exception):
    """Domain failure raised by Sprocket.on_fetch."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} is out of stock")


class Sprocket:
    def on_fetch(self, criteria: WidgetCriteria) -> None:
        raise OutOfStock(criteria.name)
