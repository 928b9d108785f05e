"""
Criteria and lifecycle contracts for domain objects.
"""
from typing import Any, Protocol, Type

from pydantic import BaseModel, ConfigDict


class CriteriaBase(BaseModel):
    """
    Base class for criteria that name their target domain type.

    Subclasses add the fields the domain object needs to create, fetch or
    delete itself:

        class WidgetCriteria(CriteriaBase):
            name: str

        WidgetCriteria(object_type=Widget, name="foo")
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    object_type: Type[Any]


class PortalObject(Protocol):
    """
    Lifecycle contract of a domain object.

    Domain types need only implement the operations they support, and may
    name them with a leading underscore to keep them out of their public
    surface (e.g. `_on_fetch`). A missing method surfaces as MethodNotFound
    when that operation is requested. The contract is for static type
    checking only; the portal finds methods by name, so isinstance checks
    against it are not supported.
    """

    def on_create(self, criteria: Any) -> None:
        ...

    def on_fetch(self, criteria: Any) -> None:
        ...

    def on_update(self) -> None:
        ...

    def on_delete(self, criteria: Any) -> None:
        ...
