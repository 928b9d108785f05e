"""
Types shared by the portal entry points.
"""
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from dataportal.core.config import is_host_authentication
from dataportal.security.principal import current_principal


class CallContext(BaseModel):
    """
    Per-call context created by the caller of the portal.

    Attributes:
        principal: Caller's principal; None under host-integrated security
        is_remote: Whether the call crossed a serialization boundary
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    principal: Optional[Any] = None
    is_remote: bool = False

    @classmethod
    def for_caller(cls, authentication: str, is_remote: bool = False) -> "CallContext":
        """
        Build a context for the current caller.

        Under host-integrated security the host supplies identity on the
        other side, so no principal is sent. Otherwise the ambient principal
        travels with the call.
        """
        if is_host_authentication(authentication):
            return cls(principal=None, is_remote=is_remote)
        return cls(principal=current_principal(), is_remote=is_remote)


class PortalOperation(str, Enum):
    """Lifecycle operations the portal dispatches."""
    CREATE = "create"
    FETCH = "fetch"
    UPDATE = "update"
    DELETE = "delete"


class ErrorKind(str, Enum):
    """Kind of failure carried by a PortalResult."""
    SECURITY_VIOLATION = "security_violation"
    TYPE_RESOLUTION = "type_resolution"
    METHOD_NOT_FOUND = "method_not_found"
    DOMAIN_FAILURE = "domain_failure"


class PortalResult(BaseModel):
    """
    Outcome of a portal operation: the domain object or a tagged error.

    For DOMAIN_FAILURE the error is the exact exception instance raised by
    the lifecycle method.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Optional[Any] = None
    error: Optional[BaseException] = None
    kind: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value
