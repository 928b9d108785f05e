"""
Handler for the delete operation.
"""
from typing import Any

from dataportal.operations._invoker import call_method
from dataportal.operations._resolver import create_business_object
from dataportal.security.gate import authorize
from dataportal.types import CallContext


def delete_handler(context: CallContext, criteria: Any, *, authentication: str) -> None:
    """
    Delete the domain object named by the criteria.

    A fresh instance is constructed and asked to delete the data the
    criteria identifies. Nothing is returned, so no serialization notice
    is sent.

    Raises:
        SecurityViolation: If the principal is rejected
        TypeResolutionError: If the type cannot be resolved or constructed
        MethodNotFound: If the type has no on_delete method
    """
    authorize(context.principal, authentication)

    obj = create_business_object(criteria)
    call_method(obj, "on_delete", criteria)
