"""
Handler for the create operation.
"""
from typing import Any

from dataportal.infrastructure.serialization import BoundaryNotifier
from dataportal.operations._invoker import call_method
from dataportal.operations._resolver import create_business_object
from dataportal.security.gate import authorize
from dataportal.types import CallContext


def create_handler(
    context: CallContext,
    criteria: Any,
    *,
    authentication: str,
    notifier: BoundaryNotifier,
) -> Any:
    """
    Create a new domain object with default values.

    Args:
        context: Caller's principal and remote flag
        criteria: Criteria naming the domain type
        authentication: Configured authentication mode
        notifier: Serialization boundary notifier

    Returns:
        The new domain object, populated by its on_create method

    Raises:
        SecurityViolation: If the principal is rejected
        TypeResolutionError: If the type cannot be resolved or constructed
        MethodNotFound: If the type has no on_create method
    """
    authorize(context.principal, authentication)

    obj = create_business_object(criteria)
    call_method(obj, "on_create", criteria)

    if context.is_remote:
        notifier.on_serializing(obj)
    return obj
