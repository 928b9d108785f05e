"""
Handler for the update operation.
"""
from typing import Any

from dataportal.infrastructure.serialization import BoundaryNotifier
from dataportal.operations._invoker import call_method
from dataportal.security.gate import authorize
from dataportal.types import CallContext


def update_handler(
    context: CallContext,
    obj: Any,
    *,
    authentication: str,
    notifier: BoundaryNotifier,
) -> Any:
    """
    Save an existing domain object supplied by the caller.

    No type resolution takes place; the object itself is the target.

    Args:
        context: Caller's principal and remote flag
        obj: Domain object to update
        authentication: Configured authentication mode
        notifier: Serialization boundary notifier

    Returns:
        The same object, after its on_update method ran

    Raises:
        SecurityViolation: If the principal is rejected
        MethodNotFound: If the object has no on_update method
    """
    authorize(context.principal, authentication)

    if context.is_remote:
        notifier.on_deserialized(obj)

    call_method(obj, "on_update")

    if context.is_remote:
        notifier.on_serializing(obj)
    return obj
