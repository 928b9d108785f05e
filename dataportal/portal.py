"""
Server-side data portal.

Entry point for create/fetch/update/delete requests arriving from a
transport. Each call is authorized, dispatched to the domain object's
lifecycle method and audited; each runs in a copied context so the
principal it installs is confined to that call.

Example usage:
    from dataportal.portal import DataPortal
    from dataportal.types import CallContext

    portal = DataPortal(authentication="AppAuth")
    widget = portal.fetch(
        WidgetCriteria(object_type=Widget, name="foo"),
        CallContext(principal=principal, is_remote=True),
    )
"""
import contextvars
import logging
from typing import Any, Callable, Optional

from dataportal.core.audit import AuditTrail, audited
from dataportal.core.config import get_authentication
from dataportal.core.errors import (
    MethodNotFound,
    PortalConfigurationError,
    SecurityViolation,
    TypeResolutionError,
)
from dataportal.infrastructure.serialization import (
    BoundaryNotifier,
    SerializationNotification,
)
from dataportal.operations.create.handler import create_handler
from dataportal.operations.delete.handler import delete_handler
from dataportal.operations.fetch.handler import fetch_handler
from dataportal.operations.update.handler import update_handler
from dataportal.types import CallContext, ErrorKind, PortalOperation, PortalResult

logger = logging.getLogger(__name__)


class DataPortal:
    """
    Dispatches lifecycle operations to domain objects.

    Holds no per-call state; one instance may serve concurrent callers.

    Args:
        authentication: Authentication mode; when None it is read from
            PORTAL_AUTHENTICATION on every call
        notifier: Serialization boundary notifier for remote calls
        audit_trail: Audit store; None disables auditing
    """

    def __init__(
        self,
        authentication: Optional[str] = None,
        notifier: Optional[BoundaryNotifier] = None,
        audit_trail: Optional[AuditTrail] = None,
    ):
        self._authentication = authentication
        self.notifier = notifier if notifier is not None else SerializationNotification()
        self.audit_trail = audit_trail

    def get_authentication(self) -> str:
        if self._authentication is not None:
            return self._authentication
        return get_authentication()

    @audited(action="create")
    def create(self, criteria: Any, context: CallContext) -> Any:
        """Create a new domain object of the type named by the criteria."""
        obj = self._run(
            create_handler,
            context,
            criteria,
            authentication=self.get_authentication(),
            notifier=self.notifier,
        )
        logger.info(f"Created {type(obj).__name__} (remote={context.is_remote})")
        return obj

    @audited(action="fetch")
    def fetch(self, criteria: Any, context: CallContext) -> Any:
        """Fetch the domain object identified by the criteria."""
        obj = self._run(
            fetch_handler,
            context,
            criteria,
            authentication=self.get_authentication(),
            notifier=self.notifier,
        )
        logger.info(f"Fetched {type(obj).__name__} (remote={context.is_remote})")
        return obj

    @audited(action="update")
    def update(self, obj: Any, context: CallContext) -> Any:
        """Save a domain object supplied by the caller and return it."""
        obj = self._run(
            update_handler,
            context,
            obj,
            authentication=self.get_authentication(),
            notifier=self.notifier,
        )
        logger.info(f"Updated {type(obj).__name__} (remote={context.is_remote})")
        return obj

    @audited(action="delete")
    def delete(self, criteria: Any, context: CallContext) -> None:
        """Delete the domain object identified by the criteria."""
        self._run(delete_handler, context, criteria, authentication=self.get_authentication())
        logger.info(f"Deleted via {type(criteria).__name__} (remote={context.is_remote})")

    def execute(
        self, operation: PortalOperation, target: Any, context: CallContext
    ) -> PortalResult:
        """
        Run an operation and report its outcome as a PortalResult.

        Configuration faults are not request outcomes and still raise.

        Args:
            operation: Operation to run
            target: Criteria, or the domain object for UPDATE
            context: Caller's principal and remote flag

        Returns:
            The value on success, otherwise the error tagged with its kind
        """
        entry_point: Callable[[Any, CallContext], Any] = getattr(self, operation.value)
        try:
            return PortalResult(value=entry_point(target, context))
        except PortalConfigurationError:
            raise
        except SecurityViolation as e:
            return PortalResult(error=e, kind=ErrorKind.SECURITY_VIOLATION)
        except MethodNotFound as e:
            return PortalResult(error=e, kind=ErrorKind.METHOD_NOT_FOUND)
        except TypeResolutionError as e:
            return PortalResult(error=e, kind=ErrorKind.TYPE_RESOLUTION)
        except Exception as e:
            return PortalResult(error=e, kind=ErrorKind.DOMAIN_FAILURE)

    @staticmethod
    def _run(handler: Callable[..., Any], context: CallContext, target: Any, **kwargs: Any) -> Any:
        # The principal installed by the handler must not outlive the call
        return contextvars.copy_context().run(handler, context, target, **kwargs)
