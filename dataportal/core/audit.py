"""
Audit trail for portal operations.

Provides the AuditTrail store and the @audited decorator, which writes one
audit entry per portal operation whether it succeeds or fails.
"""
import functools
import json
import logging
from typing import Any, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from dataportal.core.config import get_audit_database_url, is_host_authentication
from dataportal.core.errors import SecurityViolation, TypeResolutionError
from dataportal.infrastructure.database.models import AuditLog
from dataportal.infrastructure.database.session import (
    create_audit_engine,
    make_session_factory,
    session_scope,
)
from dataportal.operations._resolver import resolve_object_type
from dataportal.security.principal import HostPrincipal, principal_name

logger = logging.getLogger(__name__)


class AuditTrail:
    """
    Persists audit entries, each in its own transaction.

    Entries for failed operations are committed too; they never share a
    transaction with domain work.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @classmethod
    def from_url(cls, database_url: str) -> "AuditTrail":
        return cls(make_session_factory(create_audit_engine(database_url)))

    @classmethod
    def from_environment(cls) -> Optional["AuditTrail"]:
        """Build a trail from PORTAL_AUDIT_DATABASE_URL, or None when unset."""
        database_url = get_audit_database_url()
        if database_url is None:
            return None
        return cls.from_url(database_url)

    @property
    def session_factory(self) -> sessionmaker:
        return self._session_factory

    def record(
        self,
        user: str,
        action: str,
        entity: str,
        entity_id: str,
        payload: dict[str, Any],
    ) -> None:
        """
        Write one audit entry.

        A database failure is logged and does not affect the audited operation.
        """
        try:
            with session_scope(self._session_factory) as session:
                session.add(
                    AuditLog(
                        user=user,
                        action=action,
                        entity=entity,
                        entity_id=entity_id,
                        payload_json=json.dumps(payload, default=str),
                    )
                )
        except SQLAlchemyError:
            logger.exception(f"Failed to write audit entry for {action} on {entity}")


def audited(action: str) -> Callable:
    """
    Decorator to add audit logging to a portal entry point.

    The decorated method must take (self, target, context) where self has
    an `audit_trail` attribute (None disables auditing) and a
    `get_authentication()` method.

    Args:
        action: The operation being performed (e.g., "create", "fetch")

    Usage:
        @audited(action="fetch")
        def fetch(self, criteria, context):
            ...
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(portal: Any, target: Any, context: Any, *args: Any, **kwargs: Any) -> Any:
            trail: Optional[AuditTrail] = getattr(portal, "audit_trail", None)
            try:
                result = func(portal, target, context, *args, **kwargs)
            except Exception as e:
                if trail is not None:
                    payload = {
                        "error": str(e),
                        "error_type": type(e).__name__,
                        "is_remote": context.is_remote,
                    }
                    # A rejected principal's name is unverified
                    if isinstance(e, SecurityViolation):
                        user = "unauthenticated"
                        payload["claimed_user"] = principal_name(context.principal)
                    else:
                        user = _audit_user(portal, context)
                    trail.record(
                        user=user,
                        action=f"{action}_failed",
                        entity=_entity_name(action, target, None),
                        entity_id="error",
                        payload=payload,
                    )
                raise

            if trail is not None:
                entity_id = getattr(result, "id", None)
                trail.record(
                    user=_audit_user(portal, context),
                    action=action,
                    entity=_entity_name(action, target, result),
                    entity_id=str(entity_id) if entity_id is not None else "unknown",
                    payload={"is_remote": context.is_remote},
                )
            return result

        return wrapper

    return decorator


def _audit_user(portal: Any, context: Any) -> str:
    if context.principal is not None:
        return principal_name(context.principal)
    if is_host_authentication(portal.get_authentication()):
        return principal_name(HostPrincipal.from_environment())
    return "anonymous"


def _entity_name(action: str, target: Any, result: Any) -> str:
    if result is not None:
        return type(result).__name__
    # Update targets are domain objects, not criteria
    if action == "update":
        return type(target).__name__
    try:
        return resolve_object_type(target).__name__
    except TypeResolutionError:
        return type(target).__name__
