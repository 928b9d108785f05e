"""
Identity and principal models, plus the ambient principal of a call.

The ambient principal lives in a ContextVar, so it is scoped per thread and
per asyncio task. The portal additionally runs each call in a copied
context, so a principal installed for one call is gone once it returns.

Example usage:
    from dataportal.security.principal import BusinessPrincipal, principal_scope

    principal = BusinessPrincipal.login("alice", "AppAuth", roles=["admin"])
    with principal_scope(principal):
        assert current_principal() is principal
"""
import getpass
import logging
from contextlib import contextmanager
from contextvars import ContextVar, Token
from enum import Enum
from typing import Any, Generator, Optional

from pydantic import BaseModel, ConfigDict, Field

from dataportal.core.config import HOST_AUTHENTICATION

logger = logging.getLogger(__name__)


class Identity(BaseModel):
    """An authenticated caller identity."""
    model_config = ConfigDict(frozen=True)

    name: str
    authentication_type: str
    is_authenticated: bool = True


class Principal(BaseModel):
    """A caller identity together with its roles."""
    model_config = ConfigDict(frozen=True)

    identity: Identity
    roles: tuple[str, ...] = Field(default_factory=tuple)

    def is_in_role(self, role: str) -> bool:
        return role in self.roles


class BusinessIdentity(Identity):
    """Identity issued and managed by the application."""
    pass


class BusinessPrincipal(Principal):
    """Principal for application-managed authentication."""

    @classmethod
    def login(
        cls,
        name: str,
        authentication_type: str,
        roles: Optional[list[str]] = None,
    ) -> "BusinessPrincipal":
        """
        Build a principal for an already-authenticated user.

        Args:
            name: User name
            authentication_type: Authentication tag the deployment recognizes
            roles: Roles granted to the user

        Returns:
            The principal, ready to be sent in a CallContext
        """
        identity = BusinessIdentity(name=name, authentication_type=authentication_type)
        return cls(identity=identity, roles=tuple(roles or ()))


class HostPrincipal(Principal):
    """Principal sourced from the host environment (the OS login)."""

    @classmethod
    def from_environment(cls) -> "HostPrincipal":
        try:
            name = getpass.getuser()
        except (KeyError, OSError):
            logger.debug("No OS login name available, using unauthenticated host identity")
            return cls(
                identity=Identity(
                    name="", authentication_type=HOST_AUTHENTICATION, is_authenticated=False
                )
            )
        return cls(identity=Identity(name=name, authentication_type=HOST_AUTHENTICATION))


class PrincipalPolicy(str, Enum):
    """Where the ambient principal comes from when none is installed."""
    UNAUTHENTICATED = "unauthenticated"
    HOST = "host"


_current_principal: ContextVar[Optional[Any]] = ContextVar("current_principal", default=None)
_principal_policy: ContextVar[PrincipalPolicy] = ContextVar(
    "principal_policy", default=PrincipalPolicy.UNAUTHENTICATED
)


def current_principal() -> Optional[Any]:
    """
    Get the ambient principal of the executing call.

    Returns:
        The installed principal; otherwise a HostPrincipal when the
        principal policy is HOST; otherwise None
    """
    principal = _current_principal.get()
    if principal is None and _principal_policy.get() is PrincipalPolicy.HOST:
        return HostPrincipal.from_environment()
    return principal


def set_current_principal(principal: Optional[Any]) -> Token:
    """Install a principal as ambient for the current context."""
    return _current_principal.set(principal)


def reset_current_principal(token: Token) -> None:
    _current_principal.reset(token)


def get_principal_policy() -> PrincipalPolicy:
    return _principal_policy.get()


def set_principal_policy(policy: PrincipalPolicy) -> Token:
    """Select where the ambient principal comes from for the current context."""
    return _principal_policy.set(policy)


def reset_principal_policy(token: Token) -> None:
    _principal_policy.reset(token)


@contextmanager
def principal_scope(principal: Optional[Any]) -> Generator[Optional[Any], None, None]:
    """
    Install a principal for the duration of a block.

    Usage:
        with principal_scope(principal):
            portal.fetch(criteria, CallContext.for_caller("AppAuth"))
    """
    token = set_current_principal(principal)
    try:
        yield principal
    finally:
        reset_current_principal(token)


def principal_name(principal: Optional[Any]) -> str:
    """Get a display name for a principal, tolerating foreign principal shapes."""
    identity = getattr(principal, "identity", None)
    name = getattr(identity, "name", None)
    return name or "anonymous"
