"""
Authorization gate run at the start of every portal operation.

Validates the caller's principal against the configured authentication
mode and installs it as the ambient principal of the call.
"""
import logging
from typing import Any, Optional

from dataportal.core.config import is_host_authentication
from dataportal.core.errors import PortalConfigurationError, SecurityViolation
from dataportal.security.principal import (
    PrincipalPolicy,
    current_principal,
    set_current_principal,
    set_principal_policy,
)

logger = logging.getLogger(__name__)


def authorize(principal: Optional[Any], authentication: str) -> Optional[Any]:
    """
    Validate and install the caller's principal.

    Under host-integrated security no principal may be passed; the ambient
    principal is then sourced from the host. Under application-managed
    security the principal must carry an identity whose authentication type
    equals the configured tag. A valid principal replaces the ambient one
    unless it already is the ambient one.

    Args:
        principal: Principal supplied by the caller, or None
        authentication: Configured authentication mode ("host" or a tag)

    Returns:
        The effective principal, or None under host-integrated security

    Raises:
        SecurityViolation: If the principal does not fit the mode
        PortalConfigurationError: If no authentication mode is configured
    """
    if is_host_authentication(authentication):
        if principal is not None:
            logger.warning("Rejected principal passed under host-integrated security")
            raise SecurityViolation(
                "No principal object should be passed to the data portal "
                "when using host-integrated security"
            )
        set_principal_policy(PrincipalPolicy.HOST)
        return None

    if not authentication:
        raise PortalConfigurationError(
            "No authentication mode configured; set PORTAL_AUTHENTICATION"
        )

    if principal is None:
        logger.warning("Rejected call without principal")
        raise SecurityViolation("Principal must be of type BusinessPrincipal, not None")

    identity = getattr(principal, "identity", None)
    if identity is None:
        logger.warning(f"Rejected principal without identity: {principal!r}")
        raise SecurityViolation(f"Principal must carry an identity, not {principal!r}")

    if getattr(identity, "authentication_type", None) != authentication:
        logger.warning(
            f"Rejected principal with authentication type "
            f"{getattr(identity, 'authentication_type', None)!r}"
        )
        raise SecurityViolation(
            f"Principal must be of type BusinessPrincipal, not {principal!r}"
        )

    # A reused worker may still carry the previous caller's principal
    if principal is not current_principal():
        logger.debug(f"Installing principal for {getattr(identity, 'name', '?')}")
        set_current_principal(principal)

    return principal
