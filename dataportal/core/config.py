"""
Environment-backed configuration for the data portal.

Values are read on every call rather than cached, so a deployment can
switch authentication mode without restarting workers.
"""
import os
from typing import Optional

# Authentication value selecting host-integrated security
HOST_AUTHENTICATION = "host"


def get_authentication() -> str:
    """
    Get the configured authentication mode.

    Returns:
        "host" for host-integrated security, otherwise the tag that
        application-managed identities must carry. Empty when unset.
    """
    return os.getenv("PORTAL_AUTHENTICATION", "").strip()


def is_host_authentication(authentication: str) -> bool:
    """Check whether an authentication value selects host-integrated security."""
    return authentication.lower() == HOST_AUTHENTICATION


def get_audit_database_url() -> Optional[str]:
    """Get the audit trail database URL, or None when auditing is disabled."""
    return os.getenv("PORTAL_AUDIT_DATABASE_URL") or None


def get_sql_echo() -> bool:
    """Check whether the audit engine should echo SQL."""
    return os.getenv("SQL_ECHO", "false").lower() == "true"
