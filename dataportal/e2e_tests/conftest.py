"""
Pytest configuration for E2E tests.

These tests drive the portal through its public entry points with the
default serialization notifier and a real in-memory audit database.
"""
import pytest

from dataportal.core.audit import AuditTrail
from dataportal.e2e_tests.widgets import STORE
from dataportal.portal import DataPortal
from dataportal.security.principal import BusinessPrincipal


@pytest.fixture(autouse=True)
def clean_store():
    """Give every test an empty data store."""
    STORE.clear()
    yield
    STORE.clear()


@pytest.fixture
def audit_trail() -> AuditTrail:
    return AuditTrail.from_url("sqlite:///:memory:")


@pytest.fixture
def portal(audit_trail: AuditTrail) -> DataPortal:
    """Portal configured for application-managed security with tag AppAuth."""
    return DataPortal(authentication="AppAuth", audit_trail=audit_trail)


@pytest.fixture
def valid_principal() -> BusinessPrincipal:
    return BusinessPrincipal.login("alice", "AppAuth", roles=["editor"])
