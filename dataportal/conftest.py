"""
Shared pytest fixtures.
"""
import pytest

from dataportal.security.principal import (
    PrincipalPolicy,
    reset_current_principal,
    reset_principal_policy,
    set_current_principal,
    set_principal_policy,
)


@pytest.fixture(autouse=True)
def clean_ambient_principal():
    """Start every test with no ambient principal and restore afterwards."""
    principal_token = set_current_principal(None)
    policy_token = set_principal_policy(PrincipalPolicy.UNAUTHENTICATED)
    yield
    reset_principal_policy(policy_token)
    reset_current_principal(principal_token)
