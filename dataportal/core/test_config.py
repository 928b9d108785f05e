"""
Unit tests for portal configuration.
"""
import pytest

from dataportal.core.config import (
    get_audit_database_url,
    get_authentication,
    get_sql_echo,
    is_host_authentication,
)


def test_authentication_defaults_to_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that an unset authentication mode reads as empty."""
    monkeypatch.delenv("PORTAL_AUTHENTICATION", raising=False)

    assert get_authentication() == ""


def test_authentication_is_read_per_call(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that changes to the environment are picked up without caching."""
    monkeypatch.setenv("PORTAL_AUTHENTICATION", "AppAuth")
    assert get_authentication() == "AppAuth"

    monkeypatch.setenv("PORTAL_AUTHENTICATION", " host ")
    assert get_authentication() == "host"


def test_is_host_authentication() -> None:
    """Test host-integrated mode detection."""
    assert is_host_authentication("host")
    assert is_host_authentication("HOST")
    assert not is_host_authentication("AppAuth")
    assert not is_host_authentication("")


def test_audit_database_url(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that auditing is disabled unless a URL is configured."""
    monkeypatch.delenv("PORTAL_AUDIT_DATABASE_URL", raising=False)
    assert get_audit_database_url() is None

    monkeypatch.setenv("PORTAL_AUDIT_DATABASE_URL", "sqlite:///:memory:")
    assert get_audit_database_url() == "sqlite:///:memory:"


def test_sql_echo(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test SQL echo flag parsing."""
    monkeypatch.setenv("SQL_ECHO", "TRUE")
    assert get_sql_echo() is True

    monkeypatch.delenv("SQL_ECHO", raising=False)
    assert get_sql_echo() is False
