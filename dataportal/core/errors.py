"""
Error classes raised by the data portal.

Domain failures raised by lifecycle methods are never wrapped in one of
these; callers see the original exception.
"""


class PortalError(Exception):
    """Base class for errors raised by the portal itself."""
    pass


class SecurityViolation(PortalError):
    """
    Raised when the caller's principal does not match the configured
    authentication mode.

    Never retried and never recovered locally.
    """
    pass


class TypeResolutionError(PortalError):
    """Raised when criteria cannot be mapped to a constructible domain type."""
    pass


class MethodNotFound(TypeResolutionError):
    """Raised when the resolved type has no matching lifecycle method."""

    def __init__(self, object_type: type, method_name: str, detail: str = "not found"):
        self.object_type = object_type
        self.method_name = method_name
        super().__init__(
            f"Lifecycle method {method_name} {detail} on {object_type.__qualname__}"
        )


class PortalConfigurationError(PortalError):
    """
    Raised when the portal is misconfigured.

    This indicates a deployment fault rather than a bad request.
    """
    pass
