"""Error taxonomy shared by the planner services and the HTTP layer."""

from __future__ import annotations


class RoutePlannerError(Exception):
    """Base exception; ``note`` is the message shown to callers."""

    status_code: int = 500

    def __init__(self, message: str | None = None):
        self.note = message or "Server error"
        super().__init__(self.note)


class InvalidInputError(RoutePlannerError):
    """Raised when the request is missing stops or an origin."""

    status_code = 400


class MissingCredentialError(RoutePlannerError):
    """Raised when a required API key is not configured."""

    status_code = 500

    def __init__(self, message: str | None = None, setting: str | None = None):
        self.setting = setting
        super().__init__(message or f"Missing {setting}")


class GeocodeNotFoundError(RoutePlannerError):
    """Raised when a stop or origin query yields no viable coordinate."""

    status_code = 502

    def __init__(self, message: str | None = None, query: str | None = None):
        self.query = query
        super().__init__(message or f"No geocode result for: {query}")


class NetworkTimeoutError(RoutePlannerError):
    """Raised when an outbound call exceeds its deadline."""

    status_code = 500

    def __init__(self, operation: str | None = None):
        self.operation = operation
        super().__init__("Request timed out. Try again.")


class UpstreamFailureError(RoutePlannerError):
    """Raised when an outbound call returns a non-success status or unusable body."""

    status_code = 502

    def __init__(
        self,
        message: str | None = None,
        operation: str | None = None,
        upstream_status: int | None = None,
    ):
        self.operation = operation
        self.upstream_status = upstream_status
        super().__init__(message or f"{operation} failed ({upstream_status})")


class SolverFailureError(RoutePlannerError):
    """Raised when the routing solver produces no usable route."""

    status_code = 502
