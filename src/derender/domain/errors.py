"""Error kinds surfaced by the API."""


class DerenderError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DerenderError):
    """Required input is missing."""

    status_code = 400


class ConfigurationError(DerenderError):
    """A required credential is not configured."""


class AuthorizationError(DerenderError):
    """Shared secret did not match."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class UpstreamError(DerenderError):
    """The image model failed or returned an unexpected shape."""


class PersistenceError(DerenderError):
    """Object storage or document store operation failed."""
