"""
Application-layer exceptions.

These exceptions are raised by use cases, repositories and the auth gate and
are translated into HTTP responses by api.exception_handlers. Each carries the
status code of the taxonomy entry it represents.
"""


class FitTrackError(Exception):
    """Base class for all application errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FitTrackError):
    """Missing or malformed required fields."""

    status_code = 400


class AuthenticationError(FitTrackError):
    """Missing, invalid or expired credentials."""

    status_code = 401


class NotFoundError(FitTrackError):
    """Resource does not exist or is not owned by the caller."""

    status_code = 404


class ConflictError(FitTrackError):
    """A unique field is already taken."""

    status_code = 409


class UpstreamError(FitTrackError):
    """The workout-generation webhook failed, timed out or returned non-2xx."""

    status_code = 500


class ConfigurationError(FitTrackError):
    """A feature was used without the configuration it needs."""

    status_code = 500
