from typing import Optional

from .schemas import ErrorKind


class AdmissionBloomError(Exception):
    """Base exception for the admission bloom library."""


class ConfigurationError(AdmissionBloomError):
    """Raised when configuration or credentials are missing or invalid."""


class ImageReadError(AdmissionBloomError):
    """Raised when a user-supplied image cannot be read or decoded."""

    kind = ErrorKind.READ_ERROR

    def __init__(self, message: str, source_name: Optional[str] = None):
        super().__init__(message)
        self.source_name = source_name


class MalformedResponseError(AdmissionBloomError):
    """Raised when the inference service returns something that is not text."""


class InvalidTransitionError(AdmissionBloomError):
    """Raised when the UI requests a transition the session cannot take."""


class SessionInvariantError(AdmissionBloomError):
    """Raised when session state violates its own invariants."""


class AppNotInitializedError(AdmissionBloomError):
    """Raised when the app facade is used before initialization."""
