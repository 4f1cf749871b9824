"""
Admission Bloom: read a photo of a handmade flower and turn it into
encouraging, personalized college application guidance.
"""

from .app import AdmissionBloomApp
from .config import BloomConfig
from .config_loader import load_config_from_env
from .exceptions import (
    AdmissionBloomError,
    AppNotInitializedError,
    ConfigurationError,
    ImageReadError,
    InvalidTransitionError,
    MalformedResponseError,
    SessionInvariantError,
)
from .schemas import (
    EMPTY_RESULT_MESSAGE,
    GENERIC_FAILURE_MESSAGE,
    AnalysisRequest,
    AnalysisResult,
    Empty,
    EncodedImage,
    ErrorKind,
    Failure,
    Success,
)
from .session import AnalysisController, SessionPhase, SessionState

__all__ = [
    "AdmissionBloomApp",
    "AdmissionBloomError",
    "AnalysisController",
    "AnalysisRequest",
    "AnalysisResult",
    "AppNotInitializedError",
    "BloomConfig",
    "ConfigurationError",
    "EMPTY_RESULT_MESSAGE",
    "Empty",
    "EncodedImage",
    "ErrorKind",
    "Failure",
    "GENERIC_FAILURE_MESSAGE",
    "ImageReadError",
    "InvalidTransitionError",
    "MalformedResponseError",
    "SessionInvariantError",
    "SessionPhase",
    "SessionState",
    "Success",
    "load_config_from_env",
]
