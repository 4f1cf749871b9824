"""
Domain objects for the capture -> encode -> request -> render pipeline.

Pure data - no LangChain, no Pillow, no I/O.
"""
import base64
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional


EMPTY_RESULT_MESSAGE = "I couldn't analyze the flower. Please try another photo."
GENERIC_FAILURE_MESSAGE = (
    "Failed to analyze the image. Please check your connection and try again."
)


class ErrorKind(Enum):
    """Error taxonomy shared by ingestion and inference."""
    READ_ERROR = auto()
    NETWORK_ERROR = auto()
    SERVICE_ERROR = auto()
    UNKNOWN = auto()


@dataclass(frozen=True)
class EncodedImage:
    """
    In-memory image held by the active session.

    Use from_bytes() so the payload and the preview come from the same read.
    """
    media_type: str
    data: bytes = field(repr=False)
    preview_handle: str = field(repr=False)
    source_name: Optional[str] = None

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        media_type: str,
        source_name: Optional[str] = None,
    ) -> "EncodedImage":
        """
        Build an EncodedImage whose preview is a data URL of the same bytes.

        :param data: Raw image bytes
        :param media_type: MIME type, e.g. "image/jpeg"
        :param source_name: Optional original file name (for logs)
        :return: EncodedImage instance
        """
        encoded = base64.b64encode(data).decode("ascii")
        return cls(
            media_type=media_type,
            data=data,
            preview_handle=f"data:{media_type};base64,{encoded}",
            source_name=source_name,
        )

    @property
    def base64_data(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    @property
    def data_url(self) -> str:
        """Inline form of the payload sent to the inference service."""
        return f"data:{self.media_type};base64,{self.base64_data}"

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class AnalysisRequest:
    """One multi-part inference request: an inline image plus the fixed prompt."""
    image: EncodedImage
    prompt_text: str


@dataclass(frozen=True)
class AnalysisResult:
    """Base class of the Success | Empty | Failure variant."""

    @property
    def display_text(self) -> str:
        raise NotImplementedError

    @property
    def is_failure(self) -> bool:
        return False


@dataclass(frozen=True)
class Success(AnalysisResult):
    text: str

    @property
    def display_text(self) -> str:
        return self.text


@dataclass(frozen=True)
class Empty(AnalysisResult):
    """Well-formed but empty answer. Treated as a degraded success."""
    fallback_message: str = EMPTY_RESULT_MESSAGE

    @property
    def display_text(self) -> str:
        return self.fallback_message


@dataclass(frozen=True)
class Failure(AnalysisResult):
    reason: ErrorKind

    @property
    def display_text(self) -> str:
        # Detail stays in the logs; users always see the same message.
        return GENERIC_FAILURE_MESSAGE

    @property
    def is_failure(self) -> bool:
        return True
