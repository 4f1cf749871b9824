"""
Session state management.

Tracks the single analysis session: phase, held image, latest result.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..schemas import AnalysisResult, EncodedImage


class SessionPhase(Enum):
    """Phases of one analysis session."""
    NO_IMAGE = "no_image"
    IMAGE_READY = "image_ready"
    ANALYZING = "analyzing"
    ANALYZED = "analyzed"
    FAILED = "failed"


@dataclass
class SessionState:
    """
    Session state object.
    
    Mutated only through the methods below; attempt_id only ever grows so
    work started under an older id can be recognised as stale.
    """
    phase: SessionPhase = SessionPhase.NO_IMAGE
    image: Optional[EncodedImage] = None
    result: Optional[AnalysisResult] = None
    attempt_id: int = 0

    def adopt_image(self, image: EncodedImage) -> None:
        """Hold a new image; any previous result is dropped."""
        self.attempt_id += 1
        self.image = image
        self.result = None
        self.phase = SessionPhase.IMAGE_READY

    def begin_attempt(self) -> int:
        """
        Enter ANALYZING for the held image.
        
        :return: Attempt id the eventual result must match
        """
        self.attempt_id += 1
        self.result = None
        self.phase = SessionPhase.ANALYZING
        return self.attempt_id

    def complete(self, result: AnalysisResult) -> None:
        """Store the attempt's result and move to ANALYZED or FAILED."""
        self.result = result
        self.phase = SessionPhase.FAILED if result.is_failure else SessionPhase.ANALYZED

    def clear(self) -> None:
        """Drop image and result; in-flight work becomes stale."""
        self.attempt_id += 1
        self.image = None
        self.result = None
        self.phase = SessionPhase.NO_IMAGE

    def is_current(self, attempt_id: int) -> bool:
        return attempt_id == self.attempt_id

    def has_image(self) -> bool:
        return self.image is not None

    def is_consistent(self) -> bool:
        """Check the phase/image/result invariants."""
        if self.phase is SessionPhase.NO_IMAGE:
            return self.image is None and self.result is None
        if self.phase is SessionPhase.IMAGE_READY:
            return self.image is not None and self.result is None
        if self.phase is SessionPhase.ANALYZING:
            return self.image is not None and self.result is None
        return self.image is not None and self.result is not None
