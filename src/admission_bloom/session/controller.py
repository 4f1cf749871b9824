"""
Analysis Controller - owns the session lifecycle.

NO_IMAGE -> IMAGE_READY -> ANALYZING -> ANALYZED | FAILED
FAILED -> ANALYZING (retry with the held image), any -> NO_IMAGE (reset)

The controller is the only writer of SessionState. Every await is followed
by an attempt id check, so a reset while a call is pending can never be
undone by that call's late result.
"""
import logging
from typing import Any, Dict, Optional

from ..analysis.error_classifier import classify_error
from ..analysis.inference_client import InferenceClient
from ..analysis.request_builder import AnalysisRequestBuilder
from ..exceptions import ImageReadError, InvalidTransitionError, SessionInvariantError
from ..ingestion.image_ingestor import ImageIngestor
from ..rendering.renderer import RenderedDocument, ResultRenderer
from ..schemas import AnalysisResult, EncodedImage, Failure
from .session_state import SessionPhase, SessionState

logger = logging.getLogger(__name__)


PHASE_MESSAGES = {
    SessionPhase.NO_IMAGE: "Upload a photo of your DIY flower to uncover personalized guidance.",
    SessionPhase.IMAGE_READY: (
        "Ready to bloom? Your flower's colors, shapes and materials will be read "
        "for tailored college application advice."
    ),
    SessionPhase.ANALYZING: "Interpreting your creation...",
}


class AnalysisController:
    """
    State machine for one analysis session.

    Collaborators are injected so the machine can be driven in isolation.
    """

    def __init__(
        self,
        ingestor: ImageIngestor,
        inference_client: InferenceClient,
        request_builder: Optional[AnalysisRequestBuilder] = None,
        renderer: Optional[ResultRenderer] = None,
        state: Optional[SessionState] = None,
    ):
        """
        :param ingestor: Reads user files into EncodedImage
        :param inference_client: Turns a request into an AnalysisResult
        :param request_builder: Builds requests (defaults to the fixed reading prompt)
        :param renderer: Renders results for display
        :param state: Existing SessionState (a fresh one by default)
        """
        self._ingestor = ingestor
        self._client = inference_client
        self._builder = request_builder or AnalysisRequestBuilder()
        self._renderer = renderer or ResultRenderer()
        self._state = state or SessionState()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def phase(self) -> SessionPhase:
        return self._state.phase

    async def upload_image(self, raw_file: Any) -> Optional[EncodedImage]:
        """
        Ingest a file and hold it as the session image.

        Replaces any previous image and result. If the session is reset
        (or otherwise moves on) while the file is being read, the image is
        discarded.

        :param raw_file: Path, bytes, or binary file-like object
        :return: The adopted EncodedImage, or None if it arrived stale
        :raises ImageReadError: if the file cannot be read; state is unchanged
        :raises InvalidTransitionError: if an analysis is in flight
        """
        if self._state.phase is SessionPhase.ANALYZING:
            raise InvalidTransitionError("Cannot upload a new image while an analysis is running")

        started_at = self._state.attempt_id
        try:
            image = await self._ingestor.ingest(raw_file)
        except ImageReadError as e:
            logger.warning(f"Image upload failed, staying in {self._state.phase.value}: {e}")
            raise

        if not self._state.is_current(started_at):
            logger.info("Session changed while the image was being read; discarding it")
            return None

        self._state.adopt_image(image)
        logger.debug(f"Image adopted ({image.media_type}), phase={self._state.phase.value}")
        return image

    async def start_analysis(self) -> Optional[AnalysisResult]:
        """
        Analyze the held image.

        Valid from IMAGE_READY or FAILED. Any other phase (including a second
        call while ANALYZING) is a no-op returning None.

        :return: The stored result, or None if ignored or superseded by a reset
        :raises SessionInvariantError: if the phase claims an image that is not held
        """
        phase = self._state.phase
        if phase is SessionPhase.ANALYZING:
            logger.warning("start_analysis called while an analysis is in flight; ignoring")
            return None
        if phase not in (SessionPhase.IMAGE_READY, SessionPhase.FAILED):
            logger.warning(f"start_analysis called in phase {phase.value}; ignoring")
            return None
        if not self._state.has_image():
            raise SessionInvariantError(f"Phase {phase.value} reached without a held image")

        request = self._builder.build(self._state.image)
        attempt_id = self._state.begin_attempt()
        logger.info(f"Analysis attempt {attempt_id} started")

        try:
            result = await self._client.infer(request)
        except Exception as e:
            # Clients are expected to classify their own failures.
            logger.error(f"Inference client raised in attempt {attempt_id}: {e}", exc_info=True)
            result = Failure(reason=classify_error(e))

        if not self._state.is_current(attempt_id):
            logger.info(f"Discarding stale outcome of attempt {attempt_id}")
            return None

        self._state.complete(result)
        logger.info(
            f"Analysis attempt {attempt_id} finished: "
            f"{type(result).__name__}, phase={self._state.phase.value}"
        )
        return result

    async def retry(self) -> Optional[AnalysisResult]:
        """Re-run the analysis on the held image after a failure."""
        if self._state.phase is not SessionPhase.FAILED:
            logger.warning(f"retry called in phase {self._state.phase.value}; ignoring")
            return None
        return await self.start_analysis()

    def reset(self) -> None:
        """Discard image and result from any phase, including ANALYZING."""
        if self._state.phase is SessionPhase.ANALYZING:
            logger.info(f"Reset during attempt {self._state.attempt_id}; its outcome will be ignored")
        self._state.clear()

    @property
    def display_text(self) -> Optional[str]:
        """What the user should read for the latest result, if any."""
        if self._state.result is None:
            return None
        return self._state.result.display_text

    def render_result(self) -> Optional[RenderedDocument]:
        """Render the latest non-failure result."""
        result = self._state.result
        if result is None or result.is_failure:
            return None
        return self._renderer.render(result.display_text)

    def get_view_data(self) -> Dict[str, Any]:
        """
        Get the session as plain data for a UI layer.

        :return: Dict with phase, preview, allowed actions, message and rendered HTML
        """
        phase = self._state.phase
        rendered = self.render_result()

        if phase is SessionPhase.FAILED:
            message = self.display_text
        else:
            message = PHASE_MESSAGES.get(phase)

        return {
            "phase": phase.value,
            "preview": self._state.image.preview_handle if self._state.image else None,
            "can_upload": phase is not SessionPhase.ANALYZING,
            "can_analyze": phase is SessionPhase.IMAGE_READY,
            "can_retry": phase is SessionPhase.FAILED,
            "can_reset": True,
            "message": message,
            "html": rendered.html if rendered else None,
        }
