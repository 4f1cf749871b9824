"""
Public application facade for Admission Bloom.

This is the single stable entry point for the library.
All internal structure can change freely, but this API remains stable.
"""
import logging
from typing import Any, Dict, Optional, Sequence

from .analysis import AnalysisRequestBuilder, InferenceClient, LLMInferenceClient
from .config import BloomConfig
from .exceptions import AppNotInitializedError
from .ingestion import ImageIngestor
from .rendering import ResultRenderer
from .schemas import AnalysisResult, EncodedImage
from .session import AnalysisController, SessionPhase

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(config: BloomConfig) -> None:
    """
    Configure root logging for the library's loggers.

    No-op for handlers if the host application already configured logging.
    """
    level = logging.DEBUG if config.verbose else getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )
    logging.getLogger("admission_bloom").setLevel(level)


class AdmissionBloomApp:
    """
    Public application facade.

    All dependency wiring is encapsulated here.

    Usage:
        config = load_config_from_env()
        app = AdmissionBloomApp(config)
        app.initialize()
        await app.upload("flower.jpg")
        await app.analyze()
        view = app.view()
    """

    def __init__(
        self,
        config: Optional[BloomConfig] = None,
        inference_client: Optional[InferenceClient] = None,
    ):
        """
        Initialize the application facade.

        :param config: BloomConfig instance (defaults if not provided)
        :param inference_client: Optional client override (for testing or custom services)
        """
        self._config = config or BloomConfig()
        self._inference_client = inference_client
        self._controller: Optional[AnalysisController] = None

    def initialize(self) -> None:
        """
        Wire all dependencies. Safe to call more than once.

        Does not contact the inference service or read API keys.
        """
        if self._controller:
            return

        configure_logging(self._config)

        client = self._inference_client or LLMInferenceClient(config=self._config)
        self._controller = AnalysisController(
            ingestor=ImageIngestor(),
            inference_client=client,
            request_builder=AnalysisRequestBuilder(),
            renderer=ResultRenderer(),
        )
        logging.getLogger(__name__).info(
            f"Admission Bloom initialized (provider={self._config.llm_provider}, "
            f"model={self._config.resolved_model()})"
        )

    @property
    def controller(self) -> AnalysisController:
        if not self._controller:
            raise AppNotInitializedError("App not initialized. Call initialize() first.")
        return self._controller

    @property
    def phase(self) -> SessionPhase:
        return self.controller.phase

    async def upload(self, files: Any) -> Optional[EncodedImage]:
        """
        Upload a photo. Given a selection of several files, only the first is used.

        :param files: One file (path, bytes, stream) or a list/tuple of them
        :return: The held EncodedImage, or None if superseded
        :raises ImageReadError: if the file cannot be read
        """
        if isinstance(files, (list, tuple)):
            files = ImageIngestor.select_first(files)
        return await self.controller.upload_image(files)

    async def analyze(self) -> Optional[AnalysisResult]:
        return await self.controller.start_analysis()

    async def retry(self) -> Optional[AnalysisResult]:
        return await self.controller.retry()

    def reset(self) -> None:
        self.controller.reset()

    def view(self) -> Dict[str, Any]:
        """Current session as plain data for a UI layer."""
        return self.controller.get_view_data()
