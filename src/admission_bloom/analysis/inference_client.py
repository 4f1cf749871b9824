"""
Inference client: one request in, one classified AnalysisResult out.
"""
import asyncio
import logging
from typing import Any, Callable, Optional, Protocol

from langchain_core.language_models.chat_models import BaseChatModel

from ..config import BloomConfig
from ..exceptions import MalformedResponseError
from ..llm_factory import get_llm_instance
from ..schemas import AnalysisRequest, AnalysisResult, Empty, Failure, Success
from .callbacks import InferenceLatencyCallback
from .error_classifier import classify_error
from .request_builder import to_messages

logger = logging.getLogger(__name__)


class InferenceClient(Protocol):
    """Protocol for anything that can turn a request into an AnalysisResult."""
    async def infer(self, request: AnalysisRequest) -> AnalysisResult:
        ...


def extract_response_text(response: Any) -> str:
    """
    Pull the text out of a chat model response.

    :param response: Message returned by ainvoke
    :return: Response text (may be empty)
    :raises MalformedResponseError: if the response carries no textual content
    """
    content = getattr(response, "content", None)

    if isinstance(content, str):
        return content

    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(str(part.get("text", "")))
        return "".join(parts)

    raise MalformedResponseError(
        f"Unexpected response content type: {type(content).__name__}"
    )


class LLMInferenceClient:
    """
    InferenceClient backed by a LangChain chat model.

    The model is built on first use, so a missing API key becomes a
    SERVICE_ERROR on the first analysis instead of a startup failure.
    Exactly one model call per infer(); never retries on its own.
    """

    def __init__(
        self,
        config: Optional[BloomConfig] = None,
        llm: Optional[BaseChatModel] = None,
        llm_factory: Callable[..., BaseChatModel] = get_llm_instance,
    ):
        """
        :param config: BloomConfig (defaults used if not provided)
        :param llm: Optional pre-built chat model (for dependency injection/testing)
        :param llm_factory: Factory used to build the model lazily
        """
        self._config = config or BloomConfig()
        self._llm = llm
        self._llm_factory = llm_factory
        self.last_latency_ms: Optional[int] = None

    def _get_llm(self) -> BaseChatModel:
        if self._llm is None:
            self._llm = self._llm_factory(
                provider=self._config.llm_provider,
                model=self._config.resolved_model(),
                temperature=self._config.temperature,
            )
            logger.info(
                f"Created {self._config.llm_provider} chat model "
                f"'{self._config.resolved_model()}'"
            )
        return self._llm

    async def infer(self, request: AnalysisRequest) -> AnalysisResult:
        """
        Send the request and classify the outcome.

        :param request: AnalysisRequest built for the held image
        :return: Success, Empty or Failure; never raises for service problems
        """
        latency = InferenceLatencyCallback()
        timeout = self._config.request_timeout_s

        try:
            llm = self._get_llm()
            call = llm.ainvoke(to_messages(request), config={"callbacks": [latency]})
            if timeout:
                response = await asyncio.wait_for(call, timeout=timeout)
            else:
                response = await call
            text = extract_response_text(response)
        except Exception as e:
            reason = classify_error(e)
            logger.error(
                f"Inference failed ({reason.name}): {type(e).__name__}: {e}",
                exc_info=True,
            )
            return Failure(reason=reason)
        finally:
            self.last_latency_ms = latency.get_total_latency_ms()

        logger.info(f"Inference completed in {self.last_latency_ms}ms, {len(text)} chars")

        if not text.strip():
            logger.warning("Inference returned an empty response, using fallback message")
            return Empty()

        return Success(text=text)
