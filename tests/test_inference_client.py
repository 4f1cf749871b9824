"""
Tests for the inference client and failure classification.
Every service problem must come back as a classified result, never an exception.
"""
import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import groq
import httpx
import openai
import pytest
from langchain_core.language_models.fake_chat_models import GenericFakeChatModel
from langchain_core.messages import AIMessage

from admission_bloom.analysis import (
    AnalysisRequestBuilder,
    LLMInferenceClient,
    classify_error,
    extract_response_text,
)
from admission_bloom.config import BloomConfig
from admission_bloom.exceptions import ConfigurationError, MalformedResponseError
from admission_bloom.schemas import (
    EMPTY_RESULT_MESSAGE,
    GENERIC_FAILURE_MESSAGE,
    Empty,
    EncodedImage,
    ErrorKind,
    Failure,
    Success,
)

API_URL = "https://api.openai.com/v1/chat/completions"


def _request():
    image = EncodedImage.from_bytes(b"\xff\xd8\xff fake", "image/jpeg")
    return AnalysisRequestBuilder().build(image)


def _status_error(error_cls, status_code, message="rejected"):
    request = httpx.Request("POST", API_URL)
    response = httpx.Response(status_code, request=request)
    return error_cls(message, response=response, body=None)


def _llm_returning(response=None, side_effect=None):
    llm = Mock()
    llm.ainvoke = AsyncMock(return_value=response, side_effect=side_effect)
    return llm


def _infer(client):
    return asyncio.run(client.infer(_request()))


@pytest.fixture
def config():
    return BloomConfig(llm_provider="openai", request_timeout_s=5.0)


class TestSuccessfulInference:
    """Tests for well-formed responses."""

    def test_text_response_is_success(self, config):
        llm = _llm_returning(AIMessage(content="# Your Flower\n\nBright petals."))
        client = LLMInferenceClient(config=config, llm=llm)

        result = _infer(client)

        assert result == Success(text="# Your Flower\n\nBright petals.")
        assert result.display_text.startswith("# Your Flower")
        llm.ainvoke.assert_awaited_once()

    def test_sends_multipart_message(self, config):
        llm = _llm_returning(AIMessage(content="ok"))
        client = LLMInferenceClient(config=config, llm=llm)
        request = _request()

        asyncio.run(client.infer(request))

        messages = llm.ainvoke.call_args.args[0]
        assert len(messages) == 1
        assert messages[0].content[0]["image_url"]["url"] == request.image.data_url
        assert messages[0].content[1]["text"] == request.prompt_text

    def test_list_content_is_joined(self, config):
        llm = _llm_returning(AIMessage(content=[
            {"type": "text", "text": "# Reading\n"},
            {"type": "text", "text": "Petals of hope."},
        ]))
        result = _infer(LLMInferenceClient(config=config, llm=llm))

        assert result == Success(text="# Reading\nPetals of hope.")

    def test_real_chat_model_interface_and_latency(self, config):
        """Drive a LangChain chat model end to end so callbacks fire."""
        llm = GenericFakeChatModel(messages=iter([AIMessage(content="# Bloom\n\nKeep going.")]))
        client = LLMInferenceClient(config=config, llm=llm)

        result = _infer(client)

        assert isinstance(result, Success)
        assert "Bloom" in result.text
        assert client.last_latency_ms is not None
        assert client.last_latency_ms >= 0


class TestEmptyInference:
    """Empty answers are degraded successes with a fallback message."""

    @pytest.mark.parametrize("content", ["", "   ", "\n\n"])
    def test_blank_text_is_empty(self, config, content):
        result = _infer(LLMInferenceClient(config=config, llm=_llm_returning(AIMessage(content=content))))

        assert isinstance(result, Empty)
        assert result.display_text == EMPTY_RESULT_MESSAGE
        assert not result.is_failure

    def test_list_without_text_parts_is_empty(self, config):
        llm = _llm_returning(AIMessage(content=[{"type": "image_url", "image_url": {"url": "x"}}]))
        assert isinstance(_infer(LLMInferenceClient(config=config, llm=llm)), Empty)


class TestFailedInference:
    """Failures are classified, logged and hidden behind a generic message."""

    def test_malformed_response_is_service_error(self, config):
        llm = _llm_returning(SimpleNamespace(content=None))
        result = _infer(LLMInferenceClient(config=config, llm=llm))

        assert result == Failure(reason=ErrorKind.SERVICE_ERROR)

    def test_connection_error_is_network_error(self, config):
        llm = _llm_returning(side_effect=ConnectionError("connection reset"))
        result = _infer(LLMInferenceClient(config=config, llm=llm))

        assert result == Failure(reason=ErrorKind.NETWORK_ERROR)
        assert result.display_text == GENERIC_FAILURE_MESSAGE
        assert "connection reset" not in result.display_text

    def test_authentication_error_is_service_error(self, config):
        llm = _llm_returning(side_effect=_status_error(openai.AuthenticationError, 401, "Invalid API key"))
        result = _infer(LLMInferenceClient(config=config, llm=llm))

        assert result.reason is ErrorKind.SERVICE_ERROR
        assert "Invalid API key" not in result.display_text

    def test_unexpected_error_is_unknown(self, config):
        llm = _llm_returning(side_effect=RuntimeError("something odd"))
        result = _infer(LLMInferenceClient(config=config, llm=llm))

        assert result == Failure(reason=ErrorKind.UNKNOWN)

    def test_no_internal_retry(self, config):
        """Exactly one call per infer(), even when it fails."""
        llm = _llm_returning(side_effect=ConnectionError("down"))
        client = LLMInferenceClient(config=config, llm=llm)

        _infer(client)

        assert llm.ainvoke.await_count == 1

    def test_deadline_maps_to_network_error(self):
        async def slow_call(*args, **kwargs):
            await asyncio.sleep(1)
            return AIMessage(content="too late")

        llm = Mock()
        llm.ainvoke = slow_call
        client = LLMInferenceClient(config=BloomConfig(request_timeout_s=0.01), llm=llm)

        assert _infer(client) == Failure(reason=ErrorKind.NETWORK_ERROR)

    def test_missing_api_key_fails_at_first_inference(self, monkeypatch):
        """A missing key is not a startup error; it surfaces as SERVICE_ERROR."""
        monkeypatch.setenv("OPENAI_API_KEY", "unset")
        monkeypatch.delenv("OPENAI_API_KEY")

        client = LLMInferenceClient(config=BloomConfig(llm_provider="openai"))

        assert _infer(client) == Failure(reason=ErrorKind.SERVICE_ERROR)

    def test_placeholder_api_key_is_service_error(self, monkeypatch):
        monkeypatch.setenv("GROQ_API_KEY", "your_groq_api_key")
        client = LLMInferenceClient(config=BloomConfig(llm_provider="groq"))

        assert _infer(client) == Failure(reason=ErrorKind.SERVICE_ERROR)


class TestLazyModelCreation:
    """The chat model is built on first use, once."""

    def test_factory_called_once_with_config(self):
        llm = _llm_returning(AIMessage(content="ok"))
        factory = Mock(return_value=llm)
        client = LLMInferenceClient(
            config=BloomConfig(llm_provider="groq", temperature=0.4),
            llm_factory=factory,
        )

        factory.assert_not_called()
        _infer(client)
        _infer(client)

        factory.assert_called_once_with(
            provider="groq",
            model="meta-llama/llama-4-scout-17b-16e-instruct",
            temperature=0.4,
        )


class TestClassifyError:
    """Tests for classify_error."""

    def test_openai_connection_errors(self):
        request = httpx.Request("POST", API_URL)
        assert classify_error(openai.APIConnectionError(request=request)) is ErrorKind.NETWORK_ERROR
        assert classify_error(openai.APITimeoutError(request=request)) is ErrorKind.NETWORK_ERROR

    def test_groq_connection_error(self):
        request = httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions")
        assert classify_error(groq.APIConnectionError(request=request)) is ErrorKind.NETWORK_ERROR

    def test_timeouts(self):
        assert classify_error(asyncio.TimeoutError()) is ErrorKind.NETWORK_ERROR
        assert classify_error(TimeoutError()) is ErrorKind.NETWORK_ERROR

    @pytest.mark.parametrize("error_cls,status_code", [
        (openai.AuthenticationError, 401),
        (openai.PermissionDeniedError, 403),
        (openai.RateLimitError, 429),
        (openai.BadRequestError, 400),
        (openai.InternalServerError, 500),
        (groq.RateLimitError, 429),
        (groq.AuthenticationError, 401),
    ])
    def test_status_errors_are_service_errors(self, error_cls, status_code):
        assert classify_error(_status_error(error_cls, status_code)) is ErrorKind.SERVICE_ERROR

    def test_configuration_and_malformed_are_service_errors(self):
        assert classify_error(ConfigurationError("no key")) is ErrorKind.SERVICE_ERROR
        assert classify_error(MalformedResponseError("bad")) is ErrorKind.SERVICE_ERROR

    def test_anything_else_is_unknown(self):
        assert classify_error(KeyError("x")) is ErrorKind.UNKNOWN


class TestExtractResponseText:
    """Tests for extract_response_text."""

    def test_string_content(self):
        assert extract_response_text(AIMessage(content="hello")) == "hello"

    def test_mixed_parts(self):
        message = SimpleNamespace(content=["a", {"type": "text", "text": "b"}, {"type": "other"}])
        assert extract_response_text(message) == "ab"

    def test_missing_content_raises(self):
        with pytest.raises(MalformedResponseError):
            extract_response_text(object())
