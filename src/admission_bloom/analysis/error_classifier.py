"""
Maps exceptions raised during inference onto ErrorKind.

Both supported providers ship OpenAI-style SDK exception hierarchies.
"""
import asyncio

import groq
import openai

from ..exceptions import ConfigurationError, MalformedResponseError
from ..schemas import ErrorKind


# APITimeoutError subclasses APIConnectionError in both SDKs.
NETWORK_ERRORS = (
    openai.APIConnectionError,
    groq.APIConnectionError,
    asyncio.TimeoutError,
    TimeoutError,
    ConnectionError,
)

# Authentication, permission, rate limit and other HTTP status rejections,
# plus responses we could not make sense of.
SERVICE_ERRORS = (
    openai.APIStatusError,
    groq.APIStatusError,
    openai.APIResponseValidationError,
    groq.APIResponseValidationError,
    ConfigurationError,
    MalformedResponseError,
)


def classify_error(error: BaseException) -> ErrorKind:
    """
    Classify an inference failure.
    
    :param error: Exception raised while building the model or calling it
    :return: NETWORK_ERROR, SERVICE_ERROR or UNKNOWN
    """
    if isinstance(error, NETWORK_ERRORS):
        return ErrorKind.NETWORK_ERROR
    if isinstance(error, SERVICE_ERRORS):
        return ErrorKind.SERVICE_ERROR
    return ErrorKind.UNKNOWN
