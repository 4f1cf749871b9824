"""
Analysis: request building, inference and failure classification.
"""

from .callbacks import InferenceLatencyCallback
from .error_classifier import classify_error
from .inference_client import InferenceClient, LLMInferenceClient, extract_response_text
from .prompts import FLOWER_READING_PROMPT
from .request_builder import AnalysisRequestBuilder, to_messages

__all__ = [
    "AnalysisRequestBuilder",
    "FLOWER_READING_PROMPT",
    "InferenceClient",
    "InferenceLatencyCallback",
    "LLMInferenceClient",
    "classify_error",
    "extract_response_text",
    "to_messages",
]
