import logging
from typing import Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_groq import ChatGroq
from langchain_openai import ChatOpenAI

from .config_validator import get_required_env

logger = logging.getLogger(__name__)

# Models known to accept image parts; others may reject the request.
KNOWN_VISION_MODELS = {
    "openai": ["gpt-4o-mini", "gpt-4o", "gpt-4.1-mini", "gpt-4.1"],
    "groq": [
        "meta-llama/llama-4-scout-17b-16e-instruct",
        "meta-llama/llama-4-maverick-17b-128e-instruct",
    ],
}


def get_llm_instance(
    provider: str,
    model: str,
    temperature: Optional[float] = None,
) -> BaseChatModel:
    """
    Factory to return a ready-to-use vision chat model for the provider.

    SDK retries are disabled: a retry is a user decision, never automatic.

    :param provider: 'openai' or 'groq'
    :param model: Model name
    :param temperature: Optional sampling temperature
    :return: LangChain chat model
    :raises ConfigurationError: if the provider's API key is missing
    :raises ValueError: for an unknown provider
    """
    provider = provider.lower()
    
    if provider not in KNOWN_VISION_MODELS:
        raise ValueError(f"Unknown LLM provider: {provider}")
    
    if model not in KNOWN_VISION_MODELS[provider]:
        # Warn but don't fail - providers add new models
        logger.warning(
            f"Model '{model}' not in known {provider} vision models. "
            f"Known models: {KNOWN_VISION_MODELS[provider]}"
        )
    
    extra = {}
    if temperature is not None:
        extra["temperature"] = temperature
    
    if provider == "groq":
        api_key = get_required_env(
            "GROQ_API_KEY",
            description="Groq API key for vision inference (get from https://console.groq.com/keys)"
        )
        return ChatGroq(
            model=model,
            api_key=api_key,
            max_retries=0,
            streaming=False,
            **extra,
        )
    
    api_key = get_required_env(
        "OPENAI_API_KEY",
        description="OpenAI API key for vision inference (get from https://platform.openai.com/api-keys)"
    )
    return ChatOpenAI(
        model=model,
        api_key=api_key,
        max_retries=0,
        streaming=False,
        **extra,
    )
