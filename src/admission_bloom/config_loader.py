"""
Configuration loader with validation.
"""
from dotenv import load_dotenv
from .config import BloomConfig
from .config_validator import get_optional_env, parse_bool, parse_optional_float
from .exceptions import ConfigurationError


SUPPORTED_PROVIDERS = ("openai", "groq")


def load_config_from_env(env_file: str = None) -> BloomConfig:
    """
    Load configuration from environment variables with validation.
    
    API keys are NOT read here: a missing key only surfaces when the
    first analysis is attempted.
    
    Usage:
        config = load_config_from_env()
        app = AdmissionBloomApp(config)
        app.initialize()
    
    :param env_file: Optional path to a .env file (defaults to ./.env lookup)
    :return: Validated BloomConfig instance
    :raises: ConfigurationError if a value is invalid
    """
    # Local development convenience; real environment variables win.
    load_dotenv(env_file, override=False)
    
    provider = (get_optional_env("LLM_PROVIDER", default="openai") or "openai").lower()
    if provider not in SUPPORTED_PROVIDERS:
        raise ConfigurationError(
            f"Unknown LLM_PROVIDER '{provider}'. "
            f"Supported: {', '.join(SUPPORTED_PROVIDERS)}"
        )
    
    temperature = get_optional_env("LLM_TEMPERATURE")
    try:
        temperature = float(temperature) if temperature else None
    except ValueError:
        raise ConfigurationError(f"LLM_TEMPERATURE must be a number, got: {temperature!r}")
    
    return BloomConfig(
        llm_provider=provider,
        llm_model=get_optional_env("LLM_MODEL"),
        temperature=temperature,
        request_timeout_s=parse_optional_float(
            get_optional_env("REQUEST_TIMEOUT_S", default="60"),
            "REQUEST_TIMEOUT_S",
        ),
        log_level=(get_optional_env("LOG_LEVEL", default="INFO") or "INFO").upper(),
        verbose=parse_bool(get_optional_env("VERBOSE"), default=False),
    )
