"""
Configuration validation utilities.

Credentials are read lazily, so these helpers run at first use, not at import.
"""
import os
import re
import warnings
from typing import Optional
from .exceptions import ConfigurationError

# Unfilled values as shipped in .env.example.
PLACEHOLDER_PATTERN = re.compile(
    r"^(?:your[_-]\w*|<[^>]*>|changeme|x{3,}|\*{3,}|(?:sk|gsk)[-_]0{4,}\w*)$",
    re.IGNORECASE,
)


def get_required_env(key: str, description: str = None) -> str:
    """
    Read a credential that must be present before the model can be built.
    
    :param key: Environment variable name
    :param description: What the value is for, shown in the error
    :return: Environment variable value
    :raises: ConfigurationError if unset or still the .env.example value
    """
    value = os.getenv(key, "").strip()
    
    if not value:
        raise ConfigurationError(
            f"{key} is required but not set ({description or 'no description'}). "
            f"Export it or add {key}=... to .env; see .env.example."
        )
    
    if _is_placeholder(value):
        raise ConfigurationError(
            f"{key} still holds a placeholder value ({_mask_secret(value)}). "
            f"Replace it with a real credential."
        )
    
    return value


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Read a setting, falling back to ``default`` when unset or a placeholder."""
    value = os.getenv(key, default)
    if value and _is_placeholder(value):
        warnings.warn(f"{key} is a placeholder value, using {default!r}", UserWarning)
        return default
    return value


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    """Parse "true"/"1"/"yes" style flags."""
    if value is None:
        return default
    return value.strip().lower() in {"true", "1", "yes", "on"}


def parse_optional_float(value: Optional[str], key: str) -> Optional[float]:
    """
    Parse a float setting where empty, "none" and "0" mean disabled.
    
    :raises: ConfigurationError if the value is not a number
    """
    if value is None or value.strip().lower() in {"", "none", "off"}:
        return None
    try:
        parsed = float(value)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got: {value!r}")
    if parsed < 0:
        raise ConfigurationError(f"{key} must not be negative, got: {parsed}")
    return parsed or None


def _is_placeholder(value: str) -> bool:
    return bool(value) and PLACEHOLDER_PATTERN.match(value.strip()) is not None


def _mask_secret(secret: str) -> str:
    """Show only the last four characters of a secret."""
    if len(secret) <= 8:
        return "***"
    return f"***{secret[-4:]}"
