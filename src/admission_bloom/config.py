from dataclasses import dataclass
from typing import Optional


DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "groq": "meta-llama/llama-4-scout-17b-16e-instruct",
}


@dataclass
class BloomConfig:
    # Inference
    llm_provider: str = "openai"
    llm_model: Optional[str] = None
    temperature: Optional[float] = None

    # Deadline for one inference call, None disables it
    request_timeout_s: Optional[float] = 60.0

    # Logging
    log_level: str = "INFO"
    verbose: bool = False

    def resolved_model(self) -> str:
        """Model name to use, falling back to the provider default."""
        if self.llm_model:
            return self.llm_model
        return DEFAULT_MODELS.get(self.llm_provider.lower(), DEFAULT_MODELS["openai"])
