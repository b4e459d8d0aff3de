from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_TIP_MODEL = "gemini-2.0-flash"


class ConfigurationError(Exception):
    """Raised when tip provider configuration is invalid."""

    pass


@dataclass(frozen=True)
class TipConfig:
    """Configuration for mindfulness tip generation."""

    api_key: Optional[str] = None
    model: str = DEFAULT_TIP_MODEL
    timeout_seconds: float = 10.0
    temperature: float = 0.7
    max_output_tokens: int = 60

    def __post_init__(self):
        """Validate configuration values."""
        if not self.model or not self.model.strip():
            raise ConfigurationError("model cannot be empty")

        if self.timeout_seconds <= 0:
            raise ConfigurationError(
                f"timeout_seconds must be > 0, got: {self.timeout_seconds}"
            )
        if self.timeout_seconds > 120:
            raise ConfigurationError(
                f"timeout_seconds too high ({self.timeout_seconds}), consider <= 120"
            )

        if not 0.0 <= self.temperature <= 2.0:
            raise ConfigurationError(
                f"temperature must be in [0.0, 2.0], got: {self.temperature}"
            )

        if self.max_output_tokens < 8:
            raise ConfigurationError(
                f"max_output_tokens must be >= 8, got: {self.max_output_tokens}"
            )

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    @classmethod
    def from_settings(cls, settings, *, api_key: Optional[str] = None) -> "TipConfig":
        """Build a config from `[tips]` settings and an environment-provided key.

        A disabled section yields a config without credentials, which makes the
        provider answer with fallback text and never touch the network.
        """
        enabled = bool(getattr(settings, "enabled", True))
        return cls(
            api_key=(api_key or None) if enabled else None,
            model=settings.model,
            timeout_seconds=settings.timeout_seconds,
            temperature=settings.temperature,
            max_output_tokens=settings.max_output_tokens,
        )
