"""Gemini-backed mindfulness tips with calm fallbacks for every failure path."""

import logging
from typing import Any, Callable, Optional, Protocol

from google import genai
from google.genai import types

from .config import TipConfig

FALLBACK_NO_CREDENTIALS = "Take a deep breath and relax."
FALLBACK_REQUEST_FAILED = "Focus on the present moment."
FALLBACK_EMPTY_RESPONSE = "Breathe in, breathe out."

FALLBACK_TIPS: tuple[str, ...] = (
    FALLBACK_NO_CREDENTIALS,
    FALLBACK_REQUEST_FAILED,
    FALLBACK_EMPTY_RESPONSE,
)


class TipProviderLike(Protocol):
    def fetch(self, context: str) -> str:
        ...


class MindfulnessTipProvider:
    """Fetches one short tip per call; never raises to the caller."""

    def __init__(
        self,
        config: TipConfig,
        *,
        client_factory: Optional[Callable[[TipConfig], Any]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._client_factory = client_factory or _build_client
        self._client: Any = None
        self._logger = logger or logging.getLogger("tips")

    @property
    def enabled(self) -> bool:
        return self._config.has_credentials

    def fetch(self, context: str) -> str:
        if not self._config.has_credentials:
            self._logger.debug("No tip credentials configured; using fallback tip.")
            return FALLBACK_NO_CREDENTIALS

        try:
            client = self._ensure_client()
            response = client.models.generate_content(
                model=self._config.model,
                contents=build_tip_prompt(context),
                config=types.GenerateContentConfig(
                    temperature=self._config.temperature,
                    max_output_tokens=self._config.max_output_tokens,
                ),
            )
            text = (getattr(response, "text", None) or "").strip()
        except Exception as error:
            self._logger.error("Error fetching tip for %r: %s", context, error)
            return FALLBACK_REQUEST_FAILED

        if not text:
            self._logger.warning("Tip model returned an empty response for %r", context)
            return FALLBACK_EMPTY_RESPONSE

        self._logger.info("Tip ready for %r: %r", context, text)
        return text

    def _ensure_client(self) -> Any:
        if self._client is None:
            self._client = self._client_factory(self._config)
            self._logger.info("Tip client initialized with %s", self._config.model)
        return self._client


def build_tip_prompt(context: str) -> str:
    phase = " ".join(str(context).split()) or "Productivity"
    return (
        "You are a calm, minimalist productivity assistant.\n"
        f'The user is currently in the "{phase}" phase of a Pomodoro timer.\n'
        "Provide a single, short (under 20 words), soothing, and actionable "
        "mindfulness tip or productivity quote relevant to this phase.\n"
        "Do not use emojis. Keep the tone premium and serene."
    )


def _build_client(config: TipConfig) -> genai.Client:
    return genai.Client(
        api_key=config.api_key,
        http_options=types.HttpOptions(timeout=int(config.timeout_seconds * 1000)),
    )
