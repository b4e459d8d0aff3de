"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_CONFIG_FILE = "config.toml"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class TimerSettingsSection:
    """Initial phase durations and frame pacing from `[timer]`."""
    focus_minutes: int = 25
    short_break_minutes: int = 5
    long_break_minutes: int = 15
    frame_rate_hz: float = 60.0


@dataclass(frozen=True)
class TipSettings:
    """Mindfulness tip generation settings from `[tips]`."""
    enabled: bool = True
    model: str = "gemini-2.0-flash"
    timeout_seconds: float = 10.0
    temperature: float = 0.7
    max_output_tokens: int = 60


@dataclass(frozen=True)
class UIServerSettings:
    """Built-in UI server settings from `[ui_server]`."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    timer: TimerSettingsSection
    tips: TipSettings
    ui_server: UIServerSettings
    source_file: str


@dataclass(frozen=True)
class SecretConfig:
    """Environment-provided secrets kept out of `config.toml`."""
    gemini_api_key: Optional[str]
