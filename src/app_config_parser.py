"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    TimerSettingsSection,
    TipSettings,
    UIServerSettings,
)

_SECRET_TIP_FIELDS = ("api_key", "gemini_api_key")


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    timer = _parse_timer_settings(_section(raw, "timer"))
    tips = _parse_tip_settings(_section(raw, "tips"))
    ui_server = _parse_ui_server_settings(_section(raw, "ui_server"), base_dir=base_dir)

    return AppConfig(
        timer=timer,
        tips=tips,
        ui_server=ui_server,
        source_file=source_file,
    )


def _parse_timer_settings(timer_raw: Mapping[str, Any]) -> TimerSettingsSection:
    defaults = TimerSettingsSection()
    frame_rate_hz = _as_float(
        timer_raw.get("frame_rate_hz", defaults.frame_rate_hz),
        "timer.frame_rate_hz",
    )
    if not 1.0 <= frame_rate_hz <= 240.0:
        raise AppConfigurationError("timer.frame_rate_hz must be in [1, 240].")

    return TimerSettingsSection(
        focus_minutes=_as_positive_int(
            timer_raw.get("focus_minutes", defaults.focus_minutes),
            "timer.focus_minutes",
        ),
        short_break_minutes=_as_positive_int(
            timer_raw.get("short_break_minutes", defaults.short_break_minutes),
            "timer.short_break_minutes",
        ),
        long_break_minutes=_as_positive_int(
            timer_raw.get("long_break_minutes", defaults.long_break_minutes),
            "timer.long_break_minutes",
        ),
        frame_rate_hz=frame_rate_hz,
    )


def _parse_tip_settings(tips_raw: Mapping[str, Any]) -> TipSettings:
    _forbid_secret_fields(tips_raw, "tips", _SECRET_TIP_FIELDS)
    defaults = TipSettings()
    model = _as_str(tips_raw.get("model", defaults.model), "tips.model")
    if not model:
        raise AppConfigurationError("tips.model cannot be empty.")

    return TipSettings(
        enabled=_as_bool(tips_raw.get("enabled", defaults.enabled), "tips.enabled"),
        model=model,
        timeout_seconds=_as_float(
            tips_raw.get("timeout_seconds", defaults.timeout_seconds),
            "tips.timeout_seconds",
        ),
        temperature=_as_float(
            tips_raw.get("temperature", defaults.temperature),
            "tips.temperature",
        ),
        max_output_tokens=_as_int(
            tips_raw.get("max_output_tokens", defaults.max_output_tokens),
            "tips.max_output_tokens",
        ),
    )


def _parse_ui_server_settings(
    ui_raw: Mapping[str, Any],
    *,
    base_dir: Path,
) -> UIServerSettings:
    index_file = _as_str(ui_raw.get("index_file", ""), "ui_server.index_file")
    return UIServerSettings(
        enabled=_as_bool(ui_raw.get("enabled", True), "ui_server.enabled"),
        host=_as_str(ui_raw.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(ui_raw.get("port", 8765), "ui_server.port"),
        index_file=_resolve_path(base_dir, index_file) if index_file else "",
    )


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_positive_int(value: Any, field: str) -> int:
    number = _as_int(value, field)
    if number <= 0:
        raise AppConfigurationError(f"{field} must be greater than zero.")
    return number


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a float.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a float.") from error
    raise AppConfigurationError(f"{field} must be a float.")


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)


def _forbid_secret_fields(
    section: Mapping[str, Any],
    section_name: str,
    fields: tuple[str, ...],
) -> None:
    present = [field for field in fields if field in section]
    if present:
        joined = ", ".join(f"{section_name}.{field}" for field in present)
        raise AppConfigurationError(
            f"Secret values must not be stored in config.toml: {joined}. "
            "Move them to environment variables."
        )
