"""Formatting, progress, and accent helpers for the circular timer display."""

from __future__ import annotations

import math

from .constants import (
    ACCENT_AMBER,
    ACCENT_COLORS,
    ACCENT_SAGE,
    ACCENT_SKY,
    ACCENT_TOMATO,
    CONTEXT_FOCUS_COMPLETED,
    CONTEXT_PRODUCTIVITY,
    CONTEXT_RELAXING_BREAK,
    MODE_LABELS,
    MODE_POMODORO,
    MODE_STOPWATCH,
    MODE_TIMER,
    PHASE_FOCUS,
    PHASE_LABELS,
)
from .service import TimerSnapshot


def format_time(seconds: int) -> str:
    """Format seconds as zero-padded `MM:SS`; minutes are not wrapped at 60."""
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remainder:02d}"


def progress_fraction(snapshot: TimerSnapshot) -> float:
    """Fraction of the current countdown already elapsed, 1.0 for stopwatch."""
    if snapshot.mode == MODE_STOPWATCH:
        return 1.0
    if snapshot.total_seconds <= 0:
        return 0.0
    elapsed = snapshot.total_seconds - snapshot.remaining_seconds
    return min(1.0, max(0.0, elapsed / snapshot.total_seconds))


def accent_for(mode: str, phase: str) -> str:
    if mode == MODE_STOPWATCH:
        return ACCENT_SKY
    if mode == MODE_TIMER:
        return ACCENT_AMBER
    if phase == PHASE_FOCUS:
        return ACCENT_TOMATO
    return ACCENT_SAGE


def accent_color(mode: str, phase: str) -> str:
    return ACCENT_COLORS[accent_for(mode, phase)]


def display_label(mode: str, phase: str) -> str:
    if mode == MODE_POMODORO:
        return PHASE_LABELS.get(phase, PHASE_LABELS[PHASE_FOCUS])
    return MODE_LABELS.get(mode, mode.title())


def tip_context_for(mode: str, phase: str) -> str:
    """Context label sent with a manually requested tip."""
    if mode != MODE_POMODORO:
        return CONTEXT_PRODUCTIVITY
    if phase == PHASE_FOCUS:
        return CONTEXT_FOCUS_COMPLETED
    return CONTEXT_RELAXING_BREAK


def ring_dash_offset(progress: float, *, radius: float, stroke: float) -> float:
    """SVG `stroke-dashoffset` for a progress ring drawn inside `radius`.

    The ring is inset by twice the stroke width so the stroke stays inside the
    bounding box. Progress 0 hides the arc, progress 1 closes it.
    """
    normalized_radius = radius - stroke * 2
    if normalized_radius <= 0:
        return 0.0
    circumference = normalized_radius * 2 * math.pi
    clamped = min(1.0, max(0.0, progress))
    return circumference - clamped * circumference
