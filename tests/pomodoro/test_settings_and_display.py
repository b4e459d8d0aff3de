import json
import math
import unittest

from pomodoro.display import (
    accent_color,
    accent_for,
    display_label,
    format_time,
    progress_fraction,
    ring_dash_offset,
    tip_context_for,
)
from pomodoro.service import TimerSnapshot
from pomodoro.settings import TimerSettings, parse_settings_input


def _snapshot(mode="pomodoro", phase="focus", remaining=1500, total=1500, elapsed=0):
    return TimerSnapshot(
        mode=mode,
        phase=phase,
        remaining_seconds=remaining,
        total_seconds=total,
        elapsed_seconds=elapsed,
        is_running=False,
    )


class ParseSettingsInputTests(unittest.TestCase):
    def test_valid_values_are_used(self) -> None:
        settings = parse_settings_input(
            {"focus_minutes": "50", "short_break_minutes": 10, "long_break_minutes": 30}
        )
        self.assertEqual(TimerSettings(50, 10, 30), settings)

    def test_non_numeric_value_falls_back_to_default(self) -> None:
        settings = parse_settings_input(
            {"focus_minutes": "30", "short_break_minutes": "abc", "long_break_minutes": "20"}
        )
        self.assertEqual(30, settings.focus_minutes)
        self.assertEqual(5, settings.short_break_minutes)
        self.assertEqual(20, settings.long_break_minutes)

    def test_missing_and_blank_values_fall_back_to_defaults(self) -> None:
        settings = parse_settings_input({"focus_minutes": "  "})
        self.assertEqual(TimerSettings(25, 5, 15), settings)

    def test_zero_and_negative_values_fall_back_to_defaults(self) -> None:
        settings = parse_settings_input(
            {"focus_minutes": 0, "short_break_minutes": "-3", "long_break_minutes": -1}
        )
        self.assertEqual(TimerSettings(25, 5, 15), settings)

    def test_fractional_values_are_truncated(self) -> None:
        settings = parse_settings_input({"focus_minutes": "12.9", "long_break_minutes": 0.5})
        self.assertEqual(12, settings.focus_minutes)
        self.assertEqual(15, settings.long_break_minutes)

    def test_booleans_and_non_finite_values_fall_back(self) -> None:
        settings = parse_settings_input(
            {"focus_minutes": True, "short_break_minutes": "inf", "long_break_minutes": math.nan}
        )
        self.assertEqual(TimerSettings(25, 5, 15), settings)

    def test_oversized_values_fall_back_to_defaults(self) -> None:
        huge = json.loads('{"focus_minutes": 1' + "0" * 400 + "}")["focus_minutes"]
        settings = parse_settings_input(
            {"focus_minutes": huge, "short_break_minutes": 10**400, "long_break_minutes": "1e400"}
        )
        self.assertEqual(TimerSettings(25, 5, 15), settings)

    def test_timer_settings_reject_non_positive_values(self) -> None:
        with self.assertRaises(ValueError):
            TimerSettings(focus_minutes=0)

    def test_duration_seconds_per_phase(self) -> None:
        settings = TimerSettings(20, 4, 12)
        self.assertEqual(1200, settings.duration_seconds("focus"))
        self.assertEqual(240, settings.duration_seconds("short_break"))
        self.assertEqual(720, settings.duration_seconds("long_break"))


class DisplayHelperTests(unittest.TestCase):
    def test_format_time_pads_minutes_and_seconds(self) -> None:
        self.assertEqual("25:00", format_time(1500))
        self.assertEqual("00:59", format_time(59))
        self.assertEqual("05:00", format_time(300))

    def test_format_time_does_not_wrap_hours(self) -> None:
        self.assertEqual("61:01", format_time(3661))

    def test_format_time_clamps_negative_values(self) -> None:
        self.assertEqual("00:00", format_time(-5))

    def test_progress_is_elapsed_fraction_of_countdown(self) -> None:
        self.assertEqual(0.0, progress_fraction(_snapshot(remaining=1500)))
        self.assertAlmostEqual(0.2, progress_fraction(_snapshot(remaining=1200)))
        self.assertEqual(1.0, progress_fraction(_snapshot(remaining=0)))

    def test_progress_is_full_for_stopwatch(self) -> None:
        snapshot = _snapshot(mode="stopwatch", remaining=1500, elapsed=42)
        self.assertEqual(1.0, progress_fraction(snapshot))

    def test_progress_handles_zero_total(self) -> None:
        self.assertEqual(0.0, progress_fraction(_snapshot(mode="timer", remaining=0, total=0)))

    def test_accent_follows_mode_and_phase(self) -> None:
        self.assertEqual("tomato", accent_for("pomodoro", "focus"))
        self.assertEqual("sage", accent_for("pomodoro", "short_break"))
        self.assertEqual("sage", accent_for("pomodoro", "long_break"))
        self.assertEqual("sky", accent_for("stopwatch", "focus"))
        self.assertEqual("amber", accent_for("timer", "long_break"))
        self.assertEqual("#ff6347", accent_color("pomodoro", "focus"))

    def test_display_label(self) -> None:
        self.assertEqual("Short Break", display_label("pomodoro", "short_break"))
        self.assertEqual("Stopwatch", display_label("stopwatch", "focus"))
        self.assertEqual("Timer", display_label("timer", "focus"))

    def test_tip_context_for_manual_requests(self) -> None:
        self.assertEqual("Focus Completed", tip_context_for("pomodoro", "focus"))
        self.assertEqual("Relaxing Break", tip_context_for("pomodoro", "long_break"))
        self.assertEqual("Productivity", tip_context_for("stopwatch", "focus"))

    def test_ring_dash_offset_bounds(self) -> None:
        circumference = (140 - 6 * 2) * 2 * math.pi
        self.assertAlmostEqual(circumference, ring_dash_offset(0.0, radius=140, stroke=6))
        self.assertAlmostEqual(0.0, ring_dash_offset(1.0, radius=140, stroke=6))
        self.assertAlmostEqual(0.0, ring_dash_offset(3.0, radius=140, stroke=6))


if __name__ == "__main__":
    unittest.main()
