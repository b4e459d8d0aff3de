import unittest

from pomodoro.service import TimingEngine
from pomodoro.settings import TimerSettings


class _FakeClock:
    def __init__(self, now_ms: int = 0):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms


def _engine(clock: _FakeClock, **settings) -> TimingEngine:
    return TimingEngine(settings=TimerSettings(**settings), clock=clock)


class TimingEngineCharacterizationTests(unittest.TestCase):
    def test_initial_state_is_paused_focus_at_full_duration(self) -> None:
        engine = _engine(_FakeClock())
        snapshot = engine.snapshot()

        self.assertEqual("pomodoro", snapshot.mode)
        self.assertEqual("focus", snapshot.phase)
        self.assertEqual(1500, snapshot.remaining_seconds)
        self.assertEqual(1500, snapshot.total_seconds)
        self.assertEqual(0, snapshot.elapsed_seconds)
        self.assertFalse(snapshot.is_running)

    def test_start_records_clock_as_last_tick(self) -> None:
        clock = _FakeClock(10_000)
        engine = _engine(clock)

        engine.start()

        self.assertTrue(engine.is_running)
        self.assertEqual(10_000, engine.last_tick_ms)

    def test_start_while_running_keeps_last_tick(self) -> None:
        clock = _FakeClock(1_000)
        engine = _engine(clock)
        engine.start()
        clock.now_ms = 1_700

        engine.start()

        self.assertEqual(1_000, engine.last_tick_ms)

    def test_advance_while_paused_returns_none(self) -> None:
        engine = _engine(_FakeClock())
        self.assertIsNone(engine.advance(5_000))
        self.assertEqual(1500, engine.snapshot().remaining_seconds)

    def test_advance_below_threshold_keeps_partial_second(self) -> None:
        clock = _FakeClock(0)
        engine = _engine(clock)
        engine.start()

        self.assertIsNone(engine.advance(999))
        self.assertEqual(0, engine.last_tick_ms)
        self.assertEqual(1500, engine.snapshot().remaining_seconds)

    def test_advance_applies_whole_seconds_and_carries_remainder(self) -> None:
        clock = _FakeClock(0)
        engine = _engine(clock)
        engine.start()

        tick = engine.advance(3_250)

        self.assertIsNotNone(tick)
        self.assertEqual(3, tick.seconds_passed)
        self.assertFalse(tick.completed)
        self.assertEqual(1497, tick.snapshot.remaining_seconds)
        self.assertEqual(3_000, engine.last_tick_ms)

    def test_throttled_frames_do_not_drift(self) -> None:
        clock = _FakeClock(0)
        engine = _engine(clock)
        engine.start()

        for now_ms in (700, 1_400, 2_100, 2_800, 3_500, 4_200):
            engine.advance(now_ms)

        self.assertEqual(1496, engine.snapshot().remaining_seconds)
        self.assertEqual(4_000, engine.last_tick_ms)

    def test_full_focus_interval_completes_in_one_advance(self) -> None:
        clock = _FakeClock(0)
        engine = _engine(clock)
        engine.start()

        tick = engine.advance(1_500_000)

        self.assertTrue(tick.completed)
        self.assertEqual("Focus Completed", tick.tip_context)
        self.assertTrue(tick.focus_completed)
        self.assertEqual(0, tick.snapshot.remaining_seconds)
        self.assertFalse(engine.is_running)

    def test_overshoot_clamps_remaining_at_zero(self) -> None:
        clock = _FakeClock(0)
        engine = _engine(clock, focus_minutes=1)
        engine.start()

        tick = engine.advance(90_000)

        self.assertTrue(tick.completed)
        self.assertEqual(0, tick.snapshot.remaining_seconds)

    def test_break_completion_has_no_tip_context(self) -> None:
        clock = _FakeClock(0)
        engine = _engine(clock)
        engine.set_phase("short_break")
        engine.start()

        tick = engine.advance(300_000)

        self.assertTrue(tick.completed)
        self.assertIsNone(tick.tip_context)
        self.assertFalse(tick.focus_completed)

    def test_timer_mode_completion_has_no_tip_context(self) -> None:
        clock = _FakeClock(0)
        engine = _engine(clock)
        engine.set_mode("timer")
        engine.start()

        tick = engine.advance(300_000)

        self.assertTrue(tick.completed)
        self.assertIsNone(tick.tip_context)

    def test_start_on_finished_countdown_is_ignored(self) -> None:
        clock = _FakeClock(0)
        engine = _engine(clock, focus_minutes=1)
        engine.start()
        engine.advance(60_000)

        engine.start()

        self.assertFalse(engine.is_running)
        self.assertEqual(0, engine.snapshot().remaining_seconds)

    def test_stopwatch_accumulates_with_remainder_carry(self) -> None:
        clock = _FakeClock(0)
        engine = _engine(clock)
        engine.set_mode("stopwatch")
        engine.start()

        ticks = [engine.advance(now_ms) for now_ms in (400, 800, 1_200)]

        self.assertIsNone(ticks[0])
        self.assertIsNone(ticks[1])
        self.assertEqual(1, ticks[2].seconds_passed)
        self.assertEqual(1, engine.snapshot().elapsed_seconds)
        self.assertEqual(1_000, engine.last_tick_ms)
        self.assertEqual(200, 1_200 - engine.last_tick_ms)

    def test_stopwatch_never_completes(self) -> None:
        clock = _FakeClock(0)
        engine = _engine(clock)
        engine.set_mode("stopwatch")
        engine.start()

        tick = engine.advance(10 * 3600 * 1000)

        self.assertFalse(tick.completed)
        self.assertTrue(engine.is_running)
        self.assertEqual(36_000, tick.snapshot.elapsed_seconds)
        self.assertEqual(36_000, tick.snapshot.display_seconds)

    def test_pause_then_start_discards_paused_interval(self) -> None:
        clock = _FakeClock(0)
        engine = _engine(clock)
        engine.start()
        engine.advance(2_500)
        engine.pause()

        clock.now_ms = 60_000
        engine.start()
        tick = engine.advance(61_000)

        self.assertEqual(1, tick.seconds_passed)
        self.assertEqual(1497, tick.snapshot.remaining_seconds)

    def test_seconds_applied_match_total_delta_for_any_chunking(self) -> None:
        chunkings = (
            [3_700],
            [1_000, 1_000, 1_000, 700],
            [250] * 14 + [200],
            [999, 1, 1_999, 1, 700],
            [16] * 231 + [4],
        )
        for deltas in chunkings:
            with self.subTest(deltas=deltas[:3]):
                engine = _engine(_FakeClock(0))
                engine.set_mode("stopwatch")
                engine.start()
                now_ms = 0
                for delta in deltas:
                    now_ms += delta
                    engine.advance(now_ms)

                self.assertEqual(3_700, now_ms)
                self.assertEqual(3, engine.snapshot().elapsed_seconds)

    def test_toggle_flips_run_state(self) -> None:
        engine = _engine(_FakeClock())
        engine.toggle()
        self.assertTrue(engine.is_running)
        engine.toggle()
        self.assertFalse(engine.is_running)


class TimingEngineTransitionTests(unittest.TestCase):
    def test_reset_pomodoro_restores_phase_duration(self) -> None:
        clock = _FakeClock(0)
        engine = _engine(clock)
        engine.set_phase("long_break")
        engine.start()
        engine.advance(42_000)

        engine.reset()

        snapshot = engine.snapshot()
        self.assertFalse(snapshot.is_running)
        self.assertEqual(900, snapshot.remaining_seconds)
        self.assertEqual(900, snapshot.total_seconds)

    def test_reset_stopwatch_zeroes_elapsed(self) -> None:
        clock = _FakeClock(0)
        engine = _engine(clock)
        engine.set_mode("stopwatch")
        engine.start()
        engine.advance(5_000)

        engine.reset()

        self.assertEqual(0, engine.snapshot().elapsed_seconds)
        self.assertFalse(engine.is_running)

    def test_reset_timer_restores_default_five_minutes(self) -> None:
        clock = _FakeClock(0)
        engine = _engine(clock)
        engine.set_mode("timer")
        engine.start()
        engine.advance(30_000)

        engine.reset()

        self.assertEqual(300, engine.snapshot().remaining_seconds)
        self.assertEqual(300, engine.snapshot().total_seconds)

    def test_set_mode_pomodoro_resets_to_focus(self) -> None:
        engine = _engine(_FakeClock(), focus_minutes=30)
        engine.set_phase("short_break")
        engine.set_mode("stopwatch")

        engine.set_mode("pomodoro")

        snapshot = engine.snapshot()
        self.assertEqual("focus", snapshot.phase)
        self.assertEqual(1800, snapshot.remaining_seconds)
        self.assertEqual(1800, snapshot.total_seconds)

    def test_set_mode_stops_running_timer(self) -> None:
        engine = _engine(_FakeClock())
        engine.start()

        engine.set_mode("timer")

        self.assertFalse(engine.is_running)
        self.assertEqual(300, engine.snapshot().remaining_seconds)

    def test_set_mode_rejects_unknown_mode(self) -> None:
        engine = _engine(_FakeClock())
        with self.assertRaises(ValueError):
            engine.set_mode("metronome")

    def test_set_phase_loads_configured_duration(self) -> None:
        engine = _engine(_FakeClock(), short_break_minutes=7)
        engine.start()

        engine.set_phase("short_break")

        snapshot = engine.snapshot()
        self.assertFalse(snapshot.is_running)
        self.assertEqual(420, snapshot.remaining_seconds)
        self.assertEqual(420, snapshot.total_seconds)

    def test_set_phase_rejects_unknown_phase(self) -> None:
        engine = _engine(_FakeClock())
        with self.assertRaises(ValueError):
            engine.set_phase("nap")

    def test_apply_settings_resets_current_phase(self) -> None:
        clock = _FakeClock(0)
        engine = _engine(clock)
        engine.start()
        engine.advance(10_000)

        engine.apply_settings(TimerSettings(focus_minutes=50))

        snapshot = engine.snapshot()
        self.assertFalse(snapshot.is_running)
        self.assertEqual(3000, snapshot.remaining_seconds)
        self.assertEqual(50, engine.settings.focus_minutes)

    def test_countdown_invariant_holds_across_transitions(self) -> None:
        clock = _FakeClock(0)
        engine = _engine(clock)
        engine.start()
        for now_ms in range(0, 20_000, 333):
            engine.advance(now_ms)
            snapshot = engine.snapshot()
            self.assertGreaterEqual(snapshot.remaining_seconds, 0)
            self.assertLessEqual(snapshot.remaining_seconds, snapshot.total_seconds)


if __name__ == "__main__":
    unittest.main()
