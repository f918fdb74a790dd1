import random

import pytest

from screening.timecode.clock import TimecodeClock
from screening.timecode.scheduler import ManualScheduler
from screening.utils.exceptions import ValidationError


@pytest.fixture
def clock(scheduler, now):
    return TimecodeClock(24, scheduler, now_ms=now)


def test_starts_stopped_at_start_frame(scheduler, now):
    clock = TimecodeClock(25, scheduler, now_ms=now, start_frame=90000)
    assert not clock.running
    assert clock.frame_index == 90000
    assert clock.timecode() == "01:00:00:00"
    assert scheduler.active_count == 0


def test_play_advances_from_wall_clock(clock, scheduler, now):
    clock.play()
    assert clock.running
    assert scheduler.active_count == 1

    now.advance(1000)
    scheduler.run_pending()
    assert clock.frame_index == 24

    now.advance(500)
    scheduler.run_pending()
    assert clock.frame_index == 36


@pytest.mark.parametrize("fps", [24, 25, 30])
def test_irregular_ticks_do_not_drift(scheduler, now, fps):
    clock = TimecodeClock(fps, scheduler, now_ms=now)
    rng = random.Random(1234)
    clock.play()

    elapsed = 0
    while elapsed < 10_000:
        step = rng.randint(10, 20)
        now.advance(step)
        elapsed += step
        scheduler.run_pending()
        assert clock.frame_index == (elapsed * fps) // 1000

    assert abs(clock.frame_index - 10 * fps) <= 1


def test_missed_ticks_catch_up(clock, scheduler, now):
    clock.play()
    now.advance(3_000)
    scheduler.run_pending()
    assert clock.frame_index == 72


def test_stop_freezes_and_cancels(clock, scheduler, now):
    clock.play()
    now.advance(1000)
    scheduler.run_pending()
    clock.stop()

    assert not clock.running
    assert scheduler.active_count == 0
    now.advance(5000)
    assert scheduler.run_pending() == 0
    assert clock.tick(now()) == 24


def test_play_twice_keeps_one_callback(clock, scheduler, now):
    clock.play()
    clock.play()
    assert scheduler.active_count == 1


def test_resume_counts_from_frozen_position(clock, scheduler, now):
    clock.play()
    now.advance(1000)
    scheduler.run_pending()
    clock.stop()
    now.advance(10_000)
    clock.play()
    now.advance(500)
    scheduler.run_pending()
    assert clock.frame_index == 36


def test_reset_stops_and_jumps(clock, scheduler, now):
    clock.play()
    now.advance(2000)
    scheduler.run_pending()
    clock.reset(10)
    assert not clock.running
    assert clock.frame_index == 10
    assert scheduler.active_count == 0


def test_adjust_by_seconds_clamps_at_zero(clock):
    clock.adjust_by_seconds(5)
    assert clock.frame_index == 120
    clock.adjust_by_seconds(-1)
    assert clock.frame_index == 96
    clock.adjust_by_seconds(-60)
    assert clock.frame_index == 0


def test_adjust_by_fractional_seconds_rounds_half_up(clock):
    clock.adjust_by_seconds(0.1875)
    assert clock.frame_index == 5


def test_adjust_while_playing_rebaselines(clock, scheduler, now):
    clock.play()
    now.advance(1000)
    scheduler.run_pending()
    clock.adjust_by_seconds(5)
    assert clock.frame_index == 144

    now.advance(1000)
    scheduler.run_pending()
    assert clock.frame_index == 168


def test_seek(clock):
    clock.seek(500)
    assert clock.frame_index == 500
    clock.seek(-3)
    assert clock.frame_index == 0


@pytest.mark.parametrize(
    "frames, old, new, expected",
    [
        (2, 24, 30, 3),
        (240, 24, 25, 250),
        (250, 25, 24, 240),
        (1, 30, 24, 1),
        (0, 24, 30, 0),
    ],
)
def test_change_fps_keeps_wall_clock_position(scheduler, now, frames, old, new, expected):
    clock = TimecodeClock(old, scheduler, now_ms=now, start_frame=frames)
    clock.change_fps(new)
    assert clock.fps == new
    assert clock.frame_index == expected


def test_change_fps_while_playing_rebaselines(clock, scheduler, now):
    clock.play()
    now.advance(1000)
    scheduler.run_pending()
    clock.change_fps(30)
    assert clock.frame_index == 30

    now.advance(1000)
    scheduler.run_pending()
    assert clock.frame_index == 60


def test_change_fps_rejects_invalid(clock):
    with pytest.raises(ValidationError):
        clock.change_fps(0)
    assert clock.fps == 24


def test_listeners_notified_on_change(clock, scheduler, now):
    seen = []
    clock.add_listener(seen.append)
    clock.play()
    now.advance(10)
    scheduler.run_pending()  # still frame 0, no notification
    now.advance(1000)
    scheduler.run_pending()
    clock.remove_listener(seen.append)
    clock.seek(0)
    assert seen == [24]


def test_snapshot(clock, now):
    clock.play()
    state = clock.snapshot()
    assert state.running
    assert state.fps == 24
    assert state.base_wall_clock_ms == now()


def test_manual_scheduler_cancel_is_idempotent():
    scheduler = ManualScheduler()
    calls = []
    handle = scheduler.schedule_repeating(lambda: calls.append(1))
    assert scheduler.run_pending() == 1
    handle.cancel()
    handle.cancel()
    assert handle.cancelled
    assert scheduler.run_pending() == 0
    assert calls == [1]
