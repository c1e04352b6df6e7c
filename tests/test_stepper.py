"""Tests for paced playback and run recording."""

import pytest

from animations import Outcome
from engine import CommandResult, Recorder, SPEED_PRESETS, Stepper, StepperState


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
def test_run_sleeps_fixed_delay_between_steps(sequencer):
    sleeps = []
    stepper = Stepper(sequencer, speed="fast")
    sequencer.search(60)

    frames = stepper.run(sleep=sleeps.append)

    assert frames[-1].step.outcome is Outcome.FOUND
    assert sleeps == [SPEED_PRESETS["fast"]] * (len(frames) - 1)
    assert not sequencer.busy
    assert stepper.state is StepperState.IDLE


def test_run_with_nothing_running(sequencer):
    assert Stepper(sequencer).run(sleep=lambda s: None) == []


def test_tick_waits_for_delay(sequencer):
    clock = FakeClock()
    seen = []
    stepper = Stepper(sequencer, on_frame=seen.append, clock=clock)
    sequencer.traverse("preorder")
    stepper.play()

    assert stepper.tick() is None            # no time has passed
    clock.now += stepper.delay
    first = stepper.tick()
    assert first is not None and first.step.step_number == 0
    assert stepper.tick() is None            # same instant, no second step
    clock.now += stepper.delay / 2
    assert stepper.tick() is None
    clock.now += stepper.delay
    assert stepper.tick().step.current_node == 50
    assert [f.step.step_number for f in seen] == [0, 1]


def test_tick_does_nothing_when_paused(sequencer):
    clock = FakeClock()
    stepper = Stepper(sequencer, clock=clock)
    sequencer.search(60)
    stepper.play()
    stepper.pause()
    clock.now += 10
    assert stepper.tick() is None
    stepper.toggle_play()
    assert stepper.is_playing
    clock.now += 10
    assert stepper.tick() is not None


def test_tick_idle_sequencer(sequencer):
    clock = FakeClock()
    stepper = Stepper(sequencer, clock=clock)
    stepper.play()
    clock.now += 10
    assert stepper.tick() is None


def test_speed_settings(sequencer):
    stepper = Stepper(sequencer)
    assert stepper.delay == SPEED_PRESETS["medium"]
    stepper.set_speed("slow")
    assert stepper.delay == SPEED_PRESETS["slow"]
    stepper.set_speed("warp")
    assert stepper.delay == SPEED_PRESETS["medium"]
    stepper.set_speed_value(0.0)
    assert stepper.delay == pytest.approx(0.02)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
def test_recorder_search_metrics(sequencer):
    rec = Recorder(sequencer)
    metrics = rec.run("search", 60)
    assert metrics.result == "accepted"
    assert metrics.outcome == "found"
    assert metrics.path == [50, 70, 60]
    assert metrics.nodes_visited == 3
    assert metrics.total_steps == len(rec.frames) == 4


def test_recorder_insert_path(sequencer):
    metrics = Recorder(sequencer).run("insert", 35)
    assert metrics.outcome == "inserted"
    assert metrics.path == [50, 30, 40, 35]


def test_recorder_traversal(sequencer):
    metrics = Recorder(sequencer).run("postorder")
    assert metrics.path == [20, 40, 30, 60, 80, 70, 50]
    assert metrics.total_steps == 9


def test_recorder_reports_ignored_command(empty_sequencer):
    rec = Recorder(empty_sequencer)
    metrics = rec.run("search", 5)
    assert metrics.result == CommandResult.EMPTY_TREE.value
    assert metrics.outcome is None
    assert rec.frames == []


def test_recorder_unknown_operation():
    with pytest.raises(ValueError):
        Recorder().run("delete", 5)


def test_recorder_export(sequencer):
    rec = Recorder(sequencer)
    rec.run("search", 65)
    exported = rec.export()
    assert exported["metrics"]["outcome"] == "not_found"
    assert exported["frames"][-1]["step"]["is_final"]
    assert exported["frames"][-1]["log"][-1] == "Value 65 not found in tree"
