"""Tests for the processing progress state machine."""

import pytest

from vidsub.exceptions import InvalidTransitionError
from vidsub.progress import ProcessingState, ProgressEvent, ProgressTracker


@pytest.fixture
def tracker():
    return ProgressTracker()


def test_starts_idle(tracker):
    assert tracker.state is ProcessingState.IDLE
    assert tracker.file_name is None
    assert not tracker.in_flight


def test_full_run_ends_completed(tracker):
    tracker.begin("clip.mp4")
    for step, percent in [("transcribing", 25), ("translating", 60), ("generating", 90), ("completed", 100)]:
        assert tracker.on_progress(step, percent)
    assert tracker.state is ProcessingState.COMPLETED
    assert tracker.percent == 100
    assert tracker.file_name == "clip.mp4"


def test_begin_moves_to_transcribing(tracker):
    tracker.begin("clip.mp4")
    assert tracker.state is ProcessingState.TRANSCRIBING
    assert tracker.in_flight


def test_repeated_step_updates_percent(tracker):
    tracker.begin("clip.mp4")
    assert tracker.handle(ProgressEvent(ProcessingState.TRANSCRIBING, 10))
    assert tracker.handle(ProgressEvent(ProcessingState.TRANSCRIBING, 20))
    assert tracker.percent == 20


def test_skipping_a_step_is_rejected(tracker):
    tracker.begin("clip.mp4")
    assert not tracker.on_progress("generating", 90)
    assert tracker.state is ProcessingState.TRANSCRIBING


def test_going_backwards_is_rejected(tracker):
    tracker.begin("clip.mp4")
    tracker.on_progress("translating", 60)
    assert not tracker.on_progress("transcribing", 25)
    assert tracker.state is ProcessingState.TRANSLATING


def test_events_without_a_run_are_rejected(tracker):
    assert not tracker.on_progress("transcribing", 25)
    assert tracker.state is ProcessingState.IDLE


def test_late_events_after_failure_are_not_applied(tracker):
    tracker.begin("clip.mp4")
    tracker.on_progress("transcribing", 25)
    tracker.fail()
    assert tracker.state is ProcessingState.IDLE
    assert tracker.file_name is None
    assert not tracker.on_progress("translating", 60)
    assert not tracker.on_progress("transcribing", 25)
    assert tracker.state is ProcessingState.IDLE


def test_begin_while_in_flight_raises(tracker):
    tracker.begin("a.mp4")
    with pytest.raises(InvalidTransitionError):
        tracker.begin("b.mp4")


def test_begin_after_completion_requires_reset(tracker):
    tracker.begin("a.mp4")
    for step in ("translating", "generating", "completed"):
        tracker.on_progress(step, 0)
    with pytest.raises(InvalidTransitionError):
        tracker.begin("b.mp4")
    tracker.reset()
    tracker.begin("b.mp4")
    assert tracker.file_name == "b.mp4"


def test_reset_while_in_flight_raises(tracker):
    tracker.begin("a.mp4")
    with pytest.raises(InvalidTransitionError):
        tracker.reset()
    assert tracker.state is ProcessingState.TRANSCRIBING


def test_from_callback_rejects_unknown_and_idle():
    with pytest.raises(ValueError):
        ProgressEvent.from_callback("uploading", 10)
    with pytest.raises(ValueError):
        ProgressEvent.from_callback("idle", 0)
    assert ProgressEvent.from_callback("generating", 90) == ProgressEvent(ProcessingState.GENERATING, 90)


def test_step_progress(tracker):
    assert tracker.step_progress() == 0
    tracker.begin("clip.mp4")
    assert tracker.step_progress() == pytest.approx(100 / 3)
    tracker.on_progress("translating", 60)
    assert tracker.step_progress() == pytest.approx(200 / 3)
    tracker.on_progress("generating", 90)
    assert tracker.step_progress() == pytest.approx(100)
    tracker.on_progress("completed", 100)
    assert tracker.step_progress() == 100


def test_step_statuses(tracker):
    assert [s for _, _, s in tracker.step_statuses()] == ["Pending", "Pending", "Pending"]
    tracker.begin("clip.mp4")
    tracker.on_progress("translating", 60)
    statuses = tracker.step_statuses()
    assert [s for _, _, s in statuses] == ["Completed", "Processing...", "Pending"]
    assert statuses[1][0] == "Translating to English"
    for step in ("generating", "completed"):
        tracker.on_progress(step, 100)
    assert [s for _, _, s in tracker.step_statuses()] == ["Completed"] * 3


def test_listeners_see_accepted_changes_only(tracker):
    seen = []
    tracker.subscribe(lambda state, percent: seen.append((state.value, percent)))
    tracker.begin("clip.mp4")
    tracker.on_progress("generating", 90)
    tracker.on_progress("translating", 60)
    tracker.fail()
    assert seen == [("transcribing", 0), ("translating", 60), ("idle", 0)]
