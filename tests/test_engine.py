import logging
import warnings

import numpy as np
import pytest

from rep_counter.core.engine import RepCountingEngine
from rep_counter.exceptions import InvalidFrame, UnknownExerciseWarning
from rep_counter.exercises.base import KeypointFrame, KeypointIndex as K
from rep_counter.exercises.profiles import PROFILES
from rep_counter.exercises.state_machine import Direction, RepetitionState


def evaluate_all(engine, frames, exercise_id, state=None):
    state = state or RepetitionState.initial()
    results = []
    for frame in frames:
        result = engine.evaluate_frame(frame, exercise_id, state)
        state = result.state
        results.append(result)
    return results


def test_squats_scenario(knee_pose):
    engine = RepCountingEngine()
    results = evaluate_all(engine, [knee_pose(a) for a in (60, 175, 175, 60)], "squats")

    assert [r.signal for r in results] == pytest.approx([60, 175, 175, 60])
    assert [r.state.direction for r in results] == [
        Direction.DOWN, Direction.UP, Direction.UP, Direction.DOWN
    ]
    assert [r.rep_event for r in results] == [False, False, False, True]
    assert results[-1].state.count == 1
    assert results[-1].feedback == "Rep counted! Total: 1"
    assert results[1].feedback is None


def test_pushups_scenario(displacement_pose):
    engine = RepCountingEngine()
    results = evaluate_all(engine, [displacement_pose(d) for d in (10, 60, 60, -30)], "pushups")

    assert [r.signal for r in results] == pytest.approx([10, 60, 60, -30])
    assert results[-1].state.count == 1
    assert results[-1].rep_event
    assert not any(r.rep_event for r in results[:-1])


def test_situps_use_displacement(displacement_pose):
    engine = RepCountingEngine()
    results = evaluate_all(engine, [displacement_pose(d) for d in (60, -30, 60, -30)], "situps")
    assert results[-1].state.count == 2


def test_bicep_curls(elbow_pose):
    engine = RepCountingEngine()
    angles = [20, 175, 90, 25, 178, 25]
    results = evaluate_all(engine, [elbow_pose(a) for a in angles], "bicep-curls")
    assert results[-1].state.count == 2
    assert [r.rep_event for r in results] == [False, False, False, True, False, True]


def test_partial_squat_is_not_counted(knee_pose):
    engine = RepCountingEngine()
    results = evaluate_all(engine, [knee_pose(a) for a in (60, 175, 140, 175, 150)], "squats")
    assert results[-1].state.count == 0


def test_unknown_exercise_uses_default_profile(knee_pose):
    engine = RepCountingEngine()
    with pytest.warns(UnknownExerciseWarning):
        results = evaluate_all(engine, [knee_pose(a) for a in (60, 175, 60)], "jumping-jacks")

    assert all(r.used_default_profile for r in results)
    assert results[0].profile is PROFILES["squats"]
    assert results[-1].state.count == 1


def test_unknown_exercise_is_logged(knee_pose, caplog):
    engine = RepCountingEngine()
    with caplog.at_level(logging.WARNING), warnings.catch_warnings():
        warnings.simplefilter("ignore")
        engine.evaluate_frame(knee_pose(60), "jumping-jacks", RepetitionState.initial())
    assert "jumping-jacks" in caplog.text


def test_known_exercise_is_not_default(knee_pose):
    result = RepCountingEngine().evaluate_frame(knee_pose(90), "squats", RepetitionState.initial())
    assert result.used_default_profile is False
    assert result.skipped is False


def test_malformed_frame_raises_and_keeps_state():
    engine = RepCountingEngine()
    state = RepetitionState(Direction.UP, 3)
    with pytest.raises(InvalidFrame):
        engine.evaluate_frame(np.zeros((16, 3)), "squats", state)
    assert state == RepetitionState(Direction.UP, 3)


def test_accepts_keypoint_frame(knee_pose):
    frame = KeypointFrame(knee_pose(175))
    result = RepCountingEngine().evaluate_frame(frame, "squats", RepetitionState.initial())
    assert result.state.direction is Direction.UP


def test_low_confidence_still_counts_by_default(knee_pose):
    frames = []
    for angle in (60, 175, 60):
        data = knee_pose(angle)
        data[K.LEFT_KNEE, 2] = 0.05
        frames.append(data)

    results = evaluate_all(RepCountingEngine(), frames, "squats")
    assert results[-1].state.count == 1
    assert not any(r.skipped for r in results)


def test_low_confidence_skipped_when_required(knee_pose):
    engine = RepCountingEngine(require_confident_joints=True)
    weak = knee_pose(60)
    weak[K.LEFT_ANKLE, 2] = 0.3

    state = RepetitionState(Direction.UP, 2)
    result = engine.evaluate_frame(weak, "squats", state)

    assert result.skipped
    assert result.signal is None
    assert result.state is state
    assert not result.rep_event


def test_confidence_check_only_looks_at_profile_joints(knee_pose):
    engine = RepCountingEngine(require_confident_joints=True)
    data = knee_pose(175)
    data[K.NOSE, 2] = 0.0
    data[K.RIGHT_WRIST, 2] = 0.0
    result = engine.evaluate_frame(data, "squats", RepetitionState.initial())
    assert not result.skipped
    assert result.state.direction is Direction.UP


def test_custom_confidence_cutoff(knee_pose):
    engine = RepCountingEngine(require_confident_joints=True, min_keypoint_score=0.95)
    result = engine.evaluate_frame(knee_pose(175), "squats", RepetitionState.initial())
    assert result.skipped


def test_compute_signal(knee_pose, displacement_pose):
    engine = RepCountingEngine()
    assert engine.compute_signal(KeypointFrame(knee_pose(123)), PROFILES["squats"]) == pytest.approx(123)
    assert engine.compute_signal(KeypointFrame(displacement_pose(-7)), PROFILES["pushups"]) == pytest.approx(-7)


def test_sessions_are_independent(knee_pose):
    engine = RepCountingEngine()
    first = evaluate_all(engine, [knee_pose(a) for a in (60, 175, 60)], "squats")
    second = evaluate_all(engine, [knee_pose(a) for a in (60, 175)], "squats")
    assert first[-1].state.count == 1
    assert second[-1].state == RepetitionState(Direction.UP, 0)


def test_unknown_exercise_logged_once_across_frames(knee_pose, caplog):
    engine = RepCountingEngine()
    state = RepetitionState.initial()
    with caplog.at_level(logging.WARNING), warnings.catch_warnings():
        warnings.simplefilter("ignore")
        for _ in range(30):
            result = engine.evaluate_frame(knee_pose(60), "jumping-jacks", state)
            state = result.state
            assert result.used_default_profile

    warning_records = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warning_records) == 1


def test_confidence_cutoff_lives_on_the_instance():
    assert RepCountingEngine().min_keypoint_score == 0.3
    assert RepCountingEngine(min_keypoint_score=0.5).min_keypoint_score == 0.5
    assert not hasattr(RepCountingEngine, "MIN_KEYPOINT_SCORE")
