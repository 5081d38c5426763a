"""
engine.py - Per-frame rep counting
==================================
Looks up the exercise profile, computes the frame's signal and feeds it
to the repetition state machine.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from ..exercises.base import AngleCalculator, KeypointFrame, MIN_KEYPOINT_SCORE
from ..exercises.profiles import ExerciseProfile, ProfileLookup, SignalKind, profile_for
from ..exercises.state_machine import RepetitionState, RepetitionStateMachine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameResult:
    """Outcome of evaluating one frame."""
    state: RepetitionState
    signal: Optional[float]
    rep_event: bool
    profile: ExerciseProfile
    used_default_profile: bool = False
    skipped: bool = False

    @property
    def feedback(self) -> Optional[str]:
        if self.rep_event:
            return f"Rep counted! Total: {self.state.count}"
        return None


class RepCountingEngine:
    """
    Holds no repetition state: the caller owns the ``RepetitionState`` and passes
    it in on every frame.
    """

    def __init__(self, require_confident_joints: bool = False,
                 min_keypoint_score: float = MIN_KEYPOINT_SCORE):
        """
        Args:
            require_confident_joints: Skip frames where any joint used by the
                profile has score <= min_keypoint_score. Off by default, so
                low-confidence joints still drive the count.
            min_keypoint_score: Confidence cut-off for the check above
        """
        self.require_confident_joints = require_confident_joints
        self.min_keypoint_score = min_keypoint_score
        self.angle_calculator = AngleCalculator()
        self.state_machine = RepetitionStateMachine()
        self._lookups = {}

    def lookup_profile(self, exercise_id: str) -> ProfileLookup:
        """Profile for an exercise id; the unknown-id warning fires once per id."""
        lookup = self._lookups.get(exercise_id)
        if lookup is None:
            lookup = self._lookups[exercise_id] = profile_for(exercise_id)
        return lookup

    def compute_signal(self, frame: KeypointFrame, profile: ExerciseProfile) -> float:
        a, b, c = (frame[i] for i in profile.signal_joints)

        if profile.signal_kind is SignalKind.ANGLE:
            return self.angle_calculator.angle_at(a, b, c)
        if profile.signal_kind is SignalKind.VERTICAL_DISPLACEMENT:
            return self.angle_calculator.vertical_displacement(a, b, c)
        raise ValueError(f"Unsupported signal kind: {profile.signal_kind}")

    def evaluate_frame(self, frame: Union[KeypointFrame, np.ndarray],
                       exercise_id: str, state: RepetitionState) -> FrameResult:
        """
        Evaluate one frame.

        Args:
            frame: KeypointFrame, or a raw (17, 3) [x, y, score] array
            exercise_id: Exercise being performed, e.g. "squats"
            state: State returned for the previous frame

        Returns:
            FrameResult with the new state

        Raises:
            InvalidFrame: frame is malformed; ``state`` is left as it was
        """
        if not isinstance(frame, KeypointFrame):
            frame = KeypointFrame(frame)

        profile, is_default = self.lookup_profile(exercise_id)

        if self.require_confident_joints:
            weak = [i for i in profile.signal_joints
                    if not frame.is_confident(i, self.min_keypoint_score)]
            if weak:
                logger.debug("Skipping frame for %s: low confidence at joints %s",
                             profile.id, [int(i) for i in weak])
                return FrameResult(state, None, False, profile, is_default, skipped=True)

        signal = self.compute_signal(frame, profile)
        new_state, rep_event = self.state_machine.transition(
            state, signal, profile.threshold_up, profile.threshold_down
        )

        if rep_event:
            logger.debug("%s rep #%d (signal=%.1f)", profile.id, new_state.count, signal)

        return FrameResult(new_state, signal, rep_event, profile, is_default)
