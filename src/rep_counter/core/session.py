"""
session.py - Workout session
============================
Owns the repetition state of one exercise set and logs finished sets to
the workout history.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Union

import numpy as np

from ..exercises.base import KeypointFrame
from ..exercises.profiles import format_exercise_name
from ..exercises.state_machine import RepetitionState
from .engine import FrameResult, RepCountingEngine
from .history import WorkoutHistory


class WorkoutSession:
    """
    One active exercise session.

    Feed frames through ``process``; call ``log`` when the set is finished.
    """

    READY_MESSAGE = "Ready. Start your set."
    LOGGED_MESSAGE = "Workout logged! Ready for next set."

    def __init__(self, exercise_id: str,
                 engine: Optional[RepCountingEngine] = None,
                 history: Optional[WorkoutHistory] = None):
        self.exercise_id = exercise_id
        self.engine = engine or RepCountingEngine()
        self.history = history
        self.profile, self.used_default_profile = self.engine.lookup_profile(exercise_id)
        self.state = RepetitionState.initial()
        self.feedback = self.READY_MESSAGE
        self.last_result: Optional[FrameResult] = None

    @property
    def count(self) -> int:
        return self.state.count

    @property
    def display_name(self) -> str:
        return format_exercise_name(self.exercise_id)

    def start(self) -> "WorkoutSession":
        print(f"🔹 [WorkoutSession] Starting {self.display_name}")
        self.state = RepetitionState.initial()
        self.feedback = self.READY_MESSAGE
        self.last_result = None
        return self

    def process(self, frame: Union[KeypointFrame, np.ndarray]) -> FrameResult:
        """Evaluate one frame against this session's state."""
        result = self.engine.evaluate_frame(frame, self.exercise_id, self.state)
        self.state = result.state
        self.last_result = result
        if result.rep_event:
            self.feedback = result.feedback
            print(f"💪 [WorkoutSession] {self.display_name} Rep #{self.state.count}")
        return result

    def reset(self):
        """Discard the current set without logging it."""
        self.state = self.state.reset()
        self.feedback = self.READY_MESSAGE

    def log(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Record the finished set and reset the counter.

        Returns:
            The logged entry: {exercise, reps, timestamp, date}
        """
        now = now or datetime.now()
        entry = {
            "exercise": self.exercise_id,
            "reps": self.state.count,
            "timestamp": now.strftime("%Y-%m-%d %H:%M:%S"),
            "date": now.date().isoformat(),
        }

        if self.history is not None:
            self.history.append(entry)
            print(f"💾 [WorkoutSession] Logged: {WorkoutHistory.format_entry(entry)}")

        self.state = self.state.reset()
        self.feedback = self.LOGGED_MESSAGE
        return entry
