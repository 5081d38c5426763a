"""
Rep Counter
===========
Real-time exercise repetition counting from MoveNet body keypoints.
"""

from .core import RepCountingEngine, FrameResult, WorkoutSession, WorkoutHistory
from .exercises import (
    KeypointFrame,
    Keypoint,
    RepetitionState,
    Direction,
    ExerciseProfile,
    SignalKind,
    angle_at,
    profile_for,
)
from .exceptions import InvalidFrame, UnknownExerciseWarning, HistoryStoreError

__version__ = "1.0.0"
__all__ = [
    "RepCountingEngine",
    "FrameResult",
    "WorkoutSession",
    "WorkoutHistory",
    "KeypointFrame",
    "Keypoint",
    "RepetitionState",
    "Direction",
    "ExerciseProfile",
    "SignalKind",
    "angle_at",
    "profile_for",
    "InvalidFrame",
    "UnknownExerciseWarning",
    "HistoryStoreError",
]
