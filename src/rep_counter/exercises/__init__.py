"""
Exercise Logic Module
=====================
Keypoint model, joint geometry, exercise profiles and the rep state machine.
"""

from .base import AngleCalculator, Keypoint, KeypointFrame, KeypointIndex, angle_at
from .profiles import (
    ExerciseProfile,
    ProfileLookup,
    SignalKind,
    PROFILES,
    DEFAULT_PROFILE,
    available_exercises,
    format_exercise_name,
    profile_for,
)
from .state_machine import Direction, RepetitionState, RepetitionStateMachine

__all__ = [
    'AngleCalculator',
    'Keypoint',
    'KeypointFrame',
    'KeypointIndex',
    'angle_at',
    'ExerciseProfile',
    'ProfileLookup',
    'SignalKind',
    'PROFILES',
    'DEFAULT_PROFILE',
    'available_exercises',
    'format_exercise_name',
    'profile_for',
    'Direction',
    'RepetitionState',
    'RepetitionStateMachine'
]
