"""
exceptions.py - Error types
===========================
Conditions raised or warned about by the rep counting core.
None of them are fatal: each one means "no state change this frame".
"""


class RepCounterError(Exception):
    """Base class for rep counter errors."""


class InvalidFrame(RepCounterError, ValueError):
    """Keypoint frame has the wrong shape or non-finite coordinates."""


class HistoryStoreError(RepCounterError):
    """Workout history file exists but cannot be decoded."""


class UnknownExerciseWarning(UserWarning):
    """Exercise id is not in the profile table; the default profile is used."""
