"""
state_machine.py - Up/down repetition state machine
===================================================
One hysteresis loop shared by every exercise. A high signal moves the
state to "up"; a low signal while "up" moves it back to "down" and counts
the repetition.
"""

import enum
import math
from dataclasses import dataclass, replace
from typing import Tuple


class Direction(enum.Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class RepetitionState:
    """Direction and rep count of one exercise session."""
    direction: Direction = Direction.DOWN
    count: int = 0

    def __post_init__(self):
        if self.count < 0:
            raise ValueError(f"Rep count cannot be negative: {self.count}")

    @classmethod
    def initial(cls) -> "RepetitionState":
        return cls()

    def reset(self) -> "RepetitionState":
        return RepetitionState.initial()


class RepetitionStateMachine:
    """Transition function for ``RepetitionState``."""

    @staticmethod
    def transition(state: RepetitionState, signal: float,
                   threshold_up: float, threshold_down: float) -> Tuple[RepetitionState, bool]:
        """
        Feed one signal value into the state machine.

        Args:
            state: Current state
            signal: Angle or displacement for this frame
            threshold_up: Signal must rise above this to enter "up"
            threshold_down: Signal must fall below this while "up" to count

        Returns:
            Tuple of (new_state, rep_completed)
        """
        if not math.isfinite(signal):
            return state, False

        if state.direction is Direction.DOWN and signal > threshold_up:
            return replace(state, direction=Direction.UP), False

        if state.direction is Direction.UP and signal < threshold_down:
            return RepetitionState(Direction.DOWN, state.count + 1), True

        return state, False
