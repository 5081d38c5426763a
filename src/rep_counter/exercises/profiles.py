"""
profiles.py - Exercise profile table
====================================
Maps each exercise id to the joints it is measured on, the kind of signal
computed from them, and the up/down thresholds fed to the state machine.
"""

import enum
import logging
import warnings
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, NamedTuple, Tuple

from ..exceptions import UnknownExerciseWarning
from .base import KeypointIndex as K

logger = logging.getLogger(__name__)


class SignalKind(enum.Enum):
    """How a profile turns its joints into one scalar per frame."""
    ANGLE = "angle"
    VERTICAL_DISPLACEMENT = "vertical_displacement"


@dataclass(frozen=True)
class ExerciseProfile:
    id: str
    signal_kind: SignalKind
    signal_joints: Tuple[int, int, int]
    threshold_up: float
    threshold_down: float

    def __post_init__(self):
        if len(self.signal_joints) != 3:
            raise ValueError(f"{self.id}: signal_joints needs 3 indices, got {self.signal_joints}")
        if self.threshold_down >= self.threshold_up:
            raise ValueError(
                f"{self.id}: threshold_down ({self.threshold_down}) must be below "
                f"threshold_up ({self.threshold_up})"
            )

    @property
    def display_name(self) -> str:
        return format_exercise_name(self.id)


class ProfileLookup(NamedTuple):
    profile: ExerciseProfile
    is_default: bool


# ===== CONFIGURATION =====
SQUATS = ExerciseProfile(
    id="squats",
    signal_kind=SignalKind.ANGLE,
    signal_joints=(K.LEFT_HIP, K.LEFT_KNEE, K.LEFT_ANKLE),
    threshold_up=170.0,    # Legs straight
    threshold_down=100.0,  # Knee bent
)

BICEP_CURLS = ExerciseProfile(
    id="bicep-curls",
    signal_kind=SignalKind.ANGLE,
    signal_joints=(K.LEFT_SHOULDER, K.LEFT_ELBOW, K.LEFT_WRIST),
    threshold_up=170.0,   # Arm extended
    threshold_down=30.0,  # Arm curled
)

PUSHUPS = ExerciseProfile(
    id="pushups",
    signal_kind=SignalKind.VERTICAL_DISPLACEMENT,
    signal_joints=(K.LEFT_SHOULDER, K.LEFT_HIP, K.LEFT_KNEE),
    threshold_up=50.0,
    threshold_down=-20.0,
)

SITUPS = ExerciseProfile(
    id="situps",
    signal_kind=SignalKind.VERTICAL_DISPLACEMENT,
    signal_joints=(K.LEFT_SHOULDER, K.LEFT_HIP, K.LEFT_KNEE),
    threshold_up=50.0,
    threshold_down=-20.0,
)

PROFILES = MappingProxyType({p.id: p for p in (SQUATS, BICEP_CURLS, PUSHUPS, SITUPS)})

DEFAULT_PROFILE = SQUATS


def available_exercises() -> List[str]:
    return list(PROFILES)


def profile_for(exercise_id: str) -> ProfileLookup:
    """
    Look up the profile for an exercise id.

    Unknown ids fall back to ``DEFAULT_PROFILE``. The fallback is flagged on
    the returned lookup and raised as an ``UnknownExerciseWarning``.
    """
    profile = PROFILES.get(exercise_id)
    if profile is not None:
        return ProfileLookup(profile, False)

    message = (
        f"Unknown exercise {exercise_id!r}, using default profile "
        f"{DEFAULT_PROFILE.id!r} (known: {', '.join(PROFILES)})"
    )
    logger.warning(message)
    warnings.warn(message, UnknownExerciseWarning, stacklevel=2)
    return ProfileLookup(DEFAULT_PROFILE, True)


def format_exercise_name(exercise_id: str) -> str:
    """'bicep-curls' -> 'Bicep Curls'"""
    return " ".join(word[:1].upper() + word[1:] for word in exercise_id.split("-"))
