"""
base.py - Keypoint data model and geometry
==========================================
Contains the per-frame keypoint model and the angle calculation shared
by every exercise profile.
"""

import enum
from typing import Iterable, NamedTuple, Sequence, Tuple, Union

import numpy as np

from ..exceptions import InvalidFrame


NUM_KEYPOINTS = 17
MIN_KEYPOINT_SCORE = 0.3


class KeypointIndex(enum.IntEnum):
    """MoveNet single-pose joint layout."""
    NOSE = 0
    LEFT_EYE = 1
    RIGHT_EYE = 2
    LEFT_EAR = 3
    RIGHT_EAR = 4
    LEFT_SHOULDER = 5
    RIGHT_SHOULDER = 6
    LEFT_ELBOW = 7
    RIGHT_ELBOW = 8
    LEFT_WRIST = 9
    RIGHT_WRIST = 10
    LEFT_HIP = 11
    RIGHT_HIP = 12
    LEFT_KNEE = 13
    RIGHT_KNEE = 14
    LEFT_ANKLE = 15
    RIGHT_ANKLE = 16


class Keypoint(NamedTuple):
    """One joint in pixel space with its confidence."""
    x: float
    y: float
    score: float

    def is_confident(self, min_score: float = MIN_KEYPOINT_SCORE) -> bool:
        return self.score > min_score


Point = Union[Keypoint, Tuple[float, float]]


class KeypointFrame:
    """
    Immutable set of 17 keypoints for one pose-estimation result.

    Rows keep the fixed anatomical order of ``KeypointIndex``; a missing
    joint is a row with a low score, never an omitted row.
    """

    def __init__(self, keypoints: Union[np.ndarray, Sequence[Sequence[float]]]):
        """
        Args:
            keypoints: Array-like of shape (17, 3) with [x, y, score] rows

        Raises:
            InvalidFrame: wrong cardinality or non-finite coordinates
        """
        try:
            data = np.array(keypoints, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise InvalidFrame(f"Keypoints are not numeric: {exc}") from exc

        if data.ndim != 2 or data.shape != (NUM_KEYPOINTS, 3):
            raise InvalidFrame(
                f"Expected {NUM_KEYPOINTS} keypoints of (x, y, score), got shape {data.shape}"
            )
        if not np.all(np.isfinite(data[:, :2])):
            bad = np.where(~np.all(np.isfinite(data[:, :2]), axis=1))[0].tolist()
            raise InvalidFrame(f"Non-finite coordinates at keypoints {bad}")

        data.setflags(write=False)
        self._data = data

    @classmethod
    def from_keypoints(cls, keypoints: Iterable[Keypoint]) -> "KeypointFrame":
        return cls([tuple(kp) for kp in keypoints])

    @classmethod
    def from_movenet(cls, raw: np.ndarray, width: int, height: int) -> "KeypointFrame":
        """
        Build a frame from MoveNet output.

        Args:
            raw: Array reshapeable to (17, 3) with normalized [y, x, score]
            width, height: Size of the captured frame in pixels

        Returns:
            KeypointFrame in pixel space
        """
        raw = np.asarray(raw, dtype=np.float64)
        if raw.size != NUM_KEYPOINTS * 3:
            raise InvalidFrame(f"Expected {NUM_KEYPOINTS * 3} MoveNet values, got {raw.size}")
        raw = raw.reshape((NUM_KEYPOINTS, 3))

        pixels = np.empty_like(raw)
        pixels[:, 0] = raw[:, 1] * width
        pixels[:, 1] = raw[:, 0] * height
        pixels[:, 2] = raw[:, 2]
        return cls(pixels)

    @property
    def array(self) -> np.ndarray:
        """Read-only (17, 3) array of [x, y, score]."""
        return self._data

    @property
    def scores(self) -> np.ndarray:
        return self._data[:, 2]

    def __len__(self) -> int:
        return NUM_KEYPOINTS

    def __getitem__(self, index: int) -> Keypoint:
        x, y, score = self._data[int(index)]
        return Keypoint(float(x), float(y), float(score))

    def __iter__(self):
        for i in range(NUM_KEYPOINTS):
            yield self[i]

    def is_confident(self, index: int, min_score: float = MIN_KEYPOINT_SCORE) -> bool:
        return bool(self._data[int(index), 2] > min_score)

    def __repr__(self) -> str:
        confident = int(np.sum(self.scores > MIN_KEYPOINT_SCORE))
        return f"KeypointFrame({confident}/{NUM_KEYPOINTS} confident)"


class AngleCalculator:
    """Utility class for calculating angles from keypoints."""

    @staticmethod
    def angle_at(a: Point, b: Point, c: Point) -> float:
        """
        Calculate angle ABC (at point B) in degrees.

        Args:
            a, b, c: Keypoints or (x, y) pixel coordinates

        Returns:
            Angle in degrees (0-180)
        """
        a, b, c = np.array(a[:2]), np.array(b[:2]), np.array(c[:2])
        radians = np.arctan2(c[1] - b[1], c[0] - b[0]) - np.arctan2(a[1] - b[1], a[0] - b[0])
        angle = np.abs(radians * 180.0 / np.pi)
        if angle > 180:
            angle = 360 - angle
        return float(angle)

    @staticmethod
    def vertical_displacement(upper: Point, middle: Point, lower: Point) -> float:
        """
        Midpoint height of the first two points minus the height of the third.

        Positive when the midpoint sits lower in the image than ``lower``
        (y grows downwards).
        """
        return float((upper[1] + middle[1]) / 2.0 - lower[1])


angle_at = AngleCalculator.angle_at
