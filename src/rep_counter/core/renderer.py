"""
renderer.py - Skeleton and rep overlay
======================================
Draws the pose skeleton and the current set information onto a frame.
"""

from typing import Optional, Tuple

import cv2
import numpy as np

from ..exercises.base import KeypointFrame, MIN_KEYPOINT_SCORE
from ..exercises.profiles import SignalKind
from .engine import FrameResult


class SkeletonRenderer:
    """Renders keypoints, limbs and rep information with OpenCV."""

    # ===== VISUALIZATION CONFIG =====
    COLOR_SKELETON = (255, 0, 0)  # Blue
    COLOR_KEYPOINTS = (0, 0, 255)  # Red
    COLOR_TEXT = (255, 255, 255)
    COLOR_FEEDBACK = (0, 255, 0)
    COLOR_PANEL = (0, 0, 0)

    FONT = cv2.FONT_HERSHEY_SIMPLEX
    FONT_SCALE_LARGE = 0.8
    FONT_SCALE_MEDIUM = 0.6
    FONT_SCALE_SMALL = 0.5
    FONT_THICKNESS = 2

    # Arms, shoulders-to-hips and legs; the face is not drawn
    SKELETON_CONNECTIONS = [
        (5, 7), (7, 9),
        (6, 8), (8, 10),
        (5, 6), (5, 11), (6, 12),
        (11, 13), (13, 15),
        (12, 14), (14, 16),
    ]

    def __init__(self, min_keypoint_score: float = MIN_KEYPOINT_SCORE):
        self.min_keypoint_score = min_keypoint_score

    @staticmethod
    def _pixel(frame: KeypointFrame, index: int) -> Tuple[int, int]:
        kp = frame[index]
        return int(round(kp.x)), int(round(kp.y))

    def draw_skeleton(self, image: np.ndarray, keypoints: KeypointFrame) -> np.ndarray:
        """Draw confident keypoints and limbs between confident pairs, in place."""
        for idx_a, idx_b in self.SKELETON_CONNECTIONS:
            if (keypoints.is_confident(idx_a, self.min_keypoint_score) and
                    keypoints.is_confident(idx_b, self.min_keypoint_score)):
                cv2.line(image, self._pixel(keypoints, idx_a), self._pixel(keypoints, idx_b),
                         self.COLOR_SKELETON, 2)

        for i in range(len(keypoints)):
            if keypoints.is_confident(i, self.min_keypoint_score):
                cv2.circle(image, self._pixel(keypoints, i), 5, self.COLOR_KEYPOINTS, -1)

        return image

    def render(self,
               image: np.ndarray,
               keypoints: Optional[KeypointFrame],
               exercise_name: str,
               reps: int,
               feedback: str,
               result: Optional[FrameResult] = None,
               fps: float = 0.0) -> np.ndarray:
        """
        Render a copy of the frame with skeleton and set information.
        """
        output = image.copy()

        if keypoints is not None:
            self.draw_skeleton(output, keypoints)

        cv2.rectangle(output, (10, 10), (330, 125), self.COLOR_PANEL, -1)
        cv2.putText(output, f"{exercise_name}", (20, 38),
                    self.FONT, self.FONT_SCALE_LARGE, self.COLOR_TEXT, self.FONT_THICKNESS)
        cv2.putText(output, f"Reps: {reps}", (20, 68),
                    self.FONT, self.FONT_SCALE_LARGE, self.COLOR_FEEDBACK, self.FONT_THICKNESS)

        if result is not None and result.signal is not None:
            if result.profile.signal_kind is SignalKind.ANGLE:
                label_signal = f"Angle: {int(result.signal)} deg"
            else:
                label_signal = f"Offset: {int(result.signal)} px"
            cv2.putText(output, label_signal, (200, 68),
                        self.FONT, self.FONT_SCALE_SMALL, (200, 200, 200), 1)

        cv2.putText(output, feedback, (20, 95),
                    self.FONT, self.FONT_SCALE_SMALL, self.COLOR_TEXT, 1)
        cv2.putText(output, f"FPS: {fps:.1f}", (20, 115),
                    self.FONT, self.FONT_SCALE_SMALL, (200, 200, 200), 1)

        return output
