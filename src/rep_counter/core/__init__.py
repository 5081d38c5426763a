"""
Core Processing Module
======================
Contains rep counting, pose estimation, capture, rendering and session logic.
"""

from .engine import FrameResult, RepCountingEngine
from .history import WorkoutHistory
from .pose_estimator import PoseEstimator
from .renderer import SkeletonRenderer
from .session import WorkoutSession
from .streamer import VideoStreamer

__all__ = [
    'FrameResult',
    'RepCountingEngine',
    'WorkoutHistory',
    'PoseEstimator',
    'SkeletonRenderer',
    'WorkoutSession',
    'VideoStreamer'
]
