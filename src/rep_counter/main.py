"""
main.py - Real-time rep counter
Main controller: camera -> MoveNet -> rep counting -> overlay + history
"""

import argparse
import logging
import os
import time
from collections import deque
from typing import Optional

import cv2
import numpy as np

from .core import PoseEstimator, RepCountingEngine, SkeletonRenderer, VideoStreamer, WorkoutHistory, WorkoutSession
from .exceptions import HistoryStoreError, InvalidFrame
from .exercises import available_exercises

# ============================================================================
# 🔧 CONFIGURATION
# ============================================================================

# MoveNet SinglePose Lightning (SavedModel dir, .tflite or .onnx)
MOVENET_MODEL_PATH = os.environ.get(
    "REP_COUNTER_MODEL", os.path.join("models", "movenet_singlepose_lightning.tflite")
)

# Camera index or video file
VIDEO_SOURCE = os.environ.get("REP_COUNTER_SOURCE", "0")

# Logged workouts
HISTORY_PATH = os.environ.get(
    "REP_COUNTER_HISTORY", os.path.join(os.path.expanduser("~"), ".rep_counter", "history.json")
)

DEFAULT_EXERCISE = "squats"

WINDOW_NAME = "Rep Counter"

# ============================================================================


class RepCounterApp:
    """
    Runs one workout session over a live video source.
    """

    def __init__(self,
                 exercise_id: str,
                 movenet_model_path: str,
                 history_path: str,
                 video_source="0",
                 require_confident_joints: bool = False):
        print("\n" + "=" * 70)
        print("🏋️  REP COUNTER")
        print("=" * 70 + "\n")

        if not os.path.exists(movenet_model_path):
            raise FileNotFoundError(f"MoveNet model not found at: {movenet_model_path}")

        self.session = WorkoutSession(
            exercise_id,
            engine=RepCountingEngine(require_confident_joints=require_confident_joints),
            history=WorkoutHistory(history_path),
        )
        if self.session.used_default_profile:
            print(f"⚠️ Unknown exercise '{exercise_id}', counting with the {self.session.profile.display_name} profile")

        self.pose_estimator = PoseEstimator(movenet_model_path)
        self.renderer = SkeletonRenderer()

        print(f"🎥 Opening video source: {video_source}")
        self.streamer = VideoStreamer(video_source)
        print(f"✅ Video opened: {self.streamer.width}x{self.streamer.height} @ {self.streamer.fps:.1f} FPS")

        self.processing_times = deque(maxlen=100)

    def _process_frame(self, frame: np.ndarray):
        start_time = time.time()
        try:
            keypoints = self.pose_estimator.estimate(frame)
            result = self.session.process(keypoints)
        except InvalidFrame as exc:
            print(f"⚠️ Skipping frame: {exc}")
            keypoints, result = None, None
        self.processing_times.append(time.time() - start_time)
        return keypoints, result

    def run(self, display: bool = True):
        """
        Main processing loop.
        """
        if display:
            cv2.namedWindow(WINDOW_NAME, cv2.WINDOW_NORMAL)

        print("▶️  COUNTING STARTED...")
        print("   • ESC = Exit")
        print("   • L = Log workout")
        print("   • R = Reset set\n")

        self.session.start()
        frame_count = 0
        start_time = time.time()
        last_fps_time = time.time()
        fps_frames = 0
        current_fps = 0.0

        self.streamer.start()

        try:
            while self.streamer.more():
                frame = self.streamer.read()
                if frame is None:
                    continue

                frame_count += 1
                keypoints, result = self._process_frame(frame)

                fps_frames += 1
                if time.time() - last_fps_time >= 1.0:
                    current_fps = fps_frames / (time.time() - last_fps_time)
                    fps_frames = 0
                    last_fps_time = time.time()

                if display:
                    output_frame = self.renderer.render(
                        frame, keypoints, self.session.display_name,
                        self.session.count, self.session.feedback, result, current_fps
                    )
                    cv2.imshow(WINDOW_NAME, output_frame)

                    key = cv2.waitKey(1) & 0xFF
                    if key == 27:  # ESC
                        print("\n⏹️  Stopped by user.")
                        break
                    elif key in (ord('l'), ord('L')):
                        self.session.log()
                    elif key in (ord('r'), ord('R')):
                        self.session.reset()
                        print("\n🔄 Set reset.")

                if frame_count % 30 == 0:
                    avg_process = np.mean(self.processing_times) * 1000 if self.processing_times else 0
                    print(f"Frame {frame_count:5d} | "
                          f"FPS: {current_fps:5.1f} | "
                          f"Process: {avg_process:5.1f}ms | "
                          f"Reps: {self.session.count}")

        except KeyboardInterrupt:
            print("\n⏹️  Interrupted by user.")

        finally:
            # Headless runs have no key to log with
            if not display and self.session.count > 0:
                self.session.log()

            total_time = time.time() - start_time
            avg_fps = frame_count / total_time if total_time > 0 else 0

            print("\n" + "=" * 70)
            print("📊 SESSION SUMMARY")
            print("=" * 70)
            print(f"Exercise: {self.session.display_name}")
            print(f"Reps in current set: {self.session.count}")
            print(f"Total frames processed: {frame_count}")
            print(f"Average FPS: {avg_fps:.2f}")
            print("=" * 70 + "\n")

            self.streamer.stop()
            if display:
                cv2.destroyAllWindows()


def print_history(history_path: str) -> int:
    try:
        entries = WorkoutHistory(history_path).entries()
    except HistoryStoreError as exc:
        print(f"❌ {exc}")
        return 1

    if not entries:
        print("No workouts logged yet.")
    for entry in entries:
        print(WorkoutHistory.format_entry(entry))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rep Counter: real-time exercise repetition counting"
    )

    parser.add_argument('--exercise', type=str, default=DEFAULT_EXERCISE,
                        help=f"Exercise id ({', '.join(available_exercises())})")
    parser.add_argument('--video', type=str, default=VIDEO_SOURCE,
                        help='Video file path or camera index')
    parser.add_argument('--model', type=str, default=MOVENET_MODEL_PATH,
                        help='Path to MoveNet SinglePose model')
    parser.add_argument('--history', type=str, default=HISTORY_PATH,
                        help='Path to workout history JSON file')
    parser.add_argument('--no-display', action='store_true',
                        help='Run without displaying video window')
    parser.add_argument('--require-confidence', action='store_true',
                        help='Skip frames where a counted joint has low confidence')
    parser.add_argument('--show-history', action='store_true',
                        help='Print logged workouts and exit')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Debug logging')
    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point with command-line argument parsing."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    if args.show_history:
        return print_history(args.history)

    try:
        app = RepCounterApp(
            exercise_id=args.exercise,
            movenet_model_path=args.model,
            history_path=args.history,
            video_source=args.video,
            require_confident_joints=args.require_confidence,
        )
        app.run(display=not args.no_display)

    except Exception as e:
        print(f"\n❌ Error: {str(e)}")
        import traceback
        traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
