"""
streamer.py - Threaded Video Streamer
=====================================
Reads capture frames on a background thread so pose inference on the
consuming loop never waits on camera I/O.
"""

import threading
from queue import Queue, Empty, Full
from typing import Optional, Union

import cv2
import numpy as np


def parse_source(source: Union[str, int]) -> Union[str, int]:
    """Camera indices arrive from the CLI as strings ("0")."""
    if isinstance(source, str) and source.isdigit():
        return int(source)
    return source


class VideoStreamer:
    """
    Reads frames from a video file or camera on a separate thread.
    Frames go through a bounded queue; for live cameras the oldest frame is
    dropped when the consumer falls behind.
    """

    def __init__(self, source: Union[str, int] = 0, queue_size: int = 8, capture=None):
        self.source = parse_source(source)
        self.cap = capture if capture is not None else cv2.VideoCapture(self.source)

        if not self.cap.isOpened():
            raise RuntimeError(f"Failed to open video source: {source}")

        self.width = int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        self.height = int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        self.fps = self.cap.get(cv2.CAP_PROP_FPS) or 30.0
        self.is_live = isinstance(self.source, int)

        self.queue = Queue(maxsize=queue_size)
        self._stop_event = threading.Event()
        self.thread = None

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def start(self) -> "VideoStreamer":
        """Start the background frame reading thread."""
        if self.thread is not None:
            return self

        self._stop_event.clear()
        self.thread = threading.Thread(target=self._update, name="StreamerThread", daemon=True)
        self.thread.start()
        return self

    def _update(self):
        while not self._stop_event.is_set():
            ret, frame = self.cap.read()
            if not ret:
                break
            self._put(frame)
        self._stop_event.set()
        self.cap.release()

    def _put(self, frame: np.ndarray):
        while not self._stop_event.is_set():
            try:
                self.queue.put(frame, timeout=0.05)
                return
            except Full:
                if self.is_live:
                    try:
                        self.queue.get_nowait()
                    except Empty:
                        pass

    def read(self, timeout: float = 1.0) -> Optional[np.ndarray]:
        """Read the next frame, or None if none arrived within timeout."""
        try:
            return self.queue.get(timeout=timeout)
        except Empty:
            return None

    def more(self) -> bool:
        """True while frames are queued or the reader is still running."""
        return not self.queue.empty() or not self.stopped

    def stop(self):
        """Stop the background thread and release the capture."""
        self._stop_event.set()
        if self.thread:
            self.thread.join(timeout=2.0)
            self.thread = None
        if self.cap.isOpened():
            self.cap.release()

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()
