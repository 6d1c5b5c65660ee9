"""
Performance Monitoring
=======================

Rolling FPS and per-stage timings for the game loop.
"""

import logging
import threading
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class PerformanceMetrics:
    """Snapshot of the loop's timings."""
    fps: float = 0.0
    frame_time_ms: float = 0.0
    capture_time_ms: float = 0.0
    detection_time_ms: float = 0.0
    game_time_ms: float = 0.0
    total_frames: int = 0
    slow_frames: int = 0


class PerformanceMonitor:
    """
    Tracks frame time and named stages over a rolling window.

    Example:
        >>> monitor = PerformanceMonitor()
        >>> monitor.frame_start()
        >>> with monitor.measure("detection"):
        ...     hands = detector.detect(frame.rgb)
        >>> monitor.frame_complete()
    """

    def __init__(self, window_size: int = 30, target_fps: float = 25.0):
        self.window_size = window_size
        self.target_fps = target_fps
        self._frame_times: deque = deque(maxlen=window_size)
        self._stage_times: Dict[str, deque] = {}
        self._frame_start: Optional[float] = None
        self._total_frames = 0
        self._slow_frames = 0
        self._lock = threading.Lock()

    def reset(self) -> None:
        with self._lock:
            self._frame_times.clear()
            self._stage_times.clear()
            self._total_frames = 0
            self._slow_frames = 0

    def frame_start(self) -> None:
        self._frame_start = time.perf_counter()

    def frame_complete(self) -> None:
        """Close the frame opened by frame_start()."""
        if self._frame_start is None:
            return

        frame_time = time.perf_counter() - self._frame_start
        with self._lock:
            self._frame_times.append(frame_time)
            self._total_frames += 1
            if frame_time > (1.0 / self.target_fps):
                self._slow_frames += 1
        self._frame_start = None

    @contextmanager
    def measure(self, stage: str):
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            with self._lock:
                if stage not in self._stage_times:
                    self._stage_times[stage] = deque(maxlen=self.window_size)
                self._stage_times[stage].append(elapsed)

    @property
    def fps(self) -> float:
        with self._lock:
            if not self._frame_times:
                return 0.0
            avg_frame_time = sum(self._frame_times) / len(self._frame_times)
        return 1.0 / avg_frame_time if avg_frame_time > 0 else 0.0

    @property
    def frame_time_ms(self) -> float:
        with self._lock:
            if not self._frame_times:
                return 0.0
            return (sum(self._frame_times) / len(self._frame_times)) * 1000

    def stage_time_ms(self, stage: str) -> float:
        with self._lock:
            times = self._stage_times.get(stage)
            if not times:
                return 0.0
            return (sum(times) / len(times)) * 1000

    def get_metrics(self) -> PerformanceMetrics:
        return PerformanceMetrics(
            fps=self.fps,
            frame_time_ms=self.frame_time_ms,
            capture_time_ms=self.stage_time_ms("capture"),
            detection_time_ms=self.stage_time_ms("detection"),
            game_time_ms=self.stage_time_ms("game"),
            total_frames=self._total_frames,
            slow_frames=self._slow_frames,
        )

    def get_report(self) -> str:
        m = self.get_metrics()
        return (
            f"FPS: {m.fps:.1f} (target: >={self.target_fps})\n"
            f"Frame time: {m.frame_time_ms:.1f}ms\n"
            f"  Capture: {m.capture_time_ms:.2f}ms\n"
            f"  Detection: {m.detection_time_ms:.2f}ms\n"
            f"  Game: {m.game_time_ms:.2f}ms\n"
            f"Frames: {m.total_frames} (slow: {m.slow_frames})\n"
        )
