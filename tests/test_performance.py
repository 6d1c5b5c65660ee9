"""
Tests for Performance Module
=============================
"""

import sys
import time
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from clockduel.utils.performance import PerformanceMonitor


class TestPerformanceMonitor:
    """Test suite for PerformanceMonitor class."""

    @pytest.fixture
    def monitor(self):
        return PerformanceMonitor(window_size=5)

    def test_empty_monitor(self, monitor):
        assert monitor.fps == 0.0
        assert monitor.frame_time_ms == 0.0
        assert monitor.stage_time_ms("detection") == 0.0

    def test_fps_calculation(self, monitor):
        for _ in range(5):
            monitor.frame_start()
            time.sleep(0.02)
            monitor.frame_complete()

        assert 10 < monitor.fps < 55

    def test_stage_timing(self, monitor):
        for _ in range(3):
            monitor.frame_start()
            with monitor.measure("capture"):
                time.sleep(0.002)
            with monitor.measure("detection"):
                time.sleep(0.01)
            monitor.frame_complete()

        assert monitor.stage_time_ms("detection") >= 9
        assert monitor.stage_time_ms("detection") > monitor.stage_time_ms("capture")

    def test_complete_without_start_is_ignored(self, monitor):
        monitor.frame_complete()
        assert monitor.get_metrics().total_frames == 0

    def test_slow_frames_counted(self):
        monitor = PerformanceMonitor(target_fps=100)
        monitor.frame_start()
        time.sleep(0.02)
        monitor.frame_complete()
        assert monitor.get_metrics().slow_frames == 1

    def test_report_and_reset(self, monitor):
        monitor.frame_start()
        with monitor.measure("game"):
            pass
        monitor.frame_complete()

        report = monitor.get_report()
        assert "FPS" in report
        assert "Game" in report

        monitor.reset()
        assert monitor.get_metrics().total_frames == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
