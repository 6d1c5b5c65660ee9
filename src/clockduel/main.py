"""
Clock Duel - Main Application
==============================

Two players, one webcam: each player points the right hand to set the hour
and the left hand to set the minute, racing to match the target clock.

Loop per frame: fire due round transitions -> capture -> detect hands ->
controller -> HUD.
"""

import argparse
import logging
import signal
import sys
from dataclasses import dataclass
from typing import Optional

import cv2

from .capture.camera import Camera, CameraConfig
from .detection.hand_detector import HandDetector, HandDetectorConfig
from .game.controller import GameConfig, MatchController
from .game.judge import JudgePolicy
from .game.scheduler import RoundScheduler
from .utils.config import load_config
from .utils.logger import MatchLogger, setup_logging
from .utils.performance import PerformanceMonitor
from .utils.visualization import Visualizer, VisualizerConfig

logger = logging.getLogger(__name__)

WINDOW_NAME = "Clock Duel"
STATUS_CAMERA_FAILED = "Camera access failed. Allow camera permissions."


@dataclass
class AppConfig:
    """Application configuration container."""
    camera: CameraConfig
    mediapipe: HandDetectorConfig
    game: GameConfig
    visualization: VisualizerConfig
    performance_target_fps: float = 25.0


def create_app_config(config_dict: dict, mode: Optional[str] = None) -> AppConfig:
    """Build typed configs; mode ("duel"/"coop") overrides game.policy."""
    game = dict(config_dict.get("game", {}))
    if mode:
        game["policy"] = mode
    return AppConfig(
        camera=CameraConfig.from_dict(config_dict.get("camera", {})),
        mediapipe=HandDetectorConfig.from_dict(config_dict.get("mediapipe", {})),
        game=GameConfig.from_dict(game),
        visualization=VisualizerConfig.from_dict(config_dict.get("visualization", {})),
        performance_target_fps=config_dict.get("performance", {}).get("target_fps", 25.0),
    )


class ClockDuelApplication:
    """
    Wires camera, detector, controller and HUD together.

    Keyboard:
        n      - skip to a new target
        r      - restart the match
        p      - log performance report
        q/ESC  - quit
    """

    def __init__(self, config: AppConfig):
        self.config = config

        self.camera = Camera(config.camera)
        self.detector = HandDetector(config.mediapipe)
        self.scheduler = RoundScheduler()
        self.controller = MatchController(config.game, scheduler=self.scheduler)
        self.match_log = MatchLogger(self.controller.bus)
        self.visualizer = Visualizer(config.visualization)
        self.performance = PerformanceMonitor(target_fps=config.performance_target_fps)

        self._running = False

    def start(self) -> bool:
        logger.info("Starting Clock Duel (%s mode)...", self.controller.policy.value)

        if not self.camera.start() or not self.detector.start():
            self.controller.status = STATUS_CAMERA_FAILED
            logger.error(STATUS_CAMERA_FAILED)
            self.camera.stop()
            return False

        self.controller.start()
        self._running = True
        return True

    def stop(self) -> None:
        self._running = False
        self.scheduler.cancel_all()
        self.camera.stop()
        self.detector.stop()
        cv2.destroyAllWindows()
        logger.info("Clock Duel stopped after %d rounds", self.match_log.total_rounds)

    def run(self) -> int:
        if not self.start():
            return 1

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

        try:
            self._main_loop()
        finally:
            self.stop()
        return 0

    def _main_loop(self) -> None:
        while self._running:
            self.scheduler.run_due()

            with self.performance.measure("capture"):
                frame = self.camera.read()

            if frame is None:
                self._handle_key(cv2.waitKey(1) & 0xFF)
                continue

            self.performance.frame_start()

            with self.performance.measure("detection"):
                hands = self.detector.detect(frame.rgb, frame.timestamp_ms)

            with self.performance.measure("game"):
                self.controller.on_results(hands)

            display = frame.image
            self.visualizer.draw_hands(display, hands)
            self.visualizer.draw_game(display, self.controller.snapshot(),
                                      split_x=self.config.game.player_split_x)
            self.visualizer.draw_performance(display, self.performance.fps)
            cv2.imshow(WINDOW_NAME, display)

            self.performance.frame_complete()
            self._handle_key(cv2.waitKey(1) & 0xFF)

    def _handle_key(self, key: int) -> None:
        if key in (ord('q'), 27):
            self._running = False
        elif key == ord('n'):
            self.controller.skip_round()
        elif key == ord('r'):
            self.controller.reset_match()
        elif key == ord('p'):
            logger.info("Performance report:\n%s", self.performance.get_report())

    def _signal_handler(self, signum, frame) -> None:
        logger.info("Received signal %d, shutting down...", signum)
        self._running = False


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Clock Duel - set the clock with your hands",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Modes:
  duel  - first player to match the target scores; first to 10 wins
  coop  - both players must match the target together

Controls:
  Right hand sets the hour, left hand sets the minute.
  n skip target | r restart | p performance | q/ESC quit
        """,
    )
    parser.add_argument("--mode", "-m", choices=[p.value for p in JudgePolicy],
                        default=None, help="Game mode (overrides config)")
    parser.add_argument("--config", "-c", default=None, help="Path to configuration file")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", default=None, help="Also log to this rotating file")
    args = parser.parse_args(argv)

    config_dict = load_config(args.config)
    log_cfg = config_dict.get("logging", {})
    setup_logging(
        level="DEBUG" if args.debug else log_cfg.get("level", "INFO"),
        log_file=args.log_file or log_cfg.get("file"),
        max_size_mb=log_cfg.get("max_size_mb", 10),
        backup_count=log_cfg.get("backup_count", 3),
    )

    try:
        app_config = create_app_config(config_dict, args.mode)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    return ClockDuelApplication(app_config).run()


if __name__ == "__main__":
    sys.exit(main())
