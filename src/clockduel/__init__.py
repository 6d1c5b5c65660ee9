"""
Clock Duel
===========

A two-player webcam reflex game: each player sets the hour with the right
hand and the minute with the left hand, racing to match a target clock.

Modules:
    - capture: Camera frame acquisition (selfie mode)
    - detection: MediaPipe hand landmark detection
    - recognition: Hand angle -> clock reading, per-player state
    - game: Round judging, target pool, scheduling, match controller
    - utils: Logging, configuration, performance, HUD
"""

__version__ = "1.0.0"
