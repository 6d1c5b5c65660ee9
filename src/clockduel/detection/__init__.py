"""Hand landmark types; the MediaPipe-backed detector lives in hand_detector."""
from .landmarks import HandLandmarks, Handedness, Landmark, LandmarkIndex, NUM_LANDMARKS

__all__ = ["HandLandmarks", "Handedness", "Landmark", "LandmarkIndex", "NUM_LANDMARKS"]
