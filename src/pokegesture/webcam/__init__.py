"""
pokegesture webcam module

Hand tracking source backed by MediaPipe, plus a Qt worker.
HandTracker and DetectorWorker are imported from their modules directly
so that importing this package does not require MediaPipe or PyQt5.
"""
from .landmarks import HandLandmarks, MEDIAPIPE_JOINTS

__all__ = [
    'HandLandmarks',
    'MEDIAPIPE_JOINTS',
]
