"""
pokegesture - edge-triggered poke gesture detection from hand joint poses.
"""
from .joints import (
    Finger,
    HandSnapshot,
    Handedness,
    JointId,
    JointSample,
    UpdateSuccessFlags,
    UpdateType,
)
from .classifier import FingerStates, classify_fingers, is_finger_extended, is_poking
from .events import GestureEvent
from .source import HandTrackingSource, ManualHandSource
from .detector import GestureEdge, PokeGestureDetector, create_detectors
from .config import Config, load_config

__version__ = "0.1.0"

__all__ = [
    'Finger',
    'HandSnapshot',
    'Handedness',
    'JointId',
    'JointSample',
    'UpdateSuccessFlags',
    'UpdateType',
    'FingerStates',
    'classify_fingers',
    'is_finger_extended',
    'is_poking',
    'GestureEvent',
    'HandTrackingSource',
    'ManualHandSource',
    'GestureEdge',
    'PokeGestureDetector',
    'create_detectors',
    'Config',
    'load_config',
]
