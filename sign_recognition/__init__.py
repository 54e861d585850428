"""
Sign Gesture Recognition
Classifies static and short-motion hand poses into a fixed vocabulary of sign-language gestures.
"""

from .gesture_classifier import (DEFAULT_GESTURE_RULES, GestureClassifier, GestureResult,
                                 GestureRule, GestureType, detect_gestures, with_overrides)
from .hand_tracker import HandTracker
from .landmarks import HandFrame
from .sign_interface import SignInterface
from .speech import SpeechAnnouncer

__version__ = "1.0.0"
__all__ = [
    "GestureClassifier",
    "GestureResult",
    "GestureRule",
    "GestureType",
    "DEFAULT_GESTURE_RULES",
    "detect_gestures",
    "with_overrides",
    "HandFrame",
    "HandTracker",
    "SignInterface",
    "SpeechAnnouncer",
]
