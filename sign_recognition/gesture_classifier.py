"""
Gesture classification module for recognizing sign-language gestures from hand landmarks.

Every gesture is a rule: a boolean detector over the per-frame hand features, the
fixed confidence it reports when the detector holds, and the emit threshold that
confidence must exceed to be reported. Rules are independent and several may fire
on the same frame.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from functools import partial
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import numpy as np

from .config import GESTURE_CONFIG
from .features import HandFeatures, extract_features
from .geometry import are_fingers_together
from .landmarks import (HAND_CENTER, INDEX_MCP, INDEX_PIP, INDEX_TIP, MIDDLE_TIP, NUM_LANDMARKS,
                        PINKY_MCP, PINKY_TIP, RING_TIP, THUMB_IP, THUMB_MCP, THUMB_TIP, WRIST,
                        HandFrame, to_array)

logger = logging.getLogger(__name__)

FOUR_FINGERS = ('index', 'middle', 'ring', 'pinky')


class GestureType(Enum):
    """Enumeration of supported gestures. Values are the published labels."""
    HELLO = "HELLO"
    THANK_YOU = "THANK YOU"
    YES = "YES/DONE"
    NO = "NO"
    I_LOVE_YOU = "I LOVE YOU"
    PLEASE = "PLEASE"
    EMERGENCY = "EMERGENCY"
    HOW_ARE_YOU = "HOW ARE YOU"
    I_AM_GOOD = "I AM GOOD/FINE"
    SORRY = "SORRY"
    STOP = "STOP"
    GO = "GO"
    DANGER = "DANGER"
    FOOD = "FOOD/HUNGRY"
    WATER = "WATER/THIRSTY"
    CALL = "CALL/PHONE"


@dataclass(frozen=True)
class GestureResult:
    """A recognized gesture and its confidence."""
    gesture: GestureType
    confidence: float

    @property
    def label(self) -> str:
        return self.gesture.value

    def as_dict(self) -> Dict[str, Any]:
        return {'gesture': self.label, 'confidence': self.confidence}


Detector = Callable[[HandFeatures, Optional[np.ndarray]], bool]
Bonus = Callable[[HandFeatures, Optional[np.ndarray]], float]


@dataclass(frozen=True)
class GestureRule:
    """
    One entry of the gesture table.

    Attributes:
        gesture: Gesture reported by this rule
        detector: Predicate over the current hand features and previous landmarks
        threshold: Confidence must be strictly above this to be emitted
        confidence: Fixed confidence reported when the detector holds
        bonus: Optional extra confidence added when the detector holds
    """
    gesture: GestureType
    detector: Detector
    threshold: float
    confidence: float
    bonus: Optional[Bonus] = None

    def __post_init__(self):
        for name in ('threshold', 'confidence'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{self.gesture.value}: {name} must be within [0, 1], got {value}")

    def evaluate(self, hand: HandFeatures, previous: Optional[np.ndarray] = None) -> GestureResult:
        if not self.detector(hand, previous):
            return GestureResult(self.gesture, 0.0)
        confidence = self.confidence
        if self.bonus is not None:
            confidence += self.bonus(hand, previous)
        return GestureResult(self.gesture, min(1.0, confidence))


# Detectors

def _palm_upright(hand: HandFeatures) -> bool:
    return bool(hand.point(WRIST)[1] > hand.center[1])


def detect_hello(hand: HandFeatures, previous=None) -> bool:
    """Open hand with the palm above the wrist."""
    return hand.all_extended(*FOUR_FINGERS) and _palm_upright(hand)


def wave_bonus(hand: HandFeatures, previous: Optional[np.ndarray],
               threshold: float = 0.02, bonus: float = 0.3) -> float:
    """Extra confidence when the hand center moved sideways since the previous frame."""
    if previous is None:
        return 0.0
    x_movement = abs(hand.center[0] - previous[HAND_CENTER][0])
    return bonus if x_movement > threshold else 0.0


def detect_thank_you(hand: HandFeatures, previous=None) -> bool:
    """Flat hand raised to mouth height."""
    near_mouth = hand.center[1] < 0.4
    return hand.all_extended(*FOUR_FINGERS) and bool(near_mouth) and _palm_upright(hand)


def detect_yes(hand: HandFeatures, previous=None) -> bool:
    """Thumbs up."""
    tip_y, ip_y, mcp_y = (hand.point(i)[1] for i in (THUMB_TIP, THUMB_IP, THUMB_MCP))
    pointing_up = tip_y < ip_y < mcp_y
    return hand.thumb_extended and hand.all_closed(*FOUR_FINGERS) and bool(pointing_up)


def detect_no(hand: HandFeatures, previous=None) -> bool:
    """Index and middle held together, thumb out."""
    return (are_fingers_together(hand.points, INDEX_TIP, MIDDLE_TIP, 0.04)
            and hand.all_extended('index', 'middle')
            and hand.thumb_extended
            and hand.all_closed('ring', 'pinky'))


def detect_i_love_you(hand: HandFeatures, previous=None) -> bool:
    return (hand.thumb_extended
            and hand.all_extended('index', 'pinky')
            and hand.all_closed('middle', 'ring'))


def detect_please(hand: HandFeatures, previous=None) -> bool:
    """Flat hand at chest height."""
    near_chest = 0.5 < hand.center[1] < 0.8
    palm_flat = abs(hand.point(INDEX_MCP)[2] - hand.point(PINKY_MCP)[2]) < 0.05
    return hand.all_extended(*FOUR_FINGERS) and bool(near_chest) and bool(palm_flat)


def detect_emergency(hand: HandFeatures, previous=None) -> bool:
    """Raised hand with fingers spread."""
    hand_raised = hand.center[1] < 0.3
    fingers_spread = (hand.dist(INDEX_TIP, MIDDLE_TIP) > 0.08
                      and hand.dist(MIDDLE_TIP, RING_TIP) > 0.08
                      and hand.dist(RING_TIP, PINKY_TIP) > 0.08)
    return hand.all_extended(*FOUR_FINGERS) and bool(hand_raised) and fingers_spread


def detect_how_are_you(hand: HandFeatures, previous=None) -> bool:
    """Index finger pointing toward the camera."""
    pointing_forward = hand.point(INDEX_TIP)[2] < hand.point(INDEX_MCP)[2] - 0.05
    return (hand.extended['index']
            and hand.all_closed('middle', 'ring', 'pinky')
            and bool(pointing_forward))


def detect_i_am_good(hand: HandFeatures, previous=None,
                     threshold: float = 0.05) -> bool:
    """Thumb and index form an O, other fingers extended."""
    o_shape = are_fingers_together(hand.points, THUMB_TIP, INDEX_TIP, threshold)
    return o_shape and hand.all_extended('middle', 'ring', 'pinky')


def detect_sorry(hand: HandFeatures, previous=None) -> bool:
    """Fist at chest height."""
    near_chest = 0.5 < hand.center[1] < 0.8
    return hand.all_closed(*FOUR_FINGERS) and bool(near_chest)


def detect_stop(hand: HandFeatures, previous=None) -> bool:
    """Only the pinky raised."""
    return (hand.extended['pinky']
            and hand.all_closed('index', 'middle', 'ring')
            and hand.thumb_closed)


def detect_go(hand: HandFeatures, previous=None) -> bool:
    """Only the index finger raised, pointing up."""
    pointing_up = hand.point(INDEX_TIP)[1] < hand.point(INDEX_PIP)[1]
    return (hand.extended['index']
            and hand.all_closed('middle', 'ring', 'pinky')
            and hand.thumb_closed
            and bool(pointing_up))


def detect_danger(hand: HandFeatures, previous=None) -> bool:
    """Index and middle crossed tightly."""
    crossed = are_fingers_together(hand.points, INDEX_TIP, MIDDLE_TIP, 0.03)
    x_aligned = abs(hand.point(INDEX_TIP)[0] - hand.point(MIDDLE_TIP)[0]) < 0.03
    return (hand.all_extended('index', 'middle')
            and hand.all_closed('ring', 'pinky')
            and crossed
            and bool(x_aligned))


def detect_food(hand: HandFeatures, previous=None) -> bool:
    """Fingertips pinched together near the mouth."""
    pinched = (are_fingers_together(hand.points, THUMB_TIP, INDEX_TIP, 0.04)
               and are_fingers_together(hand.points, INDEX_TIP, MIDDLE_TIP, 0.04)
               and are_fingers_together(hand.points, MIDDLE_TIP, RING_TIP, 0.04))
    index_y = hand.point(INDEX_TIP)[1]
    return pinched and bool(index_y < 0.4) and bool(index_y < hand.point(WRIST)[1])


def detect_water(hand: HandFeatures, previous=None) -> bool:
    """Thumb out pointing down or sideways, other fingers folded."""
    tip_y = hand.point(THUMB_TIP)[1]
    mcp_y = hand.point(THUMB_MCP)[1]
    downward = tip_y > mcp_y
    horizontal = abs(tip_y - mcp_y) < 0.1
    return (hand.thumb_extended
            and hand.all_closed(*FOUR_FINGERS)
            and bool(downward or horizontal))


def is_near_ear(hand: HandFeatures) -> bool:
    x, y = hand.center[0], hand.center[1]
    return bool(y < 0.5 and (x < 0.3 or x > 0.7))


def detect_call(hand: HandFeatures, previous=None, require_near_ear: bool = False) -> bool:
    """Thumb and pinky out like a handset."""
    shape = (hand.thumb_extended
             and hand.extended['pinky']
             and hand.all_closed('index', 'middle', 'ring'))
    if require_near_ear:
        return shape and is_near_ear(hand)
    return shape


def build_default_rules(config: Optional[Mapping[str, Any]] = None) -> List[GestureRule]:
    """
    Build the gesture table.

    Args:
        config: Gesture settings, defaults to GESTURE_CONFIG

    Returns:
        Rules in evaluation order
    """
    cfg = dict(GESTURE_CONFIG)
    if config:
        cfg.update(config)

    wave = partial(wave_bonus, threshold=cfg['wave_motion_threshold'], bonus=cfg['wave_bonus'])
    i_am_good = partial(detect_i_am_good, threshold=cfg['fingers_together_threshold'])
    call = partial(detect_call, require_near_ear=cfg['call_requires_near_ear'])

    return [
        GestureRule(GestureType.HELLO, detect_hello, 0.6, 0.7, bonus=wave),
        GestureRule(GestureType.THANK_YOU, detect_thank_you, 0.7, 0.85),
        GestureRule(GestureType.YES, detect_yes, 0.75, 0.9),
        GestureRule(GestureType.NO, detect_no, 0.7, 0.85),
        GestureRule(GestureType.I_LOVE_YOU, detect_i_love_you, 0.7, 0.85),
        GestureRule(GestureType.PLEASE, detect_please, 0.65, 0.75),
        GestureRule(GestureType.EMERGENCY, detect_emergency, 0.7, 0.8),
        GestureRule(GestureType.HOW_ARE_YOU, detect_how_are_you, 0.7, 0.8),
        GestureRule(GestureType.I_AM_GOOD, i_am_good, 0.7, 0.85),
        GestureRule(GestureType.SORRY, detect_sorry, 0.65, 0.75),
        GestureRule(GestureType.STOP, detect_stop, 0.8, 0.9),
        GestureRule(GestureType.GO, detect_go, 0.8, 0.9),
        GestureRule(GestureType.DANGER, detect_danger, 0.7, 0.85),
        GestureRule(GestureType.FOOD, detect_food, 0.7, 0.8),
        GestureRule(GestureType.WATER, detect_water, 0.75, 0.85),
        GestureRule(GestureType.CALL, call, 0.7, 0.8),
    ]


# Table as configured at import time. GestureClassifier() rebuilds from the
# current GESTURE_CONFIG instead.
DEFAULT_GESTURE_RULES = build_default_rules()


def with_overrides(rules: Sequence[GestureRule],
                   thresholds: Optional[Mapping[str, float]] = None,
                   confidences: Optional[Mapping[str, float]] = None) -> List[GestureRule]:
    """
    Copy a gesture table with thresholds and/or confidences replaced.

    Args:
        rules: Source gesture table
        thresholds: Label -> new emit threshold
        confidences: Label -> new fixed confidence

    Returns:
        New list of rules; the source table is unchanged
    """
    thresholds = dict(thresholds or {})
    confidences = dict(confidences or {})
    known = {rule.gesture.value for rule in rules}
    unknown = (set(thresholds) | set(confidences)) - known
    if unknown:
        raise ValueError(f"Unknown gesture label(s): {', '.join(sorted(unknown))}")

    updated = []
    for rule in rules:
        label = rule.gesture.value
        updated.append(replace(rule,
                               threshold=thresholds.get(label, rule.threshold),
                               confidence=confidences.get(label, rule.confidence)))
    return updated


def _as_points(landmarks) -> Optional[np.ndarray]:
    if landmarks is None:
        return None
    if isinstance(landmarks, HandFrame):
        return landmarks.points
    try:
        return to_array(landmarks)
    except TypeError:
        return None


class GestureClassifier:
    """Rule-based classifier for sign gestures."""

    def __init__(self, rules: Optional[Sequence[GestureRule]] = None,
                 extension_ratio: Optional[float] = None):
        """
        Initialize the gesture classifier.

        Args:
            rules: Gesture table, built from the current GESTURE_CONFIG when omitted
            extension_ratio: Override for GESTURE_CONFIG['extension_ratio']
        """
        self.rules = list(build_default_rules() if rules is None else rules)
        self.extension_ratio = (GESTURE_CONFIG['extension_ratio']
                                if extension_ratio is None else extension_ratio)

    def _prepare(self, landmarks, previous_landmarks):
        points = _as_points(landmarks)
        if points is None or points.shape[0] != NUM_LANDMARKS:
            logger.debug("Rejecting hand frame with %s landmarks",
                         None if points is None else points.shape[0])
            return None, None
        previous = _as_points(previous_landmarks)
        if previous is not None and previous.shape[0] != NUM_LANDMARKS:
            previous = None
        return extract_features(points, self.extension_ratio), previous

    def evaluate_all(self, landmarks, previous_landmarks=None) -> List[GestureResult]:
        """
        Evaluate every rule without thresholding.

        Returns:
            One result per rule in table order, empty for an invalid frame
        """
        hand, previous = self._prepare(landmarks, previous_landmarks)
        if hand is None:
            return []
        return [rule.evaluate(hand, previous) for rule in self.rules]

    def detect_gestures(self, landmarks, handedness: str = 'Unknown',
                        previous_landmarks=None) -> List[GestureResult]:
        """
        Detect every gesture whose confidence clears its threshold.

        Args:
            landmarks: 21 hand landmarks or a HandFrame
            handedness: "Left", "Right" or "Unknown"
            previous_landmarks: Landmarks of the same hand in the previous frame

        Returns:
            Results sorted by descending confidence, ties in table order
        """
        hand, previous = self._prepare(landmarks, previous_landmarks)
        if hand is None:
            return []

        results = []
        for rule in self.rules:
            result = rule.evaluate(hand, previous)
            if result.confidence > rule.threshold:
                results.append(result)

        results.sort(key=lambda r: r.confidence, reverse=True)
        if results:
            logger.debug("%s hand: %s", handedness,
                         ", ".join(f"{r.label}={r.confidence:.2f}" for r in results))
        return results

    def classify_gesture(self, landmarks, handedness: str = 'Unknown',
                         previous_landmarks=None) -> Optional[GestureResult]:
        """Return the highest-confidence gesture, or None."""
        results = self.detect_gestures(landmarks, handedness, previous_landmarks)
        return results[0] if results else None

    def get_gesture_labels(self) -> List[str]:
        return [rule.gesture.value for rule in self.rules]


def detect_gestures(landmarks, handedness: str = 'Unknown', previous_landmarks=None,
                    rules: Optional[Sequence[GestureRule]] = None) -> List[GestureResult]:
    """Detect gestures with the table from the current GESTURE_CONFIG, or with `rules`."""
    return GestureClassifier(rules).detect_gestures(landmarks, handedness, previous_landmarks)
