"""
Per-frame hand features shared by every gesture detector.

Finger states and thumb distances are computed once per frame here instead of
inside each detector.
"""

from dataclasses import dataclass
from typing import Dict

import numpy as np

from .geometry import EXTENSION_RATIO, distance, is_finger_closed, is_finger_extended
from .landmarks import FINGER_JOINTS, HAND_CENTER, THUMB_IP, THUMB_TIP, WRIST

# Thumb counts as "closed" below this multiple of the IP-to-wrist distance.
THUMB_CLOSED_RATIO = 1.3


@dataclass(frozen=True)
class HandFeatures:
    """Finger extension states and key distances for a single hand frame."""

    points: np.ndarray
    extended: Dict[str, bool]
    closed: Dict[str, bool]
    thumb_tip_dist: float
    thumb_ip_dist: float

    @property
    def thumb_extended(self) -> bool:
        return bool(self.thumb_tip_dist > self.thumb_ip_dist)

    @property
    def thumb_closed(self) -> bool:
        return bool(self.thumb_tip_dist < self.thumb_ip_dist * THUMB_CLOSED_RATIO)

    @property
    def center(self) -> np.ndarray:
        return self.points[HAND_CENTER]

    def point(self, idx: int) -> np.ndarray:
        return self.points[idx]

    def dist(self, a: int, b: int) -> float:
        return distance(self.points[a], self.points[b])

    def all_extended(self, *fingers: str) -> bool:
        return all(self.extended[f] for f in fingers)

    def all_closed(self, *fingers: str) -> bool:
        return all(self.closed[f] for f in fingers)


def extract_features(points: np.ndarray, extension_ratio: float = EXTENSION_RATIO) -> HandFeatures:
    """
    Compute finger states for a (21, 3) landmark array.

    Args:
        points: Landmark array, NaN rows for missing landmarks
        extension_ratio: Tip/PIP wrist-distance ratio above which a finger is extended

    Returns:
        HandFeatures for the frame
    """
    extended = {}
    closed = {}
    for finger, (tip, pip) in FINGER_JOINTS.items():
        extended[finger] = is_finger_extended(points, tip, pip, extension_ratio)
        closed[finger] = is_finger_closed(points, tip, pip, extension_ratio)

    wrist = points[WRIST]
    return HandFeatures(
        points=points,
        extended=extended,
        closed=closed,
        thumb_tip_dist=distance(points[THUMB_TIP], wrist),
        thumb_ip_dist=distance(points[THUMB_IP], wrist),
    )
