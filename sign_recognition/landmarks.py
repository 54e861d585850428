"""
Hand landmark indexing and conversion of detector output into arrays.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence

import numpy as np

NUM_LANDMARKS = 21

WRIST = 0
THUMB_CMC, THUMB_MCP, THUMB_IP, THUMB_TIP = 1, 2, 3, 4
INDEX_MCP, INDEX_PIP, INDEX_DIP, INDEX_TIP = 5, 6, 7, 8
MIDDLE_MCP, MIDDLE_PIP, MIDDLE_DIP, MIDDLE_TIP = 9, 10, 11, 12
RING_MCP, RING_PIP, RING_DIP, RING_TIP = 13, 14, 15, 16
PINKY_MCP, PINKY_PIP, PINKY_DIP, PINKY_TIP = 17, 18, 19, 20

# Middle finger MCP is used as the hand center.
HAND_CENTER = MIDDLE_MCP

# (tip, pip) pairs for the four non-thumb fingers
FINGER_JOINTS = {
    'index': (INDEX_TIP, INDEX_PIP),
    'middle': (MIDDLE_TIP, MIDDLE_PIP),
    'ring': (RING_TIP, RING_PIP),
    'pinky': (PINKY_TIP, PINKY_PIP),
}

_MISSING = (np.nan, np.nan, np.nan)


def _coerce_point(landmark: Any):
    """Return an (x, y, z) tuple of floats, NaN where the landmark is unusable."""
    if landmark is None:
        return _MISSING
    try:
        if isinstance(landmark, dict):
            return (float(landmark['x']), float(landmark['y']), float(landmark.get('z', 0.0)))
        if hasattr(landmark, 'x') and hasattr(landmark, 'y'):
            return (float(landmark.x), float(landmark.y), float(getattr(landmark, 'z', 0.0)))
        values = [float(v) for v in landmark]
    except (KeyError, TypeError, ValueError):
        return _MISSING
    if len(values) == 2:
        return (values[0], values[1], 0.0)
    if len(values) == 3:
        return tuple(values)
    return _MISSING


def to_array(landmarks: Sequence[Any]) -> np.ndarray:
    """
    Convert landmarks into an (N, 3) float array.

    Accepts dicts with 'x'/'y'/'z' keys, 2- or 3-element sequences, or objects
    exposing x/y/z attributes (MediaPipe NormalizedLandmark). Entries that cannot
    be read become NaN rows so any predicate touching them evaluates false.

    Args:
        landmarks: Sequence of landmark-like values

    Returns:
        Array of shape (len(landmarks), 3)
    """
    if isinstance(landmarks, np.ndarray) and np.issubdtype(landmarks.dtype, np.number):
        arr = landmarks.astype(float)
        if arr.ndim == 2 and arr.shape[1] in (2, 3):
            if arr.shape[1] == 2:
                arr = np.hstack([arr, np.zeros((arr.shape[0], 1))])
            return arr
        landmarks = list(landmarks)
    points = [_coerce_point(lm) for lm in landmarks]
    if not points:
        return np.empty((0, 3))
    return np.array(points, dtype=float)


@dataclass(frozen=True, eq=False)
class HandFrame:
    """One detected hand in one captured frame. Compared by identity."""

    points: np.ndarray  # shape (21, 3)
    handedness: str = 'Unknown'
    handedness_score: Optional[float] = None

    @classmethod
    def from_landmarks(cls, landmarks: Sequence[Any], handedness: Optional[str] = None,
                       handedness_score: Optional[float] = None) -> 'HandFrame':
        return cls(points=to_array(landmarks),
                   handedness=handedness or 'Unknown',
                   handedness_score=handedness_score)

    @property
    def is_valid(self) -> bool:
        return self.points.shape[0] == NUM_LANDMARKS

    def as_dicts(self):
        """Landmarks as a list of {'x', 'y', 'z'} dicts."""
        return [{'x': float(x), 'y': float(y), 'z': float(z)} for x, y, z in self.points]
