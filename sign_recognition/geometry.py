"""
Geometric primitives over hand landmarks.

All functions take points as (x, y, z) arrays in normalized image space. Missing
landmarks are NaN rows; comparisons against NaN are false, so predicates built
from these helpers fail closed instead of raising.
"""

import numpy as np

from .landmarks import WRIST

EXTENSION_RATIO = 1.1
TOGETHER_THRESHOLD = 0.05


def distance(p1: np.ndarray, p2: np.ndarray) -> float:
    """Euclidean distance between two 3D points."""
    return float(np.linalg.norm(np.asarray(p1, dtype=float) - np.asarray(p2, dtype=float)))


def angle(p1: np.ndarray, p2: np.ndarray, p3: np.ndarray) -> float:
    """
    Angle at vertex p2 between the rays p2->p1 and p2->p3, in degrees.

    Returns NaN when either ray has zero length.
    """
    v1 = np.asarray(p1, dtype=float) - np.asarray(p2, dtype=float)
    v2 = np.asarray(p3, dtype=float) - np.asarray(p2, dtype=float)
    mag = np.linalg.norm(v1) * np.linalg.norm(v2)
    if mag == 0:
        return float('nan')
    cos = np.clip(np.dot(v1, v2) / mag, -1.0, 1.0)
    return float(np.degrees(np.arccos(cos)))


def is_finger_extended(points: np.ndarray, tip: int, pip: int,
                       ratio: float = EXTENSION_RATIO) -> bool:
    """True if the tip is farther from the wrist than ratio times the PIP joint."""
    wrist = points[WRIST]
    return bool(distance(wrist, points[tip]) > distance(wrist, points[pip]) * ratio)


def is_finger_closed(points: np.ndarray, tip: int, pip: int,
                     ratio: float = EXTENSION_RATIO) -> bool:
    """Complement of is_finger_extended; false as well when a landmark is missing."""
    wrist = points[WRIST]
    return bool(distance(wrist, points[tip]) <= distance(wrist, points[pip]) * ratio)


def are_fingers_together(points: np.ndarray, tip_a: int, tip_b: int,
                         threshold: float = TOGETHER_THRESHOLD) -> bool:
    return bool(distance(points[tip_a], points[tip_b]) < threshold)
