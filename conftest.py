"""
Synthetic hand landmark fixtures.

Hands are built upright: fingers point toward smaller image y. Extended fingers
reach 0.32 above the wrist, closed fingers curl back to 0.12 while their PIP
joints stay at 0.22, which keeps both states well away from the 1.1 ratio.
"""

import pytest

FINGER_ORDER = ('index', 'middle', 'ring', 'pinky')

THUMB_POSES = {
    # tip offsets from the wrist
    'closed': (-0.04, -0.10),
    'up': (-0.18, -0.20),
    'down': (-0.20, 0.02),
}


def build_hand(extended=(), thumb='closed', wrist=(0.5, 0.8), spacing=0.05,
               overrides=None):
    """
    Return 21 {'x', 'y', 'z'} landmarks.

    Args:
        extended: Names of extended non-thumb fingers
        thumb: One of THUMB_POSES
        wrist: Wrist (x, y); the hand center (landmark 9) sits 0.15 above it
        spacing: Horizontal gap between neighbouring fingers
        overrides: {index: (x, y, z)} applied last
    """
    wx, wy = wrist
    points = [None] * 21
    points[0] = (wx, wy, 0.0)

    points[1] = (wx - 0.05, wy - 0.03, 0.0)
    points[2] = (wx - 0.09, wy - 0.07, 0.0)
    points[3] = (wx - 0.12, wy - 0.11, 0.0)
    tx, ty = THUMB_POSES[thumb]
    points[4] = (wx + tx, wy + ty, 0.0)

    for i, finger in enumerate(FINGER_ORDER):
        base = 5 + 4 * i
        x = wx + spacing * (i - 1.5)
        up = finger in extended
        points[base] = (x, wy - 0.15, 0.0)
        points[base + 1] = (x, wy - 0.22, 0.0)
        points[base + 2] = (x, wy - (0.27 if up else 0.18), 0.0)
        points[base + 3] = (x, wy - (0.32 if up else 0.12), 0.0)

    for idx, value in (overrides or {}).items():
        points[idx] = value

    return [{'x': x, 'y': y, 'z': z} for x, y, z in points]


@pytest.fixture
def make_hand():
    return build_hand


@pytest.fixture
def fist(make_hand):
    return make_hand(wrist=(0.5, 0.8))


@pytest.fixture
def open_hand(make_hand):
    return make_hand(extended=FINGER_ORDER, thumb='up', wrist=(0.5, 0.7))
