"""
Tests for landmark geometry helpers and landmark coercion.
"""

import math
from types import SimpleNamespace

import numpy as np
import pytest

from sign_recognition.features import extract_features
from sign_recognition.geometry import (angle, are_fingers_together, distance, is_finger_closed,
                                       is_finger_extended)
from sign_recognition.landmarks import INDEX_PIP, INDEX_TIP, HandFrame, to_array


def test_distance_is_symmetric_3d():
    p1 = np.array([0.0, 0.0, 0.0])
    p2 = np.array([0.3, 0.4, 1.2])
    assert distance(p1, p2) == pytest.approx(1.3)
    assert distance(p2, p1) == pytest.approx(distance(p1, p2))


def test_angle_right_angle():
    assert angle([1, 0, 0], [0, 0, 0], [0, 1, 0]) == pytest.approx(90.0)
    assert angle([1, 0, 0], [0, 0, 0], [-1, 0, 0]) == pytest.approx(180.0)


def test_angle_degenerate_is_nan():
    assert math.isnan(angle([0, 0, 0], [0, 0, 0], [1, 0, 0]))


def test_finger_extension_states(make_hand):
    points = to_array(make_hand(extended=('index',)))
    assert is_finger_extended(points, INDEX_TIP, INDEX_PIP)
    assert not is_finger_closed(points, INDEX_TIP, INDEX_PIP)
    assert is_finger_closed(points, 12, 10)
    assert not is_finger_extended(points, 12, 10)


def test_extension_ratio_margin():
    points = np.zeros((21, 3))
    points[0] = (0.5, 0.8, 0.0)
    points[INDEX_PIP] = (0.5, 0.6, 0.0)   # 0.2 from wrist
    points[INDEX_TIP] = (0.5, 0.585, 0.0)  # 0.215, below 1.1 x 0.2
    assert not is_finger_extended(points, INDEX_TIP, INDEX_PIP)
    points[INDEX_TIP] = (0.5, 0.57, 0.0)   # 0.23
    assert is_finger_extended(points, INDEX_TIP, INDEX_PIP)


def test_fingers_together_threshold():
    points = np.zeros((21, 3))
    points[8] = (0.50, 0.3, 0.0)
    points[12] = (0.53, 0.3, 0.0)
    assert are_fingers_together(points, 8, 12)
    assert not are_fingers_together(points, 8, 12, threshold=0.02)


def test_missing_landmark_fails_both_states(make_hand):
    landmarks = make_hand(extended=('index',))
    landmarks[INDEX_TIP] = None
    points = to_array(landmarks)
    assert np.isnan(points[INDEX_TIP]).all()
    assert not is_finger_extended(points, INDEX_TIP, INDEX_PIP)
    assert not is_finger_closed(points, INDEX_TIP, INDEX_PIP)

    features = extract_features(points)
    assert not features.extended['index']
    assert not features.closed['index']
    assert not features.all_closed('index', 'middle')


def test_to_array_accepts_mixed_landmark_forms():
    landmarks = [
        {'x': 0.1, 'y': 0.2, 'z': 0.3},
        (0.4, 0.5, 0.6),
        [0.7, 0.8],
        SimpleNamespace(x=0.9, y=1.0, z=-0.1),
        {'x': 'bad', 'y': 0.1},
        (1, 2, 3, 4),
    ]
    points = to_array(landmarks)
    assert points.shape == (6, 3)
    np.testing.assert_allclose(points[0], [0.1, 0.2, 0.3])
    np.testing.assert_allclose(points[2], [0.7, 0.8, 0.0])
    np.testing.assert_allclose(points[3], [0.9, 1.0, -0.1])
    assert np.isnan(points[4]).all()
    assert np.isnan(points[5]).all()


def test_to_array_pads_2d_numpy_input():
    points = to_array(np.ones((21, 2)))
    assert points.shape == (21, 3)
    assert (points[:, 2] == 0).all()


def test_hand_frame_round_trip(open_hand):
    frame = HandFrame.from_landmarks(open_hand, handedness=None)
    assert frame.is_valid
    assert frame.handedness == 'Unknown'
    assert frame.as_dicts()[9] == pytest.approx(open_hand[9])


def test_thumb_states(make_hand):
    closed = extract_features(to_array(make_hand(thumb='closed')))
    assert not closed.thumb_extended
    assert closed.thumb_closed

    up = extract_features(to_array(make_hand(thumb='up')))
    assert up.thumb_extended
    assert not up.thumb_closed


def test_hand_frames_compare_by_identity(open_hand):
    first = HandFrame.from_landmarks(open_hand)
    second = HandFrame.from_landmarks(open_hand)
    assert first == first
    assert first != second
    assert len({first, second}) == 2
