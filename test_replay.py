"""
Tests for the landmark replay script.
"""

import json

import pytest

from conftest import FINGER_ORDER, build_hand
import replay


def test_replay_threads_previous_frame():
    frames = [
        (build_hand(extended=FINGER_ORDER, thumb='up', wrist=(0.50, 0.7)), 'Left'),
        (build_hand(extended=FINGER_ORDER, thumb='up', wrist=(0.53, 0.7)), 'Left'),
    ]
    first, second = replay.replay(frames)
    assert first[0]['gesture'] == 'PLEASE'
    assert second[0]['gesture'] == 'HELLO'
    assert second[0]['confidence'] == pytest.approx(1.0)


def test_main_prints_each_frame(tmp_path, capsys):
    path = tmp_path / "frames.json"
    path.write_text(json.dumps([
        {"landmarks": build_hand(wrist=(0.5, 0.8)), "handedness": "Right"},
        [[0.5, 0.5, 0.0]] * 5,
    ]))

    assert replay.main([str(path)]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out == ["frame 0: SORRY (0.75)", "frame 1: -"]


def test_main_rejects_bad_file(tmp_path):
    path = tmp_path / "frames.json"
    path.write_text('{"not": "a list"}')
    assert replay.main([str(path)]) == 1
    assert replay.main([str(tmp_path / "missing.json")]) == 1
