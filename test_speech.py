"""
Tests for spoken gesture announcements.
"""

import pytest

from sign_recognition.gesture_classifier import GestureResult, GestureType
from sign_recognition.speech import SpeechAnnouncer


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def ranked(*gestures):
    return [GestureResult(g, 0.9) for g in gestures]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def spoken():
    return []


@pytest.fixture
def announcer(clock, spoken):
    return SpeechAnnouncer(speak=spoken.append, repeat_interval=3.0, clock=clock)


def test_speaks_top_gesture_only(announcer, spoken):
    assert announcer.announce(ranked(GestureType.HELLO, GestureType.PLEASE))
    assert spoken == ['HELLO']


def test_empty_results_are_ignored(announcer, spoken):
    assert not announcer.announce([])
    assert spoken == []


def test_same_gesture_waits_for_interval(announcer, spoken, clock):
    announcer.announce(ranked(GestureType.SORRY))
    clock.now += 2.0
    assert not announcer.announce(ranked(GestureType.SORRY))
    clock.now += 1.5
    assert announcer.announce(ranked(GestureType.SORRY))
    assert spoken == ['SORRY', 'SORRY']


def test_new_gesture_speaks_immediately(announcer, spoken, clock):
    announcer.announce(ranked(GestureType.SORRY))
    clock.now += 0.1
    assert announcer.announce(ranked(GestureType.GO))
    assert spoken == ['SORRY', 'GO']


def test_failing_voice_does_not_raise(clock):
    def broken(text):
        raise OSError("no audio device")

    announcer = SpeechAnnouncer(speak=broken, clock=clock)
    assert not announcer.announce(ranked(GestureType.STOP))
    assert announcer.last_spoken is None


def test_reset_allows_repeat(announcer, spoken):
    announcer.announce(ranked(GestureType.NO))
    announcer.reset()
    assert announcer.announce(ranked(GestureType.NO))
    assert spoken == ['NO', 'NO']


def test_negative_interval_rejected():
    with pytest.raises(ValueError):
        SpeechAnnouncer(repeat_interval=-1)


def test_default_speaker_logs(caplog, clock):
    announcer = SpeechAnnouncer(clock=clock)
    with caplog.at_level('INFO', logger='sign_recognition.speech'):
        announcer.announce(ranked(GestureType.WATER))
    assert 'WATER/THIRSTY' in caplog.text
