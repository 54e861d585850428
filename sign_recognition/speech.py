"""
Spoken announcement of recognized gestures.

The voice itself is injected as a `speak` callable so the recognition loop does
not depend on any particular text-to-speech engine.
"""

import logging
import time
from typing import Callable, Optional, Sequence

from .config import SPEECH_CONFIG
from .gesture_classifier import GestureResult

logger = logging.getLogger(__name__)


def log_speaker(text: str) -> None:
    logger.info("Speaking: %s", text)


class SpeechAnnouncer:
    """Announces the top gesture, suppressing repeats within `repeat_interval` seconds."""

    def __init__(self,
                 speak: Optional[Callable[[str], None]] = None,
                 repeat_interval: float = SPEECH_CONFIG['repeat_interval'],
                 clock: Callable[[], float] = time.monotonic):
        """
        Args:
            speak: Callable receiving the phrase to say, defaults to logging it
            repeat_interval: Seconds before the same gesture may be spoken again
            clock: Monotonic time source in seconds
        """
        if repeat_interval < 0:
            raise ValueError("repeat_interval must be non-negative")
        self.speak = speak or log_speaker
        self.repeat_interval = repeat_interval
        self.clock = clock
        self.last_spoken: Optional[str] = None
        self.last_spoken_at: Optional[float] = None

    def should_announce(self, label: str, now: float) -> bool:
        if label != self.last_spoken or self.last_spoken_at is None:
            return True
        return now - self.last_spoken_at > self.repeat_interval

    def announce(self, results: Sequence[GestureResult]) -> bool:
        """
        Speak the top-ranked gesture if it is new or the repeat interval elapsed.

        Returns:
            True if something was spoken
        """
        if not results:
            return False

        label = results[0].label
        now = self.clock()
        if not self.should_announce(label, now):
            return False

        try:
            self.speak(label)
        except Exception:
            logger.exception("Speech output failed for %r", label)
            return False

        self.last_spoken = label
        self.last_spoken_at = now
        return True

    def reset(self):
        self.last_spoken = None
        self.last_spoken_at = None
