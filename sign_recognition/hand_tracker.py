"""
Hand tracking module using MediaPipe for real-time hand detection and landmark extraction.
"""

import logging
from typing import List, Optional, Tuple

import cv2
import numpy as np

from .config import HAND_TRACKING_CONFIG
from .landmarks import HandFrame

logger = logging.getLogger(__name__)


class HandTracker:
    """Real-time hand tracking using MediaPipe."""

    def __init__(self,
                 static_image_mode: bool = HAND_TRACKING_CONFIG['static_image_mode'],
                 max_num_hands: int = HAND_TRACKING_CONFIG['max_num_hands'],
                 model_complexity: int = HAND_TRACKING_CONFIG['model_complexity'],
                 min_detection_confidence: float = HAND_TRACKING_CONFIG['min_detection_confidence'],
                 min_tracking_confidence: float = HAND_TRACKING_CONFIG['min_tracking_confidence']):
        """
        Initialize the hand tracker.

        Args:
            static_image_mode: Whether to treat input as static images
            max_num_hands: Maximum number of hands to detect
            model_complexity: Complexity of the hand landmark model (0-1)
            min_detection_confidence: Minimum confidence for hand detection
            min_tracking_confidence: Minimum confidence for hand tracking

        Raises:
            RuntimeError: If the installed MediaPipe build has no Hands solution
        """
        import mediapipe as mp

        if not hasattr(mp, "solutions"):
            raise RuntimeError(
                "The installed mediapipe package does not expose `mp.solutions`; "
                "install a mediapipe release that ships the Hands solution."
            )

        self.mp_hands = mp.solutions.hands
        self.mp_drawing = mp.solutions.drawing_utils
        self.mp_drawing_styles = mp.solutions.drawing_styles

        self.hands = self.mp_hands.Hands(
            static_image_mode=static_image_mode,
            max_num_hands=max_num_hands,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence
        )
        logger.debug("MediaPipe Hands ready (max_num_hands=%d, complexity=%d)",
                     max_num_hands, model_complexity)

    def __enter__(self) -> "HandTracker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def detect_hands(self, image: np.ndarray,
                     draw: bool = True) -> Tuple[np.ndarray, List[HandFrame]]:
        """
        Detect hands in the input image.

        Args:
            image: Input image as numpy array (BGR format)
            draw: Whether to draw the hand skeleton on the returned image

        Returns:
            Tuple of (annotated_image, hand_frames)
        """
        # Convert BGR to RGB
        rgb_image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        rgb_image.flags.writeable = False

        results = self.hands.process(rgb_image)

        rgb_image.flags.writeable = True
        annotated_image = cv2.cvtColor(rgb_image, cv2.COLOR_RGB2BGR)

        hands: List[HandFrame] = []
        if not results.multi_hand_landmarks:
            return annotated_image, hands

        handedness_list = results.multi_handedness or []
        for i, hand_landmarks in enumerate(results.multi_hand_landmarks):
            if draw:
                self.mp_drawing.draw_landmarks(
                    annotated_image,
                    hand_landmarks,
                    self.mp_hands.HAND_CONNECTIONS,
                    self.mp_drawing_styles.get_default_hand_landmarks_style(),
                    self.mp_drawing_styles.get_default_hand_connections_style()
                )

            label: Optional[str] = None
            score: Optional[float] = None
            if i < len(handedness_list) and handedness_list[i].classification:
                c = handedness_list[i].classification[0]
                label = getattr(c, "label", None)
                score = float(getattr(c, "score", 0.0))

            hands.append(HandFrame.from_landmarks(hand_landmarks.landmark,
                                                  handedness=label,
                                                  handedness_score=score))

        return annotated_image, hands

    def close(self):
        """Clean up resources."""
        if self.hands:
            self.hands.close()
            self.hands = None
