"""
Interface module tying camera capture, hand tracking, gesture recognition and speech together.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import cv2
import numpy as np

from .config import CAMERA_CONFIG, DISPLAY_CONFIG, SPEECH_CONFIG
from .gesture_classifier import GestureClassifier, GestureResult, GestureType
from .hand_tracker import HandTracker
from .landmarks import HandFrame
from .speech import SpeechAnnouncer

logger = logging.getLogger(__name__)


class SignInterface:
    """Real-time sign gesture recognition from a camera feed."""

    def __init__(self,
                 camera_index: int = CAMERA_CONFIG['default_camera_index'],
                 frame_width: int = CAMERA_CONFIG['default_frame_width'],
                 frame_height: int = CAMERA_CONFIG['default_frame_height'],
                 hand_tracker: Optional[HandTracker] = None,
                 gesture_classifier: Optional[GestureClassifier] = None,
                 announcer: Optional[SpeechAnnouncer] = None):
        """
        Initialize the sign interface.

        Args:
            camera_index: Camera device index
            frame_width: Camera frame width
            frame_height: Camera frame height
            hand_tracker: Landmark detector, a MediaPipe HandTracker by default
            gesture_classifier: Classifier, the default gesture table by default
            announcer: Speech announcer, a logging SpeechAnnouncer by default
                when SPEECH_CONFIG['enabled'] is set
        """
        self.camera_index = camera_index
        self.frame_width = frame_width
        self.frame_height = frame_height

        self.hand_tracker = hand_tracker if hand_tracker is not None else HandTracker()
        self.gesture_classifier = gesture_classifier or GestureClassifier()
        if announcer is None and SPEECH_CONFIG['enabled']:
            announcer = SpeechAnnouncer()
        self.announcer = announcer

        # Camera setup
        self.cap = None
        self.is_running = False
        self.window_open = False

        self.gesture_callbacks: Dict[GestureType, Callable] = {}
        self.previous_frames: Dict[str, HandFrame] = {}
        self.current_gestures: List[GestureResult] = []

        self.show_gesture_info = DISPLAY_CONFIG['show_gesture_info']
        self.flip_horizontal = CAMERA_CONFIG['flip_horizontal']

    def start_camera(self) -> bool:
        """
        Start the camera capture.

        Returns:
            True if camera started successfully
        """
        try:
            self.cap = cv2.VideoCapture(self.camera_index)
            self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.frame_width)
            self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.frame_height)
        except cv2.error as e:
            logger.warning("Error starting camera %s: %s", self.camera_index, e)
            return False

        if not self.cap.isOpened():
            logger.warning("Camera %s could not be opened", self.camera_index)
            return False

        self.is_running = True
        return True

    def stop_camera(self):
        """Stop the camera capture."""
        self.is_running = False
        if self.cap:
            self.cap.release()
            self.cap = None
        if self.window_open:
            cv2.destroyAllWindows()
            self.window_open = False

    def register_gesture_callback(self, gesture_type: GestureType, callback: Callable):
        """
        Register a callback for a gesture.

        Args:
            gesture_type: The gesture to respond to
            callback: Called with the hand's info dict when the gesture ranks first
        """
        self.gesture_callbacks[gesture_type] = callback

    @staticmethod
    def _hand_key(hand: HandFrame, index: int, taken) -> str:
        label = hand.handedness
        if not label or label == 'Unknown':
            return f"hand{index}"
        # The detector can give both hands the same label.
        if label in taken:
            return f"{label}{index}"
        return label

    def classify_hands(self, hands: List[HandFrame]) -> List[Dict[str, Any]]:
        """
        Classify each detected hand against its own previous frame.

        Args:
            hands: Hand frames from the landmark detector

        Returns:
            One info dict per hand with 'handedness' and ranked 'gestures'
        """
        if not hands:
            self.previous_frames.clear()
            return []

        hand_infos = []
        current_frames = {}
        for i, hand in enumerate(hands):
            key = self._hand_key(hand, i, current_frames)
            previous = self.previous_frames.get(key)
            gestures = self.gesture_classifier.detect_gestures(
                hand, hand.handedness, previous)
            current_frames[key] = hand
            hand_infos.append({
                'handedness': hand.handedness,
                'gestures': gestures,
            })
        self.previous_frames = current_frames
        return hand_infos

    def process_frame(self, frame: np.ndarray) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Process a single frame for gesture recognition.

        Args:
            frame: Input frame from camera

        Returns:
            Tuple of (processed_frame, info) where info holds per-hand gestures
        """
        annotated_frame, hands = self.hand_tracker.detect_hands(
            frame, draw=DISPLAY_CONFIG['show_landmarks'])
        hand_infos = self.classify_hands(hands)

        info = {
            'hand_count': len(hands),
            'hands': hand_infos,
        }

        self.current_gestures = []
        for hand_info in hand_infos:
            gestures = hand_info['gestures']
            if not gestures:
                continue
            self.current_gestures = gestures
            if self.announcer is not None:
                self.announcer.announce(gestures)
            callback = self.gesture_callbacks.get(gestures[0].gesture)
            if callback is not None:
                callback(hand_info)

        if self.show_gesture_info:
            annotated_frame = self._add_gesture_overlay(annotated_frame, info)

        return annotated_frame, info

    def run_realtime(self, window_name: str = "Sign Gesture Recognition"):
        """
        Run real-time gesture recognition with camera feed.

        Args:
            window_name: Name of the display window
        """
        if not self.start_camera():
            logger.error("Failed to start camera")
            return

        logger.info("Starting gesture recognition. Press 'q' to quit.")

        try:
            while self.is_running:
                ret, frame = self.cap.read()
                if not ret:
                    logger.warning("Camera returned no frame, stopping")
                    break

                if self.flip_horizontal:
                    frame = cv2.flip(frame, 1)

                processed_frame, _ = self.process_frame(frame)
                cv2.imshow(window_name, processed_frame)
                self.window_open = True

                key = cv2.waitKey(1) & 0xFF
                if key == ord('q'):
                    break

        except KeyboardInterrupt:
            logger.info("Interrupted by user")
        finally:
            self.stop_camera()

    def _add_gesture_overlay(self, frame: np.ndarray, info: Dict[str, Any]) -> np.ndarray:
        """
        Add the ranked gesture list to the frame.

        Args:
            frame: Input frame
            info: Frame info from process_frame

        Returns:
            Frame with overlay
        """
        overlay_frame = frame.copy()
        scale = DISPLAY_CONFIG['text_scale']
        thickness = DISPLAY_CONFIG['text_thickness']
        color = DISPLAY_CONFIG['overlay_color']

        lines = [f"Hands: {info['hand_count']}"]
        for hand_info in info['hands']:
            gestures = hand_info['gestures'][:DISPLAY_CONFIG['max_listed_gestures']]
            if not gestures:
                lines.append(f"{hand_info['handedness']}: no gesture")
                continue
            for result in gestures:
                lines.append(f"{hand_info['handedness']}: {result.label} "
                             f"{result.confidence * 100:.0f}%")

        height = 20 + 22 * len(lines)
        cv2.rectangle(overlay_frame, (10, 10), (420, 10 + height),
                      DISPLAY_CONFIG['overlay_background'], -1)
        cv2.rectangle(overlay_frame, (10, 10), (420, 10 + height), color, 2)

        for i, line in enumerate(lines):
            y_pos = 32 + i * 22
            cv2.putText(overlay_frame, line, (18, y_pos),
                        cv2.FONT_HERSHEY_SIMPLEX, scale, color, thickness, cv2.LINE_AA)

        return overlay_frame

    def get_current_gestures(self) -> List[GestureResult]:
        """Ranked gestures of the most recently processed frame."""
        return list(self.current_gestures)

    def capture_gesture_data(self, duration_seconds: int = 5) -> List[Dict[str, Any]]:
        """
        Capture gesture data for a specified duration.

        Args:
            duration_seconds: Duration to capture data

        Returns:
            List of timestamped frame info dicts
        """
        if not self.start_camera():
            return []

        start_time = time.time()
        gesture_data = []

        try:
            while time.time() - start_time < duration_seconds:
                ret, frame = self.cap.read()
                if not ret:
                    break

                if self.flip_horizontal:
                    frame = cv2.flip(frame, 1)
                _, info = self.process_frame(frame)

                gesture_data.append({
                    'timestamp': time.time() - start_time,
                    'info': info
                })

        finally:
            self.stop_camera()

        return gesture_data

    def cleanup(self):
        """Clean up resources."""
        self.stop_camera()
        if self.hand_tracker:
            self.hand_tracker.close()
