#!/usr/bin/env python3
"""
Sign Gesture Recognition Demo
Recognizes sign gestures from the webcam and announces them.
"""

import logging
import sys
import os

# Add the current directory to the Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sign_recognition import GestureType, SignInterface


def on_emergency(hand_info):
    """Callback for the emergency sign."""
    top = hand_info['gestures'][0]
    print(f"🚨 EMERGENCY signed with the {hand_info['handedness']} hand! Confidence: {top.confidence:.2f}")


def on_hello(hand_info):
    """Callback for hello."""
    top = hand_info['gestures'][0]
    print(f"👋 Hello! Confidence: {top.confidence:.2f}")


def main():
    """Main demonstration function."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    print("=" * 60)
    print("SIGN GESTURE RECOGNITION")
    print("=" * 60)
    print()
    print("Supported gestures:")
    for gesture in GestureType:
        print(f"  - {gesture.value}")
    print()
    print("Instructions:")
    print("  - Position your hand in front of the camera")
    print("  - Recognized gestures are listed on screen and spoken")
    print("  - Press 'q' to quit the demo")
    print()
    input("Press Enter to start the demo...")

    try:
        interface = SignInterface()
    except RuntimeError as e:
        print(f"Could not start hand tracking: {e}")
        return

    interface.register_gesture_callback(GestureType.EMERGENCY, on_emergency)
    interface.register_gesture_callback(GestureType.HELLO, on_hello)

    try:
        interface.run_realtime("Sign Gesture Recognition Demo")
    finally:
        interface.cleanup()
        print("\nDemo finished.")


if __name__ == "__main__":
    main()
