#!/usr/bin/env python3
"""
Classify recorded hand landmark frames without a camera.

The input is a JSON list of frames. Each frame is either a list of 21 landmarks
or an object {"landmarks": [...], "handedness": "Left"}. Landmarks are
{"x", "y", "z"} objects or [x, y, z] lists. Consecutive frames are treated as
the same hand, so wave motion is detected across them.
"""

import argparse
import json
import logging
import sys
import os

# Add the current directory to the Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sign_recognition import GestureClassifier

logger = logging.getLogger("replay")


def load_frames(path):
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError("expected a JSON list of frames")

    frames = []
    for item in data:
        if isinstance(item, dict):
            frames.append((item.get("landmarks", []), item.get("handedness") or "Unknown"))
        else:
            frames.append((item, "Unknown"))
    return frames


def replay(frames, classifier=None):
    """
    Classify frames in order, threading each frame in as the next one's previous.

    Returns:
        One list of result dicts per frame
    """
    classifier = classifier or GestureClassifier()
    previous = None
    output = []
    for landmarks, handedness in frames:
        results = classifier.detect_gestures(landmarks, handedness, previous)
        output.append([r.as_dict() for r in results])
        previous = landmarks
    return output


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("path", help="JSON file with recorded landmark frames")
    parser.add_argument("--verbose", "-v", action="store_true", help="log rejected frames")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        frames = load_frames(args.path)
    except (OSError, ValueError) as e:
        logger.error("Could not read %s: %s", args.path, e)
        return 1

    for i, results in enumerate(replay(frames)):
        summary = ", ".join(f"{r['gesture']} ({r['confidence']:.2f})" for r in results) or "-"
        print(f"frame {i}: {summary}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
