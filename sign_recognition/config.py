"""
Configuration settings for sign gesture recognition
"""

# Camera settings
CAMERA_CONFIG = {
    'default_camera_index': 0,
    'default_frame_width': 1280,
    'default_frame_height': 720,
    'flip_horizontal': True  # Mirror effect for natural interaction
}

# Hand tracking settings
HAND_TRACKING_CONFIG = {
    'static_image_mode': False,
    'max_num_hands': 2,
    'model_complexity': 1,  # 0-1, higher = more accurate but slower
    'min_detection_confidence': 0.7,
    'min_tracking_confidence': 0.7
}

# Gesture recognition settings
GESTURE_CONFIG = {
    'extension_ratio': 1.1,  # tip must be this much farther from wrist than PIP
    'fingers_together_threshold': 0.05,
    'wave_motion_threshold': 0.02,  # hand-center x shift between frames
    'wave_bonus': 0.3,
    'call_requires_near_ear': False
}

# Spoken announcement settings
SPEECH_CONFIG = {
    'enabled': True,
    'repeat_interval': 3.0  # seconds before the same gesture is spoken again
}

# Display settings
DISPLAY_CONFIG = {
    'show_landmarks': True,
    'show_gesture_info': True,
    'max_listed_gestures': 5,
    'overlay_color': (255, 255, 255),
    'overlay_background': (0, 0, 0),
    'text_scale': 0.6,
    'text_thickness': 1
}
