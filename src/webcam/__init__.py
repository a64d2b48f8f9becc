"""
AirGesture Webcam Module

Camera capture and hand tracking using MediaPipe.
"""
from .hand_tracker import HandTracker, HAND_CONNECTIONS
from .worker import WebcamWorker

__all__ = [
    'HandTracker',
    'HAND_CONNECTIONS',
    'WebcamWorker',
]
