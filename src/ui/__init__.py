"""
AirGesture UI Module

PyQt5 status window for gesture feedback.
"""
from .status_window import StatusWindow

__all__ = [
    'StatusWindow',
]
