"""
Custom exceptions for the gesture core.
"""


class GestureError(Exception):
    """Base exception for gesture classification errors."""
    pass


class InvalidInputError(GestureError, ValueError):
    """Raised when a landmark set is malformed (wrong point count, bad coordinates)."""
    pass


class ConfigurationError(GestureError, ValueError):
    """Raised when a configuration value is unknown or out of range."""
    pass
