"""
AirGesture Core

Landmark classification and temporal debouncing.
"""
from .config import (
    Config,
    ClassifierConfig,
    DebounceConfig,
    FiringDiscipline,
    ThumbSide,
    Vocabulary,
    config_from_dict,
    load_config,
    read_config_data,
)
from .exceptions import ConfigurationError, GestureError, InvalidInputError
from .landmarks import LandmarkSet
from .classifier import FingerState, GestureClassifier, GestureLabel, classify
from .debouncer import DebounceState, GestureDebouncer
from .pipeline import FrameResult, GesturePipeline

__all__ = [
    'Config',
    'ClassifierConfig',
    'DebounceConfig',
    'FiringDiscipline',
    'ThumbSide',
    'Vocabulary',
    'config_from_dict',
    'load_config',
    'read_config_data',
    'ConfigurationError',
    'GestureError',
    'InvalidInputError',
    'LandmarkSet',
    'FingerState',
    'GestureClassifier',
    'GestureLabel',
    'classify',
    'DebounceState',
    'GestureDebouncer',
    'FrameResult',
    'GesturePipeline',
]
