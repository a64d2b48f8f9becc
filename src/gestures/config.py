"""
Config loader for AirGesture.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from enum import Enum
import math
from pathlib import Path
from typing import Optional
import yaml

from .exceptions import ConfigurationError


class Vocabulary(str, Enum):
    """Active gesture rule set."""
    DIRECTIONAL = "directional"
    ROCK_PAPER_SCISSORS = "rock_paper_scissors"


class FiringDiscipline(str, Enum):
    """How a held gesture keeps firing once confirmed."""
    REPEAT = "repeat"   # Fire on every frame past the dwell
    SINGLE = "single"   # Fire once, then wait for the label to go away


class ThumbSide(str, Enum):
    """Which horizontal direction counts as an extended thumb."""
    ANY = "any"
    LEFT = "left"
    RIGHT = "right"


def _coerce_enum(enum_cls, value, name: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigurationError(f"Unknown {name} {value!r} (expected one of: {allowed})") from None


def _require_number(value, name: str) -> float:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None
    if math.isnan(number):
        raise ConfigurationError(f"{name} must be a number, got NaN")
    return number


def _require_non_negative(value, name: str) -> float:
    number = _require_number(value, name)
    if number < 0:
        raise ConfigurationError(f"{name} must be >= 0, got {value}")
    return number


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 640
    height: int = 480
    fps: int = 30
    mirror: bool = True


@dataclass
class MediaPipeConfig:
    min_detection_confidence: float = 0.6
    min_tracking_confidence: float = 0.6

    def __post_init__(self):
        for name in ("min_detection_confidence", "min_tracking_confidence"):
            value = _require_number(getattr(self, name), name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be within [0, 1], got {value}")
            setattr(self, name, value)


@dataclass
class ClassifierConfig:
    """Classifier thresholds.

    Field defaults are the directional preset. Building this section directly
    does not look at the vocabulary; use Config.for_vocabulary or load_config
    to get the thresholds of another vocabulary.
    """
    vocabulary: Vocabulary = Vocabulary.DIRECTIONAL
    extension_margin: float = 0.05   # Tip must sit this far above its MCP
    thumb_threshold: float = 0.1     # Horizontal tip/MCP spread for the thumb
    thumb_side: ThumbSide = ThumbSide.ANY
    down_threshold: float = 0.15     # Wrist below middle MCP by this much -> DOWN

    def __post_init__(self):
        self.vocabulary = _coerce_enum(Vocabulary, self.vocabulary, "vocabulary")
        self.thumb_side = _coerce_enum(ThumbSide, self.thumb_side, "thumb side")
        self.extension_margin = _require_non_negative(self.extension_margin, "extension_margin")
        self.thumb_threshold = _require_non_negative(self.thumb_threshold, "thumb_threshold")
        self.down_threshold = _require_non_negative(self.down_threshold, "down_threshold")


@dataclass
class DebounceConfig:
    """Dwell time and firing discipline.

    Defaults are the directional preset, see ClassifierConfig.
    """
    dwell_ms: float = 300.0
    discipline: FiringDiscipline = FiringDiscipline.REPEAT

    def __post_init__(self):
        self.discipline = _coerce_enum(FiringDiscipline, self.discipline, "firing discipline")
        self.dwell_ms = _require_non_negative(self.dwell_ms, "dwell_ms")


@dataclass
class UIConfig:
    show_preview: bool = True
    black_background: bool = False
    window_title: str = "AirGesture"


# Defaults that differ between vocabularies. Anything not listed here uses
# the dataclass default.
VOCABULARY_PRESETS = {
    Vocabulary.DIRECTIONAL: {
        "gestures": {"thumb_threshold": 0.1},
        "debounce": {"dwell_ms": 300.0, "discipline": FiringDiscipline.REPEAT},
        "mediapipe": {"min_detection_confidence": 0.6, "min_tracking_confidence": 0.6},
    },
    Vocabulary.ROCK_PAPER_SCISSORS: {
        "gestures": {"thumb_threshold": 0.15},
        "debounce": {"dwell_ms": 500.0, "discipline": FiringDiscipline.SINGLE},
        "mediapipe": {"min_detection_confidence": 0.7, "min_tracking_confidence": 0.7},
    },
}


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    gestures: ClassifierConfig = field(default_factory=ClassifierConfig)
    debounce: DebounceConfig = field(default_factory=DebounceConfig)
    ui: UIConfig = field(default_factory=UIConfig)

    @classmethod
    def for_vocabulary(cls, vocabulary) -> "Config":
        """Build the default configuration for a vocabulary."""
        return config_from_dict({"gestures": {"vocabulary": vocabulary}})


def _dict_to_dataclass(cls, data: Optional[dict], defaults: Optional[dict] = None):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    merged = dict(defaults or {})
    if data:
        merged.update(data)
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in merged.items() if k in field_names}
    return cls(**filtered)


def config_from_dict(data: dict) -> Config:
    """Build a Config from a parsed YAML mapping, filling gaps from the vocabulary preset."""
    gestures_data = data.get('gestures') or {}
    vocabulary = _coerce_enum(
        Vocabulary,
        gestures_data.get('vocabulary', Vocabulary.DIRECTIONAL),
        "vocabulary",
    )
    preset = VOCABULARY_PRESETS[vocabulary]

    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe'), preset["mediapipe"]),
        gestures=_dict_to_dataclass(
            ClassifierConfig,
            {**gestures_data, "vocabulary": vocabulary},
            preset["gestures"],
        ),
        debounce=_dict_to_dataclass(DebounceConfig, data.get('debounce'), preset["debounce"]),
        ui=_dict_to_dataclass(UIConfig, data.get('ui')),
    )


def read_config_data(config_path: Optional[Path] = None) -> dict:
    """
    Read the raw YAML mapping behind a config file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        The parsed mapping, or an empty dict when the file does not exist.
    """
    if config_path is None:
        # Default to config.yaml in project root
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        return {}

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping at the top level")

    return data


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Returns:
        Config dataclass with all settings. Values missing from the file
        fall back to the preset of the selected vocabulary.

    Raises:
        ConfigurationError: On unknown enum values, non-numeric or
            out-of-range numbers.
    """
    return config_from_dict(read_config_data(config_path))
