import pytest

from pathlib import Path

from gestures.config import (
    ClassifierConfig,
    Config,
    DebounceConfig,
    FiringDiscipline,
    MediaPipeConfig,
    ThumbSide,
    Vocabulary,
    load_config,
    read_config_data,
)
from gestures.exceptions import ConfigurationError


def write_yaml(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


def test_defaults_are_directional():
    config = Config()
    assert config.gestures.vocabulary == Vocabulary.DIRECTIONAL
    assert config.gestures.extension_margin == 0.05
    assert config.gestures.thumb_threshold == 0.1
    assert config.gestures.thumb_side == ThumbSide.ANY
    assert config.gestures.down_threshold == 0.15
    assert config.debounce.dwell_ms == 300
    assert config.debounce.discipline == FiringDiscipline.REPEAT
    assert config.mediapipe.min_detection_confidence == 0.6


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "nope.yaml") == Config()


def test_empty_file_gives_defaults(tmp_path):
    assert load_config(write_yaml(tmp_path, "")) == Config()


def test_rock_paper_scissors_preset(tmp_path):
    config = load_config(write_yaml(tmp_path, "gestures:\n  vocabulary: rock_paper_scissors\n"))
    assert config.gestures.vocabulary == Vocabulary.ROCK_PAPER_SCISSORS
    assert config.gestures.thumb_threshold == 0.15
    assert config.debounce.dwell_ms == 500
    assert config.debounce.discipline == FiringDiscipline.SINGLE
    assert config.mediapipe.min_tracking_confidence == 0.7


def test_file_values_override_preset(tmp_path):
    path = write_yaml(tmp_path, """
gestures:
  vocabulary: rock_paper_scissors
  extension_margin: 0.03
debounce:
  dwell_ms: 400
camera:
  device_id: 2
  mirror: false
""")
    config = load_config(path)
    assert config.gestures.extension_margin == 0.03
    assert config.gestures.thumb_threshold == 0.15
    assert config.debounce.dwell_ms == 400
    assert config.debounce.discipline == FiringDiscipline.SINGLE
    assert config.camera.device_id == 2
    assert config.camera.mirror is False


def test_unknown_keys_are_ignored(tmp_path):
    path = write_yaml(tmp_path, "debounce:\n  dwell_ms: 350\n  jitter: 3\nextra: {a: 1}\n")
    assert load_config(path).debounce.dwell_ms == 350


def test_for_vocabulary_matches_loaded_preset(tmp_path):
    loaded = load_config(write_yaml(tmp_path, "gestures:\n  vocabulary: rock_paper_scissors\n"))
    assert Config.for_vocabulary("rock_paper_scissors") == loaded
    assert Config.for_vocabulary(Vocabulary.DIRECTIONAL) == Config()


def test_strings_are_coerced_to_enums():
    assert ClassifierConfig(vocabulary="rock_paper_scissors").vocabulary is Vocabulary.ROCK_PAPER_SCISSORS
    assert DebounceConfig(discipline="single").discipline is FiringDiscipline.SINGLE


@pytest.mark.parametrize("text", [
    "gestures:\n  vocabulary: sign_language\n",
    "gestures:\n  thumb_side: up\n",
    "debounce:\n  discipline: sometimes\n",
    "debounce:\n  dwell_ms: -1\n",
    "gestures:\n  extension_margin: -0.1\n",
    "mediapipe:\n  min_detection_confidence: 1.5\n",
    "debounce:\n  dwell_ms: fast\n",
    "debounce:\n  dwell_ms: .nan\n",
    "debounce:\n  dwell_ms: true\n",
    "gestures:\n  thumb_threshold: [0.1]\n",
    "mediapipe:\n  min_tracking_confidence: high\n",
    "mediapipe:\n  min_detection_confidence: .nan\n",
    "- just\n- a list\n",
])
def test_invalid_values_raise(tmp_path, text):
    with pytest.raises(ConfigurationError):
        load_config(write_yaml(tmp_path, text))


def test_direct_construction_validates():
    with pytest.raises(ConfigurationError):
        DebounceConfig(dwell_ms=-5)
    with pytest.raises(ConfigurationError):
        MediaPipeConfig(min_tracking_confidence=-0.1)


def test_numeric_strings_are_accepted(tmp_path):
    config = load_config(write_yaml(tmp_path, "debounce:\n  dwell_ms: '250'\n"))
    assert config.debounce.dwell_ms == 250.0


def test_sections_built_directly_keep_directional_defaults():
    # Presets are applied by Config.for_vocabulary and load_config only
    assert ClassifierConfig(vocabulary="rock_paper_scissors").thumb_threshold == 0.1
    assert DebounceConfig().discipline == FiringDiscipline.REPEAT
    assert Config.for_vocabulary("rock_paper_scissors").gestures.thumb_threshold == 0.15


SHIPPED_CONFIG = Path(__file__).parent.parent / "config.yaml"


def test_shipped_config_loads_as_directional():
    config = load_config(SHIPPED_CONFIG)
    assert config.gestures.vocabulary == Vocabulary.DIRECTIONAL
    assert config.debounce.discipline == FiringDiscipline.REPEAT


def test_shipped_config_follows_vocabulary_preset(tmp_path):
    text = SHIPPED_CONFIG.read_text().replace(
        "vocabulary: directional", "vocabulary: rock_paper_scissors"
    )
    config = load_config(write_yaml(tmp_path, text))
    assert config.gestures.vocabulary == Vocabulary.ROCK_PAPER_SCISSORS
    assert config.gestures.thumb_threshold == 0.15
    assert config.debounce.dwell_ms == 500
    assert config.debounce.discipline == FiringDiscipline.SINGLE
    assert config.mediapipe.min_detection_confidence == 0.7


def test_read_config_data_returns_raw_mapping(tmp_path):
    data = read_config_data(write_yaml(tmp_path, "debounce:\n  dwell_ms: 350\n"))
    assert data == {"debounce": {"dwell_ms": 350}}
    assert read_config_data(tmp_path / "missing.yaml") == {}
