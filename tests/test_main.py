import pytest

import main
from gestures.config import FiringDiscipline, Vocabulary


@pytest.fixture
def no_config(tmp_path):
    return ["--config", str(tmp_path / "missing.yaml")]


def test_defaults_without_overrides(no_config):
    config = main.build_config(main.parse_args(no_config))
    assert config.gestures.vocabulary == Vocabulary.DIRECTIONAL
    assert config.debounce.dwell_ms == 300


def test_vocabulary_switch_brings_its_preset(no_config):
    args = main.parse_args(no_config + ["--vocabulary", "rock_paper_scissors"])
    config = main.build_config(args)
    assert config.gestures.vocabulary == Vocabulary.ROCK_PAPER_SCISSORS
    assert config.debounce.discipline == FiringDiscipline.SINGLE
    assert config.debounce.dwell_ms == 500


def test_debounce_overrides(no_config):
    args = main.parse_args(no_config + ["--discipline", "single", "--dwell-ms", "450"])
    config = main.build_config(args)
    assert config.debounce.discipline == FiringDiscipline.SINGLE
    assert config.debounce.dwell_ms == 450


def test_invalid_dwell_is_reported(no_config, capsys):
    assert main.main(no_config + ["--dwell-ms", "-10"]) == 2
    assert "dwell_ms" in capsys.readouterr().out


def test_vocabulary_switch_keeps_file_values(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "gestures:\n  vocabulary: directional\n  extension_margin: 0.03\n"
        "mediapipe:\n  min_tracking_confidence: 0.5\n"
    )
    args = main.parse_args(["--config", str(path), "--vocabulary", "rock_paper_scissors"])
    config = main.build_config(args)
    assert config.gestures.vocabulary == Vocabulary.ROCK_PAPER_SCISSORS
    assert config.gestures.extension_margin == 0.03
    assert config.mediapipe.min_tracking_confidence == 0.5
    # Values the file leaves out come from the new preset
    assert config.gestures.thumb_threshold == 0.15
    assert config.debounce.discipline == FiringDiscipline.SINGLE


def test_cli_overrides_win_over_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("debounce:\n  dwell_ms: 250\n  discipline: single\n")
    args = main.parse_args(["--config", str(path), "--dwell-ms", "600"])
    config = main.build_config(args)
    assert config.debounce.dwell_ms == 600
    assert config.debounce.discipline == FiringDiscipline.SINGLE


def test_non_numeric_config_value_is_reported(tmp_path, capsys):
    path = tmp_path / "config.yaml"
    path.write_text("debounce:\n  dwell_ms: fast\n")
    assert main.main(["--config", str(path)]) == 2
    assert "dwell_ms" in capsys.readouterr().out
