"""Tests for configuration loading and management."""

from pathlib import Path

import pytest

from audiocap.capture import Container
from audiocap.config import AudiocapConfig
from audiocap.errors import ConfigurationError


def test_defaults():
    config = AudiocapConfig()
    assert config.recording.format == "wav"
    assert config.recording.out_dir == ""
    assert config.recording.prefer_pipewire is False
    assert config.recording.wasapi is False
    assert config.recording.mic == ""
    assert config.recording.system == ""
    assert config.recording.duration == ""
    assert config.storage.data_dir == ""


def test_load_missing_file(tmp_path):
    config = AudiocapConfig.load(tmp_path / "nonexistent.toml")
    assert config.recording.format == "wav"


def test_load_none_path():
    config = AudiocapConfig.load(None)
    assert config.recording.format == "wav"


def test_save_and_load_roundtrip(tmp_path):
    config = AudiocapConfig()
    config.recording.format = "mp3"
    config.recording.wasapi = True
    config_path = tmp_path / "config.toml"
    config.save(config_path)

    loaded = AudiocapConfig.load(config_path)
    assert loaded.recording.format == "mp3"
    assert loaded.recording.wasapi is True
    # Unchanged defaults preserved
    assert loaded.recording.prefer_pipewire is False
    assert loaded.storage.data_dir == ""


def test_get_dotted_key():
    config = AudiocapConfig()
    assert config.get("recording.format") == "wav"
    assert config.get("storage.data_dir") == ""


def test_get_invalid_key_format():
    config = AudiocapConfig()
    with pytest.raises(KeyError, match="Invalid key format"):
        config.get("format")


def test_get_unknown_section():
    config = AudiocapConfig()
    with pytest.raises(KeyError, match="Unknown config section"):
        config.get("nonexistent.key")


def test_get_unknown_key():
    config = AudiocapConfig()
    with pytest.raises(KeyError, match="Unknown config key"):
        config.get("recording.nonexistent")


def test_set_string_coercion_to_bool():
    config = AudiocapConfig()
    config.set("recording.wasapi", "true")
    assert config.recording.wasapi is True
    config.set("recording.wasapi", "no")
    assert config.recording.wasapi is False


def test_set_bad_bool():
    config = AudiocapConfig()
    with pytest.raises(ValueError, match="Cannot convert"):
        config.set("recording.prefer_pipewire", "maybe")


def test_set_invalid_format():
    config = AudiocapConfig()
    with pytest.raises(ValueError, match="Invalid format"):
        config.set("recording.format", "flac")


def test_set_string_field():
    config = AudiocapConfig()
    config.set("recording.system", "alsa_output.usb.monitor")
    assert config.recording.system == "alsa_output.usb.monitor"


def test_partial_toml_loads_with_defaults(tmp_path):
    config_path = tmp_path / "config.toml"
    config_path.write_text('[recording]\nformat = "mp3"\n')

    config = AudiocapConfig.load(config_path)
    assert config.recording.format == "mp3"
    assert config.recording.wasapi is False  # default preserved
    assert config.storage.data_dir == ""  # section not in file


def test_unknown_keys_in_toml_ignored(tmp_path):
    config_path = tmp_path / "config.toml"
    config_path.write_text('[recording]\nformat = "mp3"\nunknown_key = "ignored"\n[extra]\nx = 1\n')

    config = AudiocapConfig.load(config_path)
    assert config.recording.format == "mp3"


def test_to_dict():
    d = AudiocapConfig()._to_dict()
    assert d["recording"]["format"] == "wav"
    assert "storage" in d


def test_to_recorder_config_defaults(tmp_path):
    rec = AudiocapConfig().to_recorder_config(tmp_path)
    assert rec.out_dir == tmp_path / "recordings"
    assert rec.format is Container.WAV
    assert rec.prefer_pipewire is False
    assert rec.wasapi is False


def test_to_recorder_config_overrides(tmp_path):
    config = AudiocapConfig()
    config.recording.out_dir = str(tmp_path / "elsewhere")
    config.recording.format = "mp3"
    config.recording.wasapi = True
    rec = config.to_recorder_config(tmp_path)
    assert rec.out_dir == Path(tmp_path / "elsewhere")
    assert rec.format is Container.MP3
    assert rec.wasapi is True


def test_to_recorder_config_bad_format_from_file(tmp_path):
    config_path = tmp_path / "config.toml"
    config_path.write_text('[recording]\nformat = "ogg"\n')
    config = AudiocapConfig.load(config_path)
    with pytest.raises(ConfigurationError):
        config.to_recorder_config(tmp_path)
