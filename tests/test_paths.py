"""Tests for path resolution."""

from audiocap.paths import (
    get_config_path,
    get_data_dir,
    get_log_path,
    get_pidfile_path,
    get_recordings_dir,
)


def test_data_dir_default(monkeypatch):
    monkeypatch.delenv("AUDIOCAP_DATA_DIR", raising=False)
    data_dir = get_data_dir()
    assert "audiocap" in str(data_dir)


def test_data_dir_config_override(tmp_path):
    override = str(tmp_path / "custom")
    data_dir = get_data_dir(config_override=override)
    assert data_dir == tmp_path / "custom"


def test_data_dir_env_override(tmp_path, monkeypatch):
    env_path = str(tmp_path / "env_dir")
    monkeypatch.setenv("AUDIOCAP_DATA_DIR", env_path)
    data_dir = get_data_dir()
    assert data_dir == tmp_path / "env_dir"


def test_config_override_takes_precedence_over_env(tmp_path, monkeypatch):
    monkeypatch.setenv("AUDIOCAP_DATA_DIR", str(tmp_path / "env"))
    data_dir = get_data_dir(config_override=str(tmp_path / "config"))
    assert data_dir == tmp_path / "config"


def test_subdirectory_helpers(tmp_path):
    assert get_recordings_dir(tmp_path) == tmp_path / "recordings"
    assert get_config_path(tmp_path) == tmp_path / "config.toml"
    assert get_pidfile_path(tmp_path) == tmp_path / "audiocap.pid"
    assert get_log_path(tmp_path) == tmp_path / "audiocap.log"
