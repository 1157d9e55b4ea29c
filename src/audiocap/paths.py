"""Cross-platform path resolution for audiocap data directories."""

import os
from pathlib import Path

from platformdirs import user_data_dir

from audiocap.constants import APP_NAME, LOG_FILE_NAME, PIDFILE_NAME


def get_data_dir(config_override: str = "") -> Path:
    """Resolve the audiocap data directory.

    Priority: config_override > AUDIOCAP_DATA_DIR env var > platform default.
    """
    if config_override:
        return Path(config_override)

    env_dir = os.environ.get("AUDIOCAP_DATA_DIR")
    if env_dir:
        return Path(env_dir)

    return Path(user_data_dir(APP_NAME))


def get_recordings_dir(data_dir: Path) -> Path:
    return data_dir / "recordings"


def get_config_path(data_dir: Path) -> Path:
    return data_dir / "config.toml"


def get_pidfile_path(data_dir: Path) -> Path:
    return data_dir / PIDFILE_NAME


def get_log_path(data_dir: Path) -> Path:
    return data_dir / LOG_FILE_NAME
