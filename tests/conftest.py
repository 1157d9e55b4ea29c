"""Shared test fixtures."""

from pathlib import Path

import pytest

from audiocap.capture import Container, RecorderConfig


@pytest.fixture
def tmp_data_dir(tmp_path, monkeypatch):
    """Point audiocap at a temporary data directory."""
    data_dir = tmp_path / "data"
    (data_dir / "recordings").mkdir(parents=True)
    monkeypatch.setenv("AUDIOCAP_DATA_DIR", str(data_dir))
    return data_dir


@pytest.fixture
def wav_config(tmp_path):
    return RecorderConfig(out_dir=tmp_path / "recordings", format=Container.WAV)


@pytest.fixture
def mp3_config(tmp_path):
    return RecorderConfig(out_dir=tmp_path / "recordings", format=Container.MP3)


def input_blocks(args: list[str]) -> list[tuple[list[str], str]]:
    """Split an ffmpeg argument list into (flags before -i, device) per input."""
    blocks = []
    start = 2  # after -hide_banner -y
    if args[start] == "-t":
        start += 2
    i = start
    while i < len(args):
        if args[i] == "-i":
            blocks.append((args[start:i], args[i + 1]))
            start = i + 2
            i = start
            continue
        if args[i] == "-filter_complex":
            break
        i += 1
    return blocks


@pytest.fixture(autouse=True)
def reset_audiocap_logger():
    """The CLI attaches handlers bound to CliRunner streams; drop them after each test."""
    from audiocap.logging_utils import LOGGER

    yield
    for handler in list(LOGGER.handlers):
        LOGGER.removeHandler(handler)
        handler.close()
