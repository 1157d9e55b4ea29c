"""ffmpeg discovery, output naming and argument construction."""

from __future__ import annotations

import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional

from audiocap.capture import Container, RecorderConfig, resolve_inputs
from audiocap.constants import FFMPEG, FILENAME_TIME_FORMAT, GLOBAL_FLAGS, MIX_FILTER
from audiocap.errors import FfmpegNotFoundError, FilesystemError

logger = logging.getLogger(__name__)

INSTALL_HINTS = (
    "Please install ffmpeg and ensure it is available on your PATH.\n\n"
    "Quick install examples:\n"
    "  - macOS (Homebrew): brew install ffmpeg\n"
    "  - Ubuntu/Debian: sudo apt update && sudo apt install ffmpeg\n"
    "  - Windows (Scoop/Chocolatey): scoop install ffmpeg  OR  choco install ffmpeg"
)


def check_ffmpeg() -> Path:
    """Return the path to ffmpeg, or raise FfmpegNotFoundError."""
    found = shutil.which(FFMPEG)
    if not found:
        raise FfmpegNotFoundError(f"ffmpeg not found in PATH.\n\n{INSTALL_HINTS}")
    return Path(found)


def next_filename(out_dir: Path, container: Container, now: Optional[datetime] = None) -> Path:
    """Timestamped output path: recording_YYYY-MM-DD_HH-MM-SS.<ext>."""
    ts = (now or datetime.now()).strftime(FILENAME_TIME_FORMAT)
    return Path(out_dir) / f"recording_{ts}.{container.extension}"


def _ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(f"failed to create output directory {path}: {exc}", path=path) from exc


def build_arguments(
    config: RecorderConfig,
    output_path: Path,
    duration: Optional[str] = None,
    mic: Optional[str] = None,
    system: Optional[str] = None,
    platform: Optional[str] = None,
) -> list[str]:
    """Build the ffmpeg argument list (without the executable).

    Input 0 is always system audio and input 1 the microphone. *duration* is
    forwarded to ``-t`` as given ("00:10:00" or "600"); ffmpeg validates it.
    """
    output_path = Path(output_path)
    _ensure_dir(Path(config.out_dir))
    _ensure_dir(output_path.parent)

    plan = resolve_inputs(config, mic=mic, system=system, platform=platform)

    args = list(GLOBAL_FLAGS)
    if duration:
        args.extend(["-t", duration])

    args.extend(plan.system.input_args())
    args.extend(plan.mic.input_args())

    args.extend(["-filter_complex", MIX_FILTER])
    args.extend(config.format.codec_args)
    args.append(str(output_path))

    logger.debug("ffmpeg arguments: %s", args)
    return args
