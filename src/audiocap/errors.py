"""Error types raised by audiocap.

Every error derives from ``AudiocapError`` so callers (the CLI, or a GUI
shell) can render any failure with ``str(exc)``.
"""

from __future__ import annotations

from pathlib import Path


class AudiocapError(Exception):
    """Base class for all audiocap errors."""


class FfmpegNotFoundError(AudiocapError):
    """ffmpeg is not on PATH."""


class ConfigurationError(AudiocapError):
    """The recording configuration cannot be satisfied on this platform."""


class FilesystemError(AudiocapError):
    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.path = path


class ProcessError(AudiocapError):
    def __init__(self, message: str, pid: int | None = None, command: list[str] | None = None):
        super().__init__(message)
        self.pid = pid
        self.command = command


class ProcessExitError(ProcessError):
    """ffmpeg ran in the foreground and exited unsuccessfully."""

    def __init__(self, returncode: int, interrupted: bool = False, pid: int | None = None):
        if interrupted:
            message = f"ffmpeg was interrupted (exit status {returncode})"
        else:
            message = f"ffmpeg exited with status: {returncode}"
        super().__init__(message, pid=pid)
        self.returncode = returncode
        self.interrupted = interrupted


class PidFileError(AudiocapError):
    """The pidfile exists but does not hold a valid process id."""


class RecordingNotFoundError(AudiocapError):
    """No background recording is on record."""
