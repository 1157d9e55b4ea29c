"""Single-line pidfile recording the active background recording."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from audiocap.errors import FilesystemError, PidFileError

logger = logging.getLogger(__name__)


class PidFile:
    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def write(self, pid: int) -> None:
        """Atomically replace the pidfile with *pid*."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
            try:
                with os.fdopen(fd, "w") as f:
                    f.write(f"{pid}\n")
                os.replace(tmp, self.path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise FilesystemError(f"failed to write pidfile {self.path}: {exc}", path=self.path) from exc
        logger.info("Wrote pidfile %s pid=%s", self.path, pid)

    def read(self) -> int:
        """Return the recorded PID.

        Raises FileNotFoundError if there is no pidfile, PidFileError if its
        contents are not a positive integer.
        """
        text = self.path.read_text().strip()
        if not (text.isascii() and text.isdigit()):
            raise PidFileError(f"invalid pid in {self.path}: {text!r}")
        pid = int(text)
        if pid <= 0:
            raise PidFileError(f"invalid pid in {self.path}: {pid}")
        return pid

    def load(self) -> Optional[int]:
        """Like ``read`` but a missing, unreadable or garbled file gives None."""
        try:
            return self.read()
        except FileNotFoundError:
            return None
        except (OSError, PidFileError) as exc:
            logger.warning("Ignoring unusable pidfile %s: %s", self.path, exc)
            return None

    def remove(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            raise FilesystemError(f"failed to remove pidfile {self.path}: {exc}", path=self.path) from exc
        logger.info("Removed pidfile %s", self.path)
