"""Start, stop and query recordings on behalf of a CLI or GUI shell."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from audiocap import supervisor
from audiocap.capture import RecorderConfig
from audiocap.devices import list_devices
from audiocap.errors import FilesystemError, ProcessError, RecordingNotFoundError
from audiocap.ffmpeg import build_arguments, check_ffmpeg, next_filename
from audiocap.paths import get_pidfile_path
from audiocap.pidfile import PidFile

logger = logging.getLogger(__name__)


class RecordingService:
    """Glue between the argument builder, the supervisor and the pidfile.

    Only background recordings are tracked (through the pidfile in
    *data_dir*); a foreground ``start`` returns once ffmpeg has exited.
    """

    def __init__(self, data_dir: Path, config: RecorderConfig, platform: Optional[str] = None):
        self.data_dir = Path(data_dir)
        self.config = config
        self.platform = platform
        self.pidfile = PidFile(get_pidfile_path(self.data_dir))

    def start(
        self,
        output: Optional[Path] = None,
        background: bool = False,
        duration: Optional[str] = None,
        mic: Optional[str] = None,
        system: Optional[str] = None,
    ) -> dict:
        check_ffmpeg()

        out_dir = Path(self.config.out_dir)
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(f"failed to create {out_dir}: {exc}", path=out_dir) from exc

        outfile = Path(output) if output else next_filename(out_dir, self.config.format)
        args = build_arguments(
            self.config,
            outfile,
            duration=duration,
            mic=mic,
            system=system,
            platform=self.platform,
        )

        if background:
            pid = supervisor.run_background(args, platform=self.platform)
            try:
                self.pidfile.write(pid)
            except FilesystemError:
                # Without a record nothing could stop it later
                logger.error("Stopping pid=%s, its pidfile could not be written", pid)
                supervisor.terminate(pid, platform=self.platform)
                raise
            return {"status": "started", "pid": pid, "file": str(outfile)}

        supervisor.run_foreground(args)
        return {"status": "done", "file": str(outfile)}

    def stop(self) -> dict:
        """Terminate the recorded background recording and clear its record."""
        pid = self.pidfile.load()
        if pid is None:
            raise RecordingNotFoundError("pidfile not found")

        if supervisor.terminate(pid, platform=self.platform):
            self.pidfile.remove()
            return {"status": "stopped", "pid": pid}

        if not supervisor.is_alive(pid, platform=self.platform):
            logger.warning("Removing stale pidfile for pid=%s", pid)
            self.pidfile.remove()
            return {"status": "not_running", "pid": pid}

        raise ProcessError(f"failed to stop process {pid}", pid=pid)

    def status(self) -> dict:
        pid = self.pidfile.load()
        if pid is None:
            return {"status": "no_pidfile"}
        alive = supervisor.is_alive(pid, platform=self.platform)
        return {"status": "running" if alive else "not_running", "pid": pid}

    def list_devices(self) -> str:
        list_devices(self.config, platform=self.platform)
        return "done"
