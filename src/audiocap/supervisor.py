"""Spawn, probe and stop the ffmpeg process.

Foreground runs block until ffmpeg exits and forward Ctrl+C to it.
Background runs are detached from this process and only a PID is kept;
the caller is responsible for persisting it.
"""

from __future__ import annotations

import csv
import io
import logging
import os
import signal
import subprocess
import sys
import threading
from typing import Optional

from audiocap.constants import FFMPEG
from audiocap.errors import ProcessError, ProcessExitError

logger = logging.getLogger(__name__)

DETACHED_PROCESS = 0x00000008
CREATE_NEW_PROCESS_GROUP = 0x00000200

_HANDLER_LOCK_TIMEOUT = 1.0  # seconds


class _ChildCell:
    """Lock-guarded reference to the foreground ffmpeg process.

    Python runs signal handlers on the main thread, which may already hold
    the lock, so the lock is reentrant. An interrupt that arrives before the
    process is stored is remembered and applied in ``set``.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._proc: subprocess.Popen | None = None
        self.interrupted = False

    def set(self, proc: subprocess.Popen) -> None:
        with self._lock:
            self._proc = proc
            if self.interrupted:
                proc.kill()

    def clear(self) -> None:
        with self._lock:
            self._proc = None

    def kill(self) -> bool:
        """Kill the child if present. Never blocks longer than the lock timeout."""
        if not self._lock.acquire(timeout=_HANDLER_LOCK_TIMEOUT):
            return False
        try:
            self.interrupted = True
            if self._proc is None:
                return False
            self._proc.kill()
            return True
        finally:
            self._lock.release()


def run_foreground(arguments: list[str], executable: str = FFMPEG) -> None:
    """Run ffmpeg and wait for it to exit.

    stdout/stderr are inherited, stdin is closed. On the main thread, SIGINT
    is redirected to kill ffmpeg for the duration of the call. Raises
    ProcessExitError if ffmpeg exits unsuccessfully.
    """
    command = [executable, *arguments]
    cell = _ChildCell()

    install_handler = threading.current_thread() is threading.main_thread()
    original_handler = None
    if install_handler:
        def handle_sigint(sig, frame):
            if cell.kill():
                logger.info("Interrupt received, stopping ffmpeg")

        original_handler = signal.getsignal(signal.SIGINT)
        signal.signal(signal.SIGINT, handle_sigint)
    else:
        logger.debug("Not on the main thread; interrupt forwarding left to the caller")

    try:
        try:
            proc = subprocess.Popen(command, stdin=subprocess.DEVNULL)
        except OSError as exc:
            raise ProcessError(f"failed to spawn ffmpeg: {exc}", command=command) from exc

        cell.set(proc)
        logger.info("Started ffmpeg pid=%s (foreground)", proc.pid)
        try:
            returncode = proc.wait()
        except OSError as exc:
            raise ProcessError(f"ffmpeg failed to run: {exc}", pid=proc.pid, command=command) from exc
        finally:
            cell.clear()
    finally:
        if install_handler:
            # None means the previous handler was not set from Python
            signal.signal(signal.SIGINT, signal.SIG_DFL if original_handler is None else original_handler)

    if returncode != 0:
        raise ProcessExitError(returncode, interrupted=cell.interrupted, pid=proc.pid)
    logger.info("ffmpeg pid=%s finished", proc.pid)


def run_background(
    arguments: list[str],
    executable: str = FFMPEG,
    platform: Optional[str] = None,
) -> int:
    """Start ffmpeg detached from this process and return its PID.

    The child gets no standard streams and does not share our session
    (POSIX) or console process group (Windows), so it outlives the caller.
    """
    platform = platform or sys.platform
    command = [executable, *arguments]

    kwargs = {
        "stdin": subprocess.DEVNULL,
        "stdout": subprocess.DEVNULL,
        "stderr": subprocess.DEVNULL,
    }
    if platform == "win32":
        kwargs["creationflags"] = DETACHED_PROCESS | CREATE_NEW_PROCESS_GROUP
    else:
        kwargs["start_new_session"] = True

    try:
        proc = subprocess.Popen(command, **kwargs)
    except OSError as exc:
        raise ProcessError(f"failed to spawn detached ffmpeg: {exc}", command=command) from exc

    logger.info("Started ffmpeg pid=%s (background)", proc.pid)
    return proc.pid


def terminate(pid: int, platform: Optional[str] = None) -> bool:
    """Ask process *pid* to exit.

    Returns whether the request was delivered, not whether the process
    has exited. A process that no longer exists gives False.
    """
    platform = platform or sys.platform
    if pid <= 0:
        return False
    if platform == "win32":
        return _taskkill(pid)

    try:
        os.kill(pid, signal.SIGTERM)
    except ProcessLookupError:
        logger.info("No process with pid=%s to terminate", pid)
        return False
    except PermissionError:
        logger.warning("Not permitted to terminate pid=%s", pid)
        return False
    except OSError as exc:
        raise ProcessError(f"failed to terminate pid {pid}: {exc}", pid=pid) from exc

    logger.info("Sent SIGTERM to pid=%s", pid)
    return True


def is_alive(pid: int, platform: Optional[str] = None) -> bool:
    """Whether a process with this id currently exists."""
    platform = platform or sys.platform
    if pid <= 0:
        return False
    if platform == "win32":
        return _tasklist_contains(pid)

    _reap(pid)
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # Exists, but owned by someone else
        return True
    except OSError as exc:
        raise ProcessError(f"failed to probe pid {pid}: {exc}", pid=pid) from exc
    return True


def _reap(pid: int) -> None:
    """Collect *pid* if it is an exited child of ours, so it stops probing alive."""
    try:
        os.waitpid(pid, os.WNOHANG)
    except ChildProcessError:
        pass


def _taskkill(pid: int) -> bool:
    command = ["taskkill", "/PID", str(pid), "/F"]
    try:
        result = subprocess.run(command, capture_output=True, text=True)
    except OSError as exc:
        raise ProcessError(f"failed to run taskkill: {exc}", pid=pid, command=command) from exc

    if result.returncode != 0:
        logger.warning("taskkill failed for pid=%s: %s", pid, (result.stderr or "").strip())
        return False
    logger.info("taskkill stopped pid=%s", pid)
    return True


def _tasklist_contains(pid: int) -> bool:
    """Query tasklist and match the PID column exactly."""
    command = ["tasklist", "/FI", f"PID eq {pid}", "/FO", "CSV", "/NH"]
    try:
        result = subprocess.run(command, capture_output=True, text=True)
    except OSError as exc:
        raise ProcessError(f"failed to run tasklist: {exc}", pid=pid, command=command) from exc
    if result.returncode != 0:
        raise ProcessError(
            f"tasklist exited with status {result.returncode}", pid=pid, command=command
        )

    # "ffmpeg.exe","1234","Console","1","12,345 K"
    for row in csv.reader(io.StringIO(result.stdout)):
        if len(row) >= 2 and row[1].strip() == str(pid):
            return True
    return False
