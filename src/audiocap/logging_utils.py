"""Configure the shared audiocap logger."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

LOGGER = logging.getLogger("audiocap")

_FILE_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def setup_logger(log_path: Path | None = None, verbose: bool = False) -> logging.Logger:
    """Send audiocap logs to stderr and, if given, to *log_path*.

    May be called repeatedly: the stderr handler is rebound to the current
    ``sys.stderr`` and the file handler is only replaced when the path changes.
    """
    LOGGER.setLevel(logging.DEBUG)

    for handler in list(LOGGER.handlers):
        if type(handler) is logging.StreamHandler:
            LOGGER.removeHandler(handler)

    stream = logging.StreamHandler(sys.stderr)
    stream.setLevel(logging.DEBUG if verbose else logging.WARNING)
    stream.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    LOGGER.addHandler(stream)

    if log_path is None:
        return LOGGER

    target = os.path.abspath(log_path)
    for handler in list(LOGGER.handlers):
        if isinstance(handler, logging.FileHandler):
            if handler.baseFilename == target:
                return LOGGER
            LOGGER.removeHandler(handler)
            handler.close()

    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
    except OSError as exc:
        LOGGER.debug("Could not open log file path=%s err=%s", log_path, exc)
        return LOGGER

    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    LOGGER.addHandler(file_handler)
    return LOGGER
