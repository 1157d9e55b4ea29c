"""Best-effort device listing through each platform's own tools."""

from __future__ import annotations

import logging
import subprocess
from typing import Optional

import click

from audiocap.capture import RecorderConfig, get_backend

logger = logging.getLogger(__name__)

_LIST_TIMEOUT = 10  # seconds


def _run_listing(argv: list[str]) -> Optional[str]:
    """Run one listing tool, returning its combined output or None on failure."""
    try:
        result = subprocess.run(
            argv,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            timeout=_LIST_TIMEOUT,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.info("Skipping %s: %s", argv[0], exc)
        return None
    # ffmpeg's -list_devices prints to stderr and exits non-zero by design
    return (result.stdout or "") + (result.stderr or "")


def list_devices(config: RecorderConfig, platform: Optional[str] = None) -> None:
    """Print raw device listings for the current platform to stderr.

    A missing tool is skipped so the others still run.
    """
    backend = get_backend(config, platform)

    for i, (heading, argv) in enumerate(backend.listing_commands()):
        prefix = "\n" if i else ""
        click.echo(f"{prefix}=== {heading} ===", err=True)
        output = _run_listing(argv)
        if output is None:
            click.echo(f"({argv[0]} not available)", err=True)
        elif output:
            click.echo(output.rstrip("\n"), err=True)

    guidance = backend.guidance()
    if guidance:
        click.echo(f"\n{guidance}", err=True)
