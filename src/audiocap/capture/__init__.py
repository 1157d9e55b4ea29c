"""Platform capture backends."""

from __future__ import annotations

import sys
from typing import Optional

from audiocap.capture.base import (
    CaptureBackend,
    Container,
    DeviceSpec,
    InputPlan,
    RecorderConfig,
)
from audiocap.errors import ConfigurationError


def get_backend(config: RecorderConfig, platform: Optional[str] = None) -> CaptureBackend:
    """Pick the capture backend for *platform* (default: the running one)."""
    platform = platform or sys.platform

    if platform.startswith("linux"):
        from audiocap.capture.pulse import PulseBackend

        return PulseBackend(config)
    if platform == "darwin":
        from audiocap.capture.avfoundation import AvfoundationBackend

        return AvfoundationBackend(config)
    if platform == "win32":
        from audiocap.capture.windows import DshowBackend, WasapiBackend

        return WasapiBackend(config) if config.wasapi else DshowBackend(config)

    raise ConfigurationError(f"Unsupported platform: {platform}")


def resolve_inputs(
    config: RecorderConfig,
    mic: Optional[str] = None,
    system: Optional[str] = None,
    platform: Optional[str] = None,
) -> InputPlan:
    """Resolve the system (input 0) and microphone (input 1) specs."""
    return get_backend(config, platform).resolve(mic=mic, system=system)


__all__ = [
    "CaptureBackend",
    "Container",
    "DeviceSpec",
    "InputPlan",
    "RecorderConfig",
    "get_backend",
    "resolve_inputs",
]
