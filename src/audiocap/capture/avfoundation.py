"""AVFoundation capture on macOS."""

from __future__ import annotations

from typing import Optional

from audiocap.capture.base import CaptureBackend, DeviceSpec
from audiocap.constants import FFMPEG
from audiocap.errors import ConfigurationError

DEFAULT_MIC = ":0"


class AvfoundationBackend(CaptureBackend):
    """macOS has no built-in loopback; a virtual driver must be named."""

    _prelude = ("-f", "avfoundation")

    def system_spec(self, override: Optional[str] = None) -> DeviceSpec:
        if not override:
            raise ConfigurationError(
                "On macOS you must provide a loopback device for system audio "
                "(e.g. --system ':BlackHole 2ch').\n"
                "Install BlackHole: https://github.com/ExistentialAudio/BlackHole\n"
                "  brew install blackhole-2ch"
            )
        return DeviceSpec(device=override, prelude=self._prelude)

    def mic_spec(self, override: Optional[str] = None) -> DeviceSpec:
        return DeviceSpec(device=override or DEFAULT_MIC, prelude=self._prelude)

    def listing_commands(self) -> list[tuple[str, list[str]]]:
        return [(
            "macOS (AVFoundation) devices",
            [FFMPEG, "-hide_banner", "-f", "avfoundation", "-list_devices", "true", "-i", ""],
        )]

    def guidance(self) -> Optional[str]:
        return "Note: macOS requires a loopback device (BlackHole/Loopback) for system audio."
