"""WASAPI and DirectShow capture on Windows."""

from __future__ import annotations

from typing import Optional

from audiocap.capture.base import CaptureBackend, DeviceSpec
from audiocap.constants import FFMPEG

_WINDOWS_TIP = (
    "Tips: For system audio you may need Stereo Mix or a virtual loopback device."
)


class WasapiBackend(CaptureBackend):
    """WASAPI input; system audio is the loopback of the default render device."""

    def system_spec(self, override: Optional[str] = None) -> DeviceSpec:
        return DeviceSpec(
            device=override or "default",
            prelude=("-loopback", "1", "-f", "wasapi"),
        )

    def mic_spec(self, override: Optional[str] = None) -> DeviceSpec:
        return DeviceSpec(device=override or "default", prelude=("-f", "wasapi"))

    def listing_commands(self) -> list[tuple[str, list[str]]]:
        return [(
            "Windows (WASAPI) devices",
            [FFMPEG, "-hide_banner", "-f", "wasapi", "-list_devices", "true", "-i", "dummy"],
        )]

    def guidance(self) -> Optional[str]:
        return _WINDOWS_TIP


class DshowBackend(CaptureBackend):
    """DirectShow input; system audio needs a capture filter such as
    virtual-audio-capturer (screen-capture-recorder)."""

    _prelude = ("-f", "dshow")

    def system_spec(self, override: Optional[str] = None) -> DeviceSpec:
        return DeviceSpec(device=override or "audio=virtual-audio-capturer", prelude=self._prelude)

    def mic_spec(self, override: Optional[str] = None) -> DeviceSpec:
        return DeviceSpec(device=override or "audio=Microphone (default)", prelude=self._prelude)

    def listing_commands(self) -> list[tuple[str, list[str]]]:
        return [(
            "Windows (DirectShow) devices",
            [FFMPEG, "-hide_banner", "-list_devices", "true", "-f", "dshow", "-i", "dummy"],
        )]

    def guidance(self) -> Optional[str]:
        return _WINDOWS_TIP
