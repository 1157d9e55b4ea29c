"""PulseAudio capture on Linux (also served by pipewire-pulse)."""

from __future__ import annotations

from typing import Optional

from audiocap.capture.base import CaptureBackend, DeviceSpec
from audiocap.constants import THREAD_QUEUE_SIZE

DEFAULT_SINK_MONITOR = "@DEFAULT_SINK@.monitor"
DEFAULT_SOURCE = "@DEFAULT_SOURCE@"


class PulseBackend(CaptureBackend):
    """Records through ffmpeg's ``pulse`` input.

    System audio is the monitor of the default sink. Both inputs get a larger
    thread queue; pulse delivers small packets and ffmpeg otherwise drops them.
    """

    _prelude = ("-f", "pulse")
    _format_flags = ("-thread_queue_size", THREAD_QUEUE_SIZE)

    def system_spec(self, override: Optional[str] = None) -> DeviceSpec:
        return DeviceSpec(
            device=override or DEFAULT_SINK_MONITOR,
            prelude=self._prelude,
            format_flags=self._format_flags,
        )

    def mic_spec(self, override: Optional[str] = None) -> DeviceSpec:
        return DeviceSpec(
            device=override or DEFAULT_SOURCE,
            prelude=self._prelude,
            format_flags=self._format_flags,
        )

    def listing_commands(self) -> list[tuple[str, list[str]]]:
        pulse = [
            ("Linux: PulseAudio (pactl list short sources)", ["pactl", "list", "short", "sources"]),
            ("Linux: PulseAudio (pactl info)", ["pactl", "info"]),
        ]
        pipewire = [("Linux: PipeWire (pw-cli ls Node)", ["pw-cli", "ls", "Node"])]
        if self.config.prefer_pipewire:
            return pipewire + pulse
        return pulse + pipewire

    def guidance(self) -> Optional[str]:
        return (
            "Monitor sources (names ending in .monitor) capture system audio.\n"
            "Pass one with --system, or a source name with --mic."
        )
