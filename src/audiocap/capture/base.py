"""Capture backend interface and shared data types."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from audiocap.constants import MP3_BITRATE
from audiocap.errors import ConfigurationError


class Container(str, Enum):
    """Output container; decides the codec and the file extension."""
    WAV = "wav"
    MP3 = "mp3"

    @classmethod
    def parse(cls, value: str | Container) -> Container:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(c.value for c in cls)
            raise ConfigurationError(
                f"Unsupported output format: {value!r}. Choose from: {choices}"
            ) from None

    @property
    def extension(self) -> str:
        return self.value

    @property
    def codec_args(self) -> list[str]:
        if self is Container.MP3:
            return ["-c:a", "libmp3lame", "-b:a", MP3_BITRATE]
        return ["-c:a", "pcm_s16le"]


@dataclass(frozen=True)
class RecorderConfig:
    """Platform-neutral recording configuration."""
    out_dir: Path = Path("recordings")
    format: Container = Container.WAV
    prefer_pipewire: bool = False
    wasapi: bool = False


@dataclass(frozen=True)
class DeviceSpec:
    """One ffmpeg input: flags before ``-i`` and the device passed to it."""
    device: str
    prelude: tuple[str, ...] = ()
    format_flags: tuple[str, ...] = ()

    def input_args(self) -> list[str]:
        return [*self.prelude, *self.format_flags, "-i", self.device]


@dataclass(frozen=True)
class InputPlan:
    system: DeviceSpec
    mic: DeviceSpec


class CaptureBackend(ABC):
    """Per-platform ffmpeg capture backend.

    Subclasses decide the input format, the default devices and any extra
    flags. Overrides only ever replace the device string.
    """

    def __init__(self, config: RecorderConfig):
        self.config = config

    @abstractmethod
    def system_spec(self, override: Optional[str] = None) -> DeviceSpec:
        """Spec for the system-audio (loopback) input."""
        ...

    @abstractmethod
    def mic_spec(self, override: Optional[str] = None) -> DeviceSpec:
        """Spec for the microphone input."""
        ...

    @abstractmethod
    def listing_commands(self) -> list[tuple[str, list[str]]]:
        """(heading, argv) pairs that print this platform's devices."""
        ...

    def guidance(self) -> Optional[str]:
        """Setup hints shown after the device listing."""
        return None

    def resolve(self, mic: Optional[str] = None, system: Optional[str] = None) -> InputPlan:
        return InputPlan(system=self.system_spec(system), mic=self.mic_spec(mic))
