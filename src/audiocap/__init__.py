"""Record microphone and system audio with ffmpeg."""

__version__ = "0.1.0"
