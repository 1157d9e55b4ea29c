"""Shared constants and defaults."""

APP_NAME = "audiocap"

FFMPEG = "ffmpeg"
PIDFILE_NAME = "audiocap.pid"
LOG_FILE_NAME = "audiocap.log"

GLOBAL_FLAGS = ["-hide_banner", "-y"]
MIX_FILTER = "amix=inputs=2:duration=longest:dropout_transition=2"
MP3_BITRATE = "192k"
THREAD_QUEUE_SIZE = "1024"

DEFAULT_FORMAT = "wav"
VALID_FORMATS = ("wav", "mp3")

FILENAME_TIME_FORMAT = "%Y-%m-%d_%H-%M-%S"
