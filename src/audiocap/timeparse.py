"""Duration parsing for the --duration option."""

from __future__ import annotations

import re

_DURATION_RE = re.compile(
    r"^(?:(\d+)h)?(?:(\d+)m)?(?:(\d+)s)?$", re.IGNORECASE
)

_CLOCK_RE = re.compile(r"^\d+:\d{2}:\d{2}(?:\.\d+)?$")

_SECONDS_RE = re.compile(r"^\d+(?:\.\d+)?$")


def parse_duration(s: str) -> float:
    """Parse a duration string like '5m', '1h30m', '2h30m30s' into seconds.

    Raises ValueError on invalid input.
    """
    s = s.strip()
    if not s:
        raise ValueError("Empty duration string")

    m = _DURATION_RE.match(s)
    if not m or not any(m.groups()):
        raise ValueError(f"Invalid duration: {s!r}")

    hours = int(m.group(1) or 0)
    minutes = int(m.group(2) or 0)
    seconds = int(m.group(3) or 0)
    total = hours * 3600 + minutes * 60 + seconds
    if total <= 0:
        raise ValueError(f"Duration must be positive: {s!r}")
    return float(total)


def normalize_duration(s: str) -> str:
    """Turn a user-supplied duration into a value for ffmpeg's -t.

    'HH:MM:SS' and plain seconds pass through as given. The compact form
    ('90s', '10m', '1h30m') becomes whole seconds. Anything else is passed
    through unchanged for ffmpeg to accept or reject.
    """
    s = s.strip()
    if not s:
        raise ValueError("Empty duration string")

    if _CLOCK_RE.match(s) or _SECONDS_RE.match(s):
        return s

    try:
        return str(int(parse_duration(s)))
    except ValueError:
        return s
