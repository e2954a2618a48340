"""
Go-style duration strings (e.g. "30m", "72h", "1m30s", "1.5h").
"""

import re
from datetime import timedelta
from decimal import Decimal

from .errors import ConfigError

_NANOSECONDS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60_000_000_000,
    "h": 3_600_000_000_000,
}

_COMPONENT_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(text: str) -> timedelta:
    """
    Parse a Go-style duration string.

    Args:
        text: Duration such as "90s", "1h30m" or "2.5h"

    Returns:
        Parsed duration

    Raises:
        ConfigError: If the string is malformed or not a positive duration
    """
    value = (text or "").strip()
    if not value:
        raise ConfigError("failed to parse duration: empty value")

    nanoseconds = 0
    position = 0
    while position < len(value):
        match = _COMPONENT_RE.match(value, position)
        if not match:
            raise ConfigError(f"failed to parse duration: {text}")
        nanoseconds += int(Decimal(match.group(1)) * _NANOSECONDS[match.group(2)])
        position = match.end()

    if nanoseconds <= 0:
        raise ConfigError(f"must be a positive duration: {text}")
    # timedelta resolution is 1us; keep sub-microsecond durations positive
    return timedelta(microseconds=max(1, nanoseconds // 1000))


def format_duration(duration: timedelta) -> str:
    """Render a duration compactly, e.g. timedelta(hours=1, seconds=30) -> "1h0m30s"."""
    total = duration.total_seconds()
    if total < 1:
        return f"{total * 1000:g}ms"

    hours, remainder = divmod(int(total), 3600)
    minutes, seconds = divmod(remainder, 60)
    seconds += total - int(total)
    if hours:
        return f"{hours}h{minutes}m{seconds:g}s"
    if minutes:
        return f"{minutes}m{seconds:g}s"
    return f"{seconds:g}s"
