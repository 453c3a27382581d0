"""Millisecond clock rendering for SRT and pretty output.

RULES:
- SRT: HH:MM:SS,mmm, every component zero-padded, hours at least 2 digits
- Clock: mm:ss.cs below one hour, h:mm:ss.cs from one hour on
- Seconds: ss.cs with total whole seconds (not wrapped at 60)
- Centiseconds are truncated (ms // 10), never rounded
"""

from __future__ import annotations

from typing import Tuple

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE


def _split(ms: int) -> Tuple[int, int, int, int]:
    hours, rest = divmod(ms, MS_PER_HOUR)
    minutes, rest = divmod(rest, MS_PER_MINUTE)
    seconds, millis = divmod(rest, MS_PER_SECOND)
    return hours, minutes, seconds, millis


def format_srt_time(ms: int) -> str:
    """Convert milliseconds to SRT timestamp format: HH:MM:SS,mmm"""
    hours, minutes, seconds, millis = _split(ms)
    return "{:02d}:{:02d}:{:02d},{:03d}".format(hours, minutes, seconds, millis)


def format_clock(ms: int) -> str:
    """Render a point in time as ``mm:ss.cs``, or ``h:mm:ss.cs`` past one hour."""
    hours, minutes, seconds, millis = _split(ms)
    if hours:
        return "{}:{:02d}:{:02d}.{:02d}".format(hours, minutes, seconds, millis // 10)
    return "{:02d}:{:02d}.{:02d}".format(minutes, seconds, millis // 10)


def format_seconds(ms: int) -> str:
    """Render a duration as ``ss.cs``."""
    seconds, millis = divmod(ms, MS_PER_SECOND)
    return "{:02d}.{:02d}".format(seconds, millis // 10)
