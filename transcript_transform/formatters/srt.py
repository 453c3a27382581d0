"""SubRip (SRT) formatter.

WHY: SRT is the lowest common denominator for subtitles; every player
and editor can load it.

HOW: Streams one block per event: the 1-based index, the timestamp
line, the trimmed event text, and a blank line.

RULES:
- Indices are 1-based and consecutive
- Timestamps are HH:MM:SS,mmm (see timecode.format_srt_time)
- The caption line is Event.content (surrounding whitespace stripped)
- Timing is written exactly as received; no overlap or minimum-duration fixes
"""

from __future__ import annotations

from typing import Iterable, TextIO

from transcript_transform.core.ir import Event
from transcript_transform.formatters.base import BaseFormatter
from transcript_transform.formatters.timecode import format_srt_time


def format_srt_block(index: int, event: Event) -> str:
    """One SRT caption block, including its trailing blank line."""
    return "{}\n{} --> {}\n{}\n\n".format(
        index,
        format_srt_time(event.start),
        format_srt_time(event.end),
        event.content,
    )


class SRTFormatter(BaseFormatter):
    """Formatter that writes events as SubRip caption blocks."""

    @property
    def name(self) -> str:
        return "SubRip (SRT)"

    def write(self, events: Iterable[Event], sink: TextIO) -> int:
        count = 0
        for count, event in enumerate(events, 1):
            sink.write(format_srt_block(count, event))
        return count
