"""Human-readable formatter for reviewing transcripts in a terminal.

WHY: Reading CSV or SRT in a terminal is tiring. The pretty form puts
the time range and duration on one line and the text below it.

HOW: Each event becomes ``start - end (duration)``, then its trimmed
text, then a blank line. Written one event at a time so piping into
``head`` or ``less`` shows output immediately.

RULES:
- Range bounds use format_clock (mm:ss.cs, or h:mm:ss.cs past an hour)
- Duration uses format_seconds (ss.cs)
- Text line is Event.content
"""

from __future__ import annotations

from typing import Iterable, TextIO

from transcript_transform.core.ir import Event
from transcript_transform.formatters.base import BaseFormatter
from transcript_transform.formatters.timecode import format_clock, format_seconds


def format_pretty(event: Event) -> str:
    return "{} - {} ({})\n{}\n\n".format(
        format_clock(event.start),
        format_clock(event.end),
        format_seconds(event.duration),
        event.content,
    )


class PrettyFormatter(BaseFormatter):
    """Formatter that writes a readable time-stamped listing."""

    @property
    def name(self) -> str:
        return "Pretty text"

    def write(self, events: Iterable[Event], sink: TextIO) -> int:
        count = 0
        for event in events:
            sink.write(format_pretty(event))
            count += 1
        return count
