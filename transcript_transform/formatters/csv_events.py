"""CSV formatter: the same ``start,end,text`` shape the CSV reader accepts.

RULES:
- Header row: start,end,text
- Raw integers and raw (untrimmed) text; quoting only where needed
- "\n" line terminator
- Flushes the sink once all rows are written
"""

from __future__ import annotations

import csv
from typing import Iterable, TextIO

from transcript_transform.core.ir import Event
from transcript_transform.formatters.base import BaseFormatter

FIELDNAMES = ["start", "end", "text"]


class CSVFormatter(BaseFormatter):
    """Formatter that writes one CSV row per event."""

    @property
    def name(self) -> str:
        return "CSV"

    def write(self, events: Iterable[Event], sink: TextIO) -> int:
        writer = csv.writer(sink, lineterminator="\n")
        writer.writerow(FIELDNAMES)
        count = 0
        for event in events:
            writer.writerow([event.start, event.end, event.text])
            count += 1
        sink.flush()
        return count
