"""JSON formatter: one array of ``{start, end, text}`` objects.

WHY: JSON output feeds other tools, including this one's JSON reader.

HOW: Materializes every event into a list of dicts, then serializes the
array in one json.dump() call.

RULES:
- Keys in order start, end, text; text is raw (untrimmed)
- Non-ASCII text is written as-is (ensure_ascii=False)
- Holds the whole output in memory; prefer CSV/SRT/pretty for huge inputs
- Output ends with a newline
"""

from __future__ import annotations

import json
from typing import Iterable, TextIO

from transcript_transform.core.ir import Event
from transcript_transform.formatters.base import BaseFormatter


class JSONFormatter(BaseFormatter):
    """Formatter that writes all events as a single JSON array."""

    @property
    def name(self) -> str:
        return "JSON"

    def write(self, events: Iterable[Event], sink: TextIO) -> int:
        records = [event.to_record() for event in events]
        json.dump(records, sink, ensure_ascii=False)
        sink.write("\n")
        return len(records)
