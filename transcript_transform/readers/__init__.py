"""Input decoder registry.

WHY: The CLI selects a decoder by its ``--input-format`` name. One dict
keeps the names, and adding a format means one module plus one line.

HOW: READERS maps format names to callables taking an open text stream
and returning a lazy iterator of Event records.

RULES:
- "csv-fix": CSV with the whisper.cpp quote repair (the default)
- "csv": strict CSV
- "json": JSON array or stream of objects
"""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict, Iterator, TextIO

from transcript_transform.core.ir import Event
from transcript_transform.readers.csv_events import read_csv_events
from transcript_transform.readers.json_events import read_json_events

READERS: Dict[str, Callable[[TextIO], Iterator[Event]]] = {
    "csv-fix": partial(read_csv_events, repair=True),
    "csv": partial(read_csv_events, repair=False),
    "json": read_json_events,
}
