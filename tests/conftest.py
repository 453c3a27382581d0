"""Shared test fixtures for the transcript_transform test suite.

WHY: Several test modules need the same realistic whisper.cpp-style
fragments and the same small helpers for building events. Centralizing
them keeps expected values consistent across modules.

HOW: WHISPER_FRAGMENTS mirrors what whisper.cpp writes with -ocsv:
new utterances start with a space, sub-word continuations do not.
Fixtures return fresh copies so tests can mutate freely.

RULES:
- Times are integer milliseconds
- make_events() spaces events 100 ms apart unless told otherwise
"""

from typing import List, Optional, Sequence

import pytest

from transcript_transform.core.ir import Event


WHISPER_FRAGMENTS: List[Event] = [
    Event(0, 320, " And"),
    Event(320, 610, " so"),
    Event(610, 900, " my"),
    Event(900, 1220, " fellow"),
    Event(1220, 1800, " Amer"),
    Event(1800, 2050, "icans"),
    Event(2050, 2100, ","),
    Event(2400, 2700, " ask"),
    Event(2700, 2950, " not"),
    Event(2950, 3200, " what"),
    Event(3200, 3500, " your"),
    Event(3500, 3900, " country"),
    Event(3900, 4200, " can"),
    Event(4200, 4400, " do"),
    Event(4400, 4600, " for"),
    Event(4600, 4800, " you"),
    Event(4800, 4850, "."),
]

WHISPER_CSV = """start,end,text
0,320," And"
320,610," so"
610,900," my"
900,1220," fellow"
1220,1800," Amer"
1800,2050,"icans"
2050,2100,",,"
2400,2700," ask"
"""


def make_events(texts: Sequence[str], step: int = 100, length: Optional[int] = None) -> List[Event]:
    """Build events i*step .. i*step+length (length defaults to step)."""
    if length is None:
        length = step
    return [Event(i * step, i * step + length, text) for i, text in enumerate(texts)]


def concat_text(events) -> str:
    return "".join(e.text for e in events)


@pytest.fixture
def whisper_fragments():
    return list(WHISPER_FRAGMENTS)


@pytest.fixture
def whisper_csv():
    return WHISPER_CSV
