"""The Event record shared by every pipeline stage.

WHY: Speech-to-text output, the normalizer, the grouping operators,
and the encoders all speak about the same thing: a span of time with
some text in it. A single immutable record keeps the stages decoupled.

HOW: Event is a frozen dataclass of integer milliseconds and raw text.
Two composition methods build new events: combine() spans both
operands, absorb() keeps the left operand's time range and only
appends text.

RULES:
- start and end are integer milliseconds, 0 <= start <= end
- text is never trimmed here; leading whitespace marks a new fragment
- Concatenation never inserts a separator
- Events are never mutated; every operation returns a new Event
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class Event:
    """One timed speech segment.

    RULES:
    - duration: end - start, in milliseconds
    - content: text with surrounding whitespace stripped (rendering only)
    - is_continuation: text is non-empty and does not start with whitespace
    """

    start: int
    end: int
    text: str

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError("start must be >= 0, got {}".format(self.start))
        if self.end < self.start:
            raise ValueError(
                "end ({}) must not precede start ({})".format(self.end, self.start)
            )

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def content(self) -> str:
        return self.text.strip()

    @property
    def is_continuation(self) -> bool:
        return bool(self.text) and not self.text[0].isspace()

    def combine(self, other: Event) -> Event:
        """Merge with a following event; the result spans both time ranges."""
        return Event(start=self.start, end=other.end, text=self.text + other.text)

    def absorb(self, other: Event) -> Event:
        """Append another event's text without extending this event's time range."""
        return Event(start=self.start, end=self.end, text=self.text + other.text)

    def with_end(self, end: int) -> Event:
        return Event(start=self.start, end=end, text=self.text)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Event:
        """Build an Event from a decoded ``{start, end, text}`` mapping.

        WHY: Both the CSV and JSON decoders end up with a mapping per
        record. Validation lives here so both report the same problems.

        RULES:
        - start/end must be integers (or integer strings, as CSV yields)
        - booleans and floats are rejected, not coerced
        - text must be a string
        - Raises KeyError for missing fields, ValueError/TypeError otherwise
        """
        start = _to_millis(record["start"], "start")
        end = _to_millis(record["end"], "end")
        text = record["text"]
        if not isinstance(text, str):
            raise TypeError("text must be a string, got {}".format(type(text).__name__))
        return cls(start=start, end=end, text=text)

    def to_record(self) -> Dict[str, Any]:
        return {"start": self.start, "end": self.end, "text": self.text}


def _to_millis(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise TypeError("{} must be an integer, got a boolean".format(field_name))
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isascii() and stripped.isdigit():
            return int(stripped)
        raise ValueError("{} must be a non-negative integer, got {!r}".format(field_name, value))
    raise TypeError(
        "{} must be an integer, got {}".format(field_name, type(value).__name__)
    )
