"""JSON decoder for ``{start, end, text}`` records.

WHY: Some producers (and this tool's own ``--format json``) write the
transcript as one JSON array; others stream one object per line.

HOW: Read the whole source, then repeatedly raw_decode() values
separated by whitespace. Objects become events; arrays contribute
each of their objects in order.

RULES:
- Accepts a top-level array, a stream of objects, or a mix of both
- Every record needs integer start/end and string text; extra keys ignored
- Start times must not decrease from one record to the next
- Anything else raises InputFormatError with its character offset
- OSError from the source becomes InputReadError
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterator, Optional, TextIO

from transcript_transform.core.ir import Event
from transcript_transform.errors import InputFormatError, InputReadError

logger = logging.getLogger(__name__)

_DECODER = json.JSONDecoder()


def _skip_whitespace(raw: str, pos: int) -> int:
    while pos < len(raw) and raw[pos].isspace():
        pos += 1
    return pos


def _to_event(value: Any, offset: int) -> Event:
    if not isinstance(value, dict):
        raise InputFormatError(
            "Expected a JSON object at offset {}, got {}".format(offset, type(value).__name__)
        )
    try:
        return Event.from_record(value)
    except KeyError as e:
        raise InputFormatError(
            "JSON record at offset {} is missing field {}".format(offset, e)
        ) from e
    except (TypeError, ValueError) as e:
        raise InputFormatError(
            "Malformed JSON record at offset {}: {}".format(offset, e)
        ) from e


def read_json_events(stream: TextIO) -> Iterator[Event]:
    """Decode a JSON array or whitespace-separated stream of records.

    Raises:
        InputFormatError: Invalid JSON or a value that is not a record.
        InputReadError: The underlying source failed.
    """
    try:
        raw = stream.read()
    except UnicodeDecodeError as e:
        raise InputFormatError("JSON input is not valid UTF-8: {}".format(e)) from e
    except OSError as e:
        raise InputReadError("Failed to read JSON input: {}".format(e)) from e

    count = 0
    previous = None  # type: Optional[Event]
    pos = _skip_whitespace(raw, 0)
    while pos < len(raw):
        try:
            value, end = _DECODER.raw_decode(raw, pos)
        except json.JSONDecodeError as e:
            raise InputFormatError("Invalid JSON: {}".format(e)) from e
        for item in value if isinstance(value, list) else [value]:
            event = _to_event(item, pos)
            if previous is not None and event.start < previous.start:
                raise InputFormatError(
                    "JSON record at offset {} starts at {} ms, before the previous record at {} ms".format(
                        pos, event.start, previous.start
                    )
                )
            previous = event
            count += 1
            yield event
        pos = _skip_whitespace(raw, end)
    logger.debug("Decoded %d JSON record(s)", count)
