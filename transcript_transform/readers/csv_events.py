"""CSV decoder for ``start,end,text`` transcripts.

WHY: whisper.cpp and most speech-to-text wrappers write one row per
fragment with a ``start,end,text`` header and millisecond timestamps.

HOW: csv.DictReader over the (optionally repaired) line source. Each
row becomes an Event through Event.from_record(), lazily, so memory
stays bounded by a single row.

RULES:
- Header must contain start, end and text; other columns are ignored
- Blank lines are skipped
- Any malformed row raises InputFormatError naming its line number
- Start times must not decrease from one row to the next
- OSError from the source becomes InputReadError
"""

from __future__ import annotations

import csv
import logging
from typing import Iterable, Iterator, Optional

from transcript_transform.core.ir import Event
from transcript_transform.errors import InputFormatError, InputReadError
from transcript_transform.readers.csv_repair import QuoteRepairReader

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("start", "end", "text")


def read_csv_events(lines: Iterable[str], repair: bool = True) -> Iterator[Event]:
    """Decode CSV rows into events.

    Args:
        lines: Text line source, ideally opened with ``newline=""``.
        repair: Interpose QuoteRepairReader (the ``csv-fix`` input format).

    Yields:
        One Event per data row, in file order.

    Raises:
        InputFormatError: Missing header columns or a malformed row.
        InputReadError: The underlying source failed.
    """
    source = QuoteRepairReader(lines) if repair else lines
    previous = None  # type: Optional[Event]
    count = 0
    try:
        reader = csv.DictReader(source)
        fieldnames = reader.fieldnames
        if fieldnames is None:
            logger.debug("CSV input is empty")
            return
        missing = [c for c in REQUIRED_COLUMNS if c not in fieldnames]
        if missing:
            raise InputFormatError(
                "CSV header is missing column(s): {} (found: {})".format(
                    ", ".join(missing), ",".join(fieldnames)
                )
            )
        for row in reader:
            try:
                event = Event.from_record(row)
            except (KeyError, TypeError, ValueError) as e:
                raise InputFormatError(
                    "Malformed CSV record on line {}: {}".format(reader.line_num, e)
                ) from e
            if previous is not None and event.start < previous.start:
                raise InputFormatError(
                    "CSV record on line {} starts at {} ms, before the previous record at {} ms".format(
                        reader.line_num, event.start, previous.start
                    )
                )
            previous = event
            count += 1
            yield event
    except csv.Error as e:
        raise InputFormatError(
            "Malformed CSV on line {}: {}".format(reader.line_num, e)
        ) from e
    except UnicodeDecodeError as e:
        raise InputFormatError("CSV input is not valid UTF-8: {}".format(e)) from e
    except OSError as e:
        raise InputReadError("Failed to read CSV input: {}".format(e)) from e
    logger.debug("Decoded %d CSV record(s)", count)
