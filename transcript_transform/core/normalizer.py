"""Continuation joining and utterance duration clamping.

WHY: whisper.cpp-style engines emit sub-word fragments. A fragment
that starts a new utterance begins with a space; a fragment without
one continues the previous token mid-word (" Hello" + "world").
Grouping operators expect whole utterances, and upstream models often
report an end timestamp far past the acoustic end of an utterance.

HOW: Walk the events in order with a one-event accumulator. While the
next event is a continuation, absorb it (append its text, keep the
accumulator's time range). Emit the accumulator when a non-continuation
arrives or the input ends, clamping its duration to
MAX_UTTERANCE_DURATION_MS on the way out.

RULES:
- absorb, never combine: continuations add text, not time
- end is clamped to start + MAX_UTTERANCE_DURATION_MS; start never moves
- The continuation test is replaceable for producers that do not mark
  new fragments with leading whitespace
- Runs unconditionally, before any grouping operator
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, Optional

from transcript_transform.core.ir import Event

logger = logging.getLogger(__name__)

MAX_UTTERANCE_DURATION_MS = 500
"""Upper bound on the displayed duration of one joined utterance."""


def starts_without_space(event: Event) -> bool:
    """Default continuation test: non-empty text not starting with whitespace."""
    return event.is_continuation


def clamp_duration(event: Event, limit: int = MAX_UTTERANCE_DURATION_MS) -> Event:
    """Shorten an event so that its duration does not exceed ``limit`` ms."""
    if event.duration > limit:
        return event.with_end(event.start + limit)
    return event


def join_continuations(
    events: Iterable[Event],
    is_continuation: Optional[Callable[[Event], bool]] = None,
) -> Iterator[Event]:
    """Merge continuation fragments into whole utterances.

    Args:
        events: Decoded events in input order.
        is_continuation: Predicate marking an event as part of the
            previous utterance. Defaults to starts_without_space().

    Yields:
        One clamped Event per utterance, in input order.
    """
    if is_continuation is None:
        is_continuation = starts_without_space

    acc = None  # type: Optional[Event]
    joined = 0
    for event in events:
        if acc is not None and is_continuation(event):
            acc = acc.absorb(event)
            joined += 1
            continue
        if acc is not None:
            yield clamp_duration(acc)
        acc = event

    if acc is not None:
        yield clamp_duration(acc)

    logger.debug("Absorbed %d continuation fragment(s)", joined)
