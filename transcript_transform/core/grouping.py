"""Grouping operators that fold consecutive events into runs.

WHY: Different consumers want different shapes of the same transcript:
captions want a few seconds per block, readers want sentences, editors
want paragraphs split at pauses. Each shape is "merge neighbours until
something happens", so every operator is the same fold with a different
stopping rule.

HOW: _fold_runs() walks the input with a one-event accumulator. For
each following event it asks the operator's predicate whether the run
continues; if so the event is combined into the accumulator, otherwise
the accumulator is emitted and the event seeds the next run. Predicates
are built fresh for every run so they can keep per-run state (merged
silence, merged count).

RULES:
- Merging always uses Event.combine (start of first, end of last)
- Order-preserving, lossless, never emits an empty run
- A partial run is emitted as-is when the input ends
- Operators return lazy iterators; output of one is valid input to any other
- Gaps are computed as next.start - acc.end, saturated at 0 for overlaps
- Only ASCII ".", "!" and "?" terminate a sentence
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, Optional

from transcript_transform.core.ir import Event

logger = logging.getLogger(__name__)

# Characters that end a sentence when they are the last character of
# an accumulated text longer than one character.
SENTENCE_TERMINATORS = frozenset({".", "!", "?"})

# A predicate receives the accumulator and the upcoming event and
# returns True when the upcoming event belongs to the same run.
RunPredicate = Callable[[Event, Event], bool]


def _fold_runs(
    events: Iterable[Event],
    new_predicate: Callable[[], RunPredicate],
) -> Iterator[Event]:
    acc = None  # type: Optional[Event]
    continues = new_predicate()
    for event in events:
        if acc is None:
            acc = event
        elif continues(acc, event):
            acc = acc.combine(event)
        else:
            yield acc
            acc = event
            continues = new_predicate()
    if acc is not None:
        yield acc


def _gap(acc: Event, upcoming: Event) -> int:
    """Silence between two events in ms, saturated at 0 when they overlap."""
    gap = upcoming.start - acc.end
    if gap < 0:
        logger.debug(
            "Event at %d ms overlaps previous end %d ms; treating gap as 0",
            upcoming.start, acc.end,
        )
        return 0
    return gap


def _require_non_negative(value: int, name: str) -> None:
    if value < 0:
        raise ValueError("{} must be >= 0, got {}".format(name, value))


def _require_positive(value: int, name: str) -> None:
    if value < 1:
        raise ValueError("{} must be >= 1, got {}".format(name, value))


def count_words(text: str) -> int:
    """Number of maximal non-whitespace runs in ``text``."""
    return len(text.split())


def ends_sentence(text: str) -> bool:
    """True if the last character is a terminator and not the only character.

    A lone "." fragment does not count, so a stray punctuation event is
    merged forward instead of closing a sentence on its own.
    """
    return len(text) > 1 and text[-1] in SENTENCE_TERMINATORS


def max_silence(events: Iterable[Event], silence_ms: int) -> Iterator[Event]:
    """Merge until the silence accumulated inside a run would reach ``silence_ms``.

    WHY: Pauses add up. A speaker who hesitates many times in a row has
    moved on even if no single pause was long.

    HOW: Each run keeps a running total of the gaps already merged.
    The upcoming event joins the run while total + gap < silence_ms.

    RULES:
    - total starts at 0 for every run
    - the comparison is strict: reaching the limit ends the run
    """
    _require_non_negative(silence_ms, "silence_ms")

    def new_predicate() -> RunPredicate:
        total = 0

        def continues(acc: Event, upcoming: Event) -> bool:
            nonlocal total
            gap = _gap(acc, upcoming)
            if total + gap < silence_ms:
                total += gap
                return True
            return False

        return continues

    return _fold_runs(events, new_predicate)


def by_gap(events: Iterable[Event], gap_ms: int) -> Iterator[Event]:
    """Merge while the gap to the upcoming event is shorter than ``gap_ms``."""
    _require_non_negative(gap_ms, "gap_ms")

    def continues(acc: Event, upcoming: Event) -> bool:
        return _gap(acc, upcoming) < gap_ms

    return _fold_runs(events, lambda: continues)


def sentences(events: Iterable[Event]) -> Iterator[Event]:
    """Merge up to and including the next sentence-ending event.

    The accumulated text, not the upcoming event, decides: a run closes
    once its text ends in ".", "!" or "?". Trailing whitespace after the
    terminator keeps the run open.
    """

    def continues(acc: Event, upcoming: Event) -> bool:
        return not ends_sentence(acc.text)

    return _fold_runs(events, lambda: continues)


def min_word_count(events: Iterable[Event], count: int) -> Iterator[Event]:
    """Merge until the accumulated text holds at least ``count`` words."""
    _require_positive(count, "count")

    def continues(acc: Event, upcoming: Event) -> bool:
        return count_words(acc.text) < count

    return _fold_runs(events, lambda: continues)


def lasting(events: Iterable[Event], duration_ms: int) -> Iterator[Event]:
    """Merge until the accumulated event lasts at least ``duration_ms``."""
    _require_non_negative(duration_ms, "duration_ms")

    def continues(acc: Event, upcoming: Event) -> bool:
        return acc.duration < duration_ms

    return _fold_runs(events, lambda: continues)


def chunks(events: Iterable[Event], size: int) -> Iterator[Event]:
    """Merge every ``size`` consecutive events into one; the last chunk may be shorter."""
    _require_positive(size, "size")

    def new_predicate() -> RunPredicate:
        merged = 1

        def continues(acc: Event, upcoming: Event) -> bool:
            nonlocal merged
            if merged < size:
                merged += 1
                return True
            return False

        return continues

    return _fold_runs(events, new_predicate)
