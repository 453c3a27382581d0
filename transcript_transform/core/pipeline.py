"""Fixed-order assembly of the normalizer and grouping operators.

WHY: Grouping operators do not commute: sentences-then-chunks is not
chunks-then-sentences. Callers choose which operators to enable, never
the order, so the same options always yield the same output.

HOW: GroupingPipeline holds one optional setting per operator.
apply() wraps the input iterator with each enabled operator in the
order max_silence → by_gap → sentences → min_word_count → lasting →
chunks. transform_events() runs the normalizer first, then the stack.

RULES:
- Disabled operators are identities
- The order above is part of the contract; do not derive it from flags
- Nothing is evaluated until the caller pulls from the result
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from transcript_transform.core import grouping
from transcript_transform.core.ir import Event
from transcript_transform.core.normalizer import join_continuations

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupingPipeline:
    """Which grouping operators to apply, with their parameters.

    Durations are integer milliseconds.
    """

    max_silence_ms: Optional[int] = None
    by_gap_ms: Optional[int] = None
    sentences: bool = False
    min_word_count: Optional[int] = None
    lasting_ms: Optional[int] = None
    chunk_size: Optional[int] = None

    def stages(self) -> List[Tuple[str, Callable[[Iterable[Event]], Iterator[Event]]]]:
        """Enabled operators as (name, callable) pairs, in application order."""
        stages = []  # type: List[Tuple[str, Callable[[Iterable[Event]], Iterator[Event]]]]
        if self.max_silence_ms is not None:
            stages.append(("max_silence", partial(grouping.max_silence, silence_ms=self.max_silence_ms)))
        if self.by_gap_ms is not None:
            stages.append(("by_gap", partial(grouping.by_gap, gap_ms=self.by_gap_ms)))
        if self.sentences:
            stages.append(("sentences", grouping.sentences))
        if self.min_word_count is not None:
            stages.append(("min_word_count", partial(grouping.min_word_count, count=self.min_word_count)))
        if self.lasting_ms is not None:
            stages.append(("lasting", partial(grouping.lasting, duration_ms=self.lasting_ms)))
        if self.chunk_size is not None:
            stages.append(("chunks", partial(grouping.chunks, size=self.chunk_size)))
        return stages

    def apply(self, events: Iterable[Event]) -> Iterator[Event]:
        stream = iter(events)
        stages = self.stages()
        for _, stage in stages:
            stream = stage(stream)
        logger.debug("Grouping stages: %s", ", ".join(n for n, _ in stages) or "none")
        return stream


def transform_events(
    events: Iterable[Event],
    pipeline: Optional[GroupingPipeline] = None,
    is_continuation: Optional[Callable[[Event], bool]] = None,
) -> Iterator[Event]:
    """Normalize decoded events and apply the grouping stack.

    Args:
        events: Decoded events in input order.
        pipeline: Operators to apply; None applies none.
        is_continuation: Optional replacement continuation test for the
            normalizer (see normalizer.join_continuations).

    Returns:
        A lazy iterator over the transformed events.
    """
    utterances = join_continuations(events, is_continuation=is_continuation)
    if pipeline is None:
        return utterances
    return pipeline.apply(utterances)
