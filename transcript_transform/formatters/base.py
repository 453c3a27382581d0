"""Abstract base formatter.

WHY: Every output format consumes the same stream of Events but writes
different text. A common interface lets the CLI pick any formatter by
name and drive it the same way.

HOW: BaseFormatter is an ABC with two requirements: a ``name`` property
and a ``write()`` method that streams events to a text sink. ``render()``
is a convenience that collects the output into a string.

RULES:
- Subclasses MUST implement ``name`` and ``write()``
- ``write()`` pulls events one at a time and returns how many it wrote
- ``write()`` never opens or closes the sink; the caller owns it
- Errors from the sink propagate unchanged (the CLI classifies them)

To add a new output format:
1. Create a new file in formatters/
2. Subclass BaseFormatter
3. Implement write() and name
4. Register in FORMATTERS dict in formatters/__init__.py
"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from typing import Iterable, TextIO

from transcript_transform.core.ir import Event


class BaseFormatter(ABC):
    """Abstract base for all output formatters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'SubRip (SRT)'."""

    @abstractmethod
    def write(self, events: Iterable[Event], sink: TextIO) -> int:
        """Write events to ``sink``.

        Args:
            events: Transformed events, pulled lazily in order.
            sink: Open text stream to write to.

        Returns:
            Number of events written.
        """

    def render(self, events: Iterable[Event]) -> str:
        """Return the formatted output as a string."""
        buffer = io.StringIO()
        self.write(events, buffer)
        return buffer.getvalue()
