"""Line filter that repairs whisper.cpp's over-quoted CSV rows.

WHY: whisper.cpp wraps the text column of its three-column CSV output
in double quotes even when the text holds no comma, and does not escape
quotes inside it, which strict CSV readers reject. A line with exactly
two commas has no comma inside the text field, so its surrounding
quotes carry no meaning and can be dropped.

HOW: QuoteRepairReader wraps any iterable of text lines (an open file,
sys.stdin, a list) and yields each line, removing the first and the
last double-quote character from lines containing exactly two commas.

RULES:
- Operates on decoded text, so positions are code points, not bytes
- Lines with any other comma count pass through unchanged
- Lines with fewer than two quote characters pass through unchanged
- Line terminators are preserved
"""

from __future__ import annotations

from typing import Iterable, Iterator


def strip_bookending_quotes(line: str) -> str:
    """Remove the first and the last ``"`` of ``line``, if it has two or more."""
    left = line.find('"')
    right = line.rfind('"')
    if left == -1 or left == right:
        return line
    return line[:left] + line[left + 1:right] + line[right + 1:]


def repair_line(line: str) -> str:
    if line.count(",") == 2:
        return strip_bookending_quotes(line)
    return line


class QuoteRepairReader:
    """Iterator over repaired lines of an underlying line source.

    Usable anywhere csv.reader() accepts a file: it only needs iteration.
    """

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = lines

    def __iter__(self) -> Iterator[str]:
        for line in self._lines:
            yield repair_line(line)
