"""Output formatter registry: pluggable format hub.

WHY: The CLI needs a single lookup to find the right formatter by its
``--format`` name. A central dict makes it trivial to add new formats:
create the formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["srt"]()``.

RULES:
- Keys are the exact --format values accepted by the CLI
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from transcript_transform.formatters.csv_events import CSVFormatter
from transcript_transform.formatters.json_events import JSONFormatter
from transcript_transform.formatters.pretty import PrettyFormatter
from transcript_transform.formatters.srt import SRTFormatter

if TYPE_CHECKING:
    from transcript_transform.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "pretty": PrettyFormatter,
    "csv": CSVFormatter,
    "json": JSONFormatter,
    "srt": SRTFormatter,
}
