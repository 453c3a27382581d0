"""Transcript Transform: reshape speech-to-text timing events.

WHY: Speech-to-text engines such as whisper.cpp emit transcripts as a
flat list of short, timed fragments. Reading, captioning, or editing
needs those fragments regrouped into utterances, sentences, or chunks
of a chosen size or duration.

HOW: Three-stage pipeline: read (CSV/JSON decoders), transform
(continuation joining, then composable grouping operators), write
(pluggable formatters). Each stage is independently testable.

RULES:
- Every stage consumes and produces the same Event record
- Operators are lazy generators; the pipeline pulls one event at a time
- Adding a new output format = one new formatter module, no core changes
"""

__version__ = "0.1.0"
