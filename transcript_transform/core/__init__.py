"""Core event model, normalization, and grouping operators.

WHY: The core package contains the stable heart of the transformer:
the Event record and the operators that reshape event sequences. These
are consumed by every reader and formatter and must stay format-agnostic.

HOW: ir.py defines the Event record, normalizer.py joins continuation
fragments into utterances, grouping.py holds the six grouping
operators, pipeline.py applies them in their fixed order.

RULES:
- Event is the contract between decoding, transforming, and encoding
- Operators never touch I/O and never raise on well-formed sequences
- No formatter- or reader-specific logic here
"""
