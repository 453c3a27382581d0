"""Exception taxonomy for reading, transforming, and writing transcripts.

WHY: The CLI needs to tell "the transcript is malformed" apart from
"the disk failed" apart from "the reader hung up", and every error it
reports must carry a human-readable message.

HOW: TransformError is the base the CLI catches and reports. Subclasses
name the stage that failed. Original exceptions are chained with
``raise ... from``.

RULES:
- InputFormatError: a record could not be decoded (fatal, no partial output)
- InputReadError: the byte source failed (fatal)
- OutputWriteError: the sink failed for any reason but a broken pipe (fatal)
- A broken pipe while writing is not an error; it is never wrapped
"""


class TransformError(Exception):
    """Base class for every error the command-line tool reports."""


class InputFormatError(TransformError):
    """A CSV row or JSON value is not a valid ``{start, end, text}`` record."""


class InputReadError(TransformError):
    """Reading the input source failed."""


class OutputWriteError(TransformError):
    """Writing the output sink failed."""
