"""Command-line interface for Transcript Transform.

WHY: Users need a simple way to reshape a transcript from the terminal
or in a shell pipeline (``whisper-cli ... | transcript-transform transform -``).
The CLI wires together the full pipeline (open the source, decode,
normalize, group, format, write) behind a single subcommand.

HOW: Uses argparse with one subcommand, ``transform``. Grouping flags
build a GroupingPipeline, whose operator order is fixed regardless of
flag order. The input is decoded completely first, so malformed records
fail before any output exists; events then stream through the operators
into the formatter one at a time. Diagnostics go to stderr through logging;
stdout carries only the transcript.

RULES:
- Positional argument: input path, "-" for stdin
- --input-format: csv-fix (default), csv, json
- --format: pretty (default), csv, json, srt; --output: path or "-" (default)
- Durations are "<digits>s" or "<digits>ms", nothing else
- Exit codes: 0 on success or when the reader of stdout hangs up early,
  1 on any other error (argparse's usual 2 included), 130 on Ctrl-C
- Defaults for formats and log level may come from .env (see config.py)
"""

from __future__ import annotations

import argparse
import io
import logging
import os
import re
import sys
from contextlib import contextmanager
from typing import Iterator, List, Optional, TextIO

from transcript_transform import __version__
from transcript_transform.config import (
    DEFAULT_INPUT_FORMAT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_FORMAT,
    LOG_LEVELS,
    STDIO_PATH,
)
from transcript_transform.core.pipeline import GroupingPipeline, transform_events
from transcript_transform.errors import InputReadError, OutputWriteError, TransformError
from transcript_transform.formatters import FORMATTERS
from transcript_transform.readers import READERS

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(r"^([0-9]*)(.*)$", re.DOTALL)
_DURATION_UNITS = {"s": 1000, "ms": 1}


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on invalid arguments."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, "{}: error: {}\n".format(self.prog, message))


def parse_duration(value: str) -> int:
    """Parse a duration such as ``250ms`` or ``3s`` into milliseconds.

    WHY: Grouping thresholds are short spans of speech; whole seconds
    and milliseconds cover every practical value without float parsing.

    RULES:
    - Decimal digits immediately followed by "s" or "ms"
    - No sign, no fraction, no whitespace, no other units
    - Raises argparse.ArgumentTypeError with a specific message
    """
    digits, unit = _DURATION_RE.match(value).groups()
    if not digits:
        raise argparse.ArgumentTypeError(
            "no digits found in duration {!r}".format(value)
        )
    if not unit:
        raise argparse.ArgumentTypeError(
            "no unit found in duration {!r}; expected 's' or 'ms'".format(value)
        )
    if unit not in _DURATION_UNITS:
        raise argparse.ArgumentTypeError(
            "invalid duration unit {!r} in {!r}; expected 's' or 'ms'".format(unit, value)
        )
    return int(digits) * _DURATION_UNITS[unit]


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("expected an integer, got {!r}".format(value))
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1, got {}".format(number))
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without running the pipeline.

    RULES:
    - Top level: --version, --verbose, --log-level, one required subcommand
    - transform: input, -i/-f/-o, and the six grouping options
    """
    parser = _ArgumentParser(
        prog="transcript-transform",
        description="Reshape speech-to-text transcripts: join fragments into "
                    "utterances, group them, and render CSV, JSON, SRT, or pretty text.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug details to stderr (same as --log-level DEBUG).",
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        type=str.upper,
        help="Logging level for stderr diagnostics (default: %(default)s).",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    transform = subparsers.add_parser(
        "transform",
        help="Transform a transcript into another shape and format.",
        description="Join continuation fragments into utterances, apply the "
                    "requested grouping operators (always in the order "
                    "max-silence, by-gap, sentences, min-word-count, lasting, "
                    "chunk-size), and write the result.",
    )
    transform.add_argument(
        "input",
        help="Path to the transcript to read. Use '-' for stdin.",
    )
    transform.add_argument(
        "-i", "--input-format",
        default=DEFAULT_INPUT_FORMAT,
        choices=list(READERS.keys()),
        help="Input format (default: %(default)s). 'csv-fix' is CSV plus the "
             "whisper.cpp quoting fix.",
    )
    transform.add_argument(
        "-f", "--format",
        dest="output_format",
        default=DEFAULT_OUTPUT_FORMAT,
        choices=list(FORMATTERS.keys()),
        help="Output format (default: %(default)s).",
    )
    transform.add_argument(
        "-o", "--output",
        default=STDIO_PATH,
        help="Path to write the output to. Use '-' for stdout (default).",
    )

    grouping = transform.add_argument_group("grouping")
    grouping.add_argument(
        "--max-silence",
        type=parse_duration,
        metavar="DURATION",
        help="Concatenates until the accumulated delay between events exceeds "
             "the given duration.",
    )
    grouping.add_argument(
        "-g", "--by-gap",
        type=parse_duration,
        metavar="DURATION",
        help="Concatenates until the delay until the start of the next event "
             "exceeds the given duration.",
    )
    grouping.add_argument(
        "-s", "--sentences",
        action="store_true",
        help="Concatenates up to the next sentence ending ('.', '!', or '?').",
    )
    grouping.add_argument(
        "-w", "--min-word-count",
        type=positive_int,
        metavar="N",
        help="Concatenates until the total word count of the result reaches N.",
    )
    grouping.add_argument(
        "-l", "--lasting",
        type=parse_duration,
        metavar="DURATION",
        help="Concatenates until the total duration of the result reaches the "
             "given duration.",
    )
    grouping.add_argument(
        "-c", "--chunk-size",
        type=positive_int,
        metavar="K",
        help="Concatenates up to K events.",
    )

    return parser


def pipeline_from_args(args: argparse.Namespace) -> GroupingPipeline:
    return GroupingPipeline(
        max_silence_ms=args.max_silence,
        by_gap_ms=args.by_gap,
        sentences=args.sentences,
        min_word_count=args.min_word_count,
        lasting_ms=args.lasting,
        chunk_size=args.chunk_size,
    )


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@contextmanager
def _open_input(path: str) -> Iterator[TextIO]:
    """Open the input as UTF-8 text with universal newlines left to csv."""
    if path == STDIO_PATH:
        buffer = getattr(sys.stdin, "buffer", None)
        if buffer is None:
            # stdin already replaced by a text stream (tests, embedding)
            yield sys.stdin
            return
        wrapper = io.TextIOWrapper(buffer, encoding="utf-8", newline="")
        try:
            yield wrapper
        finally:
            wrapper.detach()
        return

    try:
        stream = open(path, "r", encoding="utf-8", newline="")
    except OSError as e:
        raise InputReadError("Cannot open input {}: {}".format(path, e.strerror or e)) from e
    with stream:
        yield stream


@contextmanager
def _open_output(path: str) -> Iterator[TextIO]:
    if path == STDIO_PATH:
        try:
            yield sys.stdout
        finally:
            sys.stdout.flush()
        return

    try:
        stream = open(path, "w", encoding="utf-8", newline="")
    except OSError as e:
        raise OutputWriteError("Cannot create output {}: {}".format(path, e.strerror or e)) from e
    with stream:
        yield stream


def _silence_stdout() -> None:
    """Point stdout at /dev/null so the interpreter's final flush cannot fail.

    After the reader of a pipe goes away, Python would otherwise report
    a second BrokenPipeError while shutting down.
    """
    try:
        fd = sys.stdout.fileno()
    except (AttributeError, ValueError, io.UnsupportedOperation):
        # stdout is not a real file descriptor (tests, embedding)
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)
    os.close(devnull)


def run_transform(args: argparse.Namespace) -> int:
    """Execute the transform subcommand and return the process exit code.

    RULES:
    - The whole input is decoded before the output is opened, so a
      missing or malformed input never truncates an existing output file
    - BrokenPipeError while writing → 0
    - TransformError → "Error: ..." on stderr, 1
    - Any other OSError while writing → OutputWriteError semantics, 1
    """
    pipeline = pipeline_from_args(args)
    formatter = FORMATTERS[args.output_format]()
    read_events = READERS[args.input_format]

    logger.info(
        "Transforming %s (%s) to %s (%s)",
        args.input, args.input_format, args.output, formatter.name,
    )

    try:
        with _open_input(args.input) as source:
            # a malformed record must fail before anything is written
            decoded = list(read_events(source))
            logger.debug("Decoded %d event(s)", len(decoded))
            events = transform_events(decoded, pipeline)
            with _open_output(args.output) as sink:
                count = formatter.write(events, sink)
    except BrokenPipeError:
        logger.debug("Output closed early; stopping")
        _silence_stdout()
        return 0
    except TransformError as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1
    except OSError as e:
        print("Error: {}".format(OutputWriteError("Failed to write output: {}".format(e))),
              file=sys.stderr)
        return 1

    logger.info("Wrote %d event(s)", count)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    - Returns the exit code; the console script passes it to sys.exit()
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    level = "DEBUG" if args.verbose else args.log_level
    if level not in LOG_LEVELS:
        parser.error("invalid log level {!r} (choose from {})".format(
            level, ", ".join(LOG_LEVELS)))
    # .env defaults bypass argparse's choices check
    if args.input_format not in READERS:
        parser.error("invalid input format {!r} (choose from {})".format(
            args.input_format, ", ".join(READERS)))
    if args.output_format not in FORMATTERS:
        parser.error("invalid output format {!r} (choose from {})".format(
            args.output_format, ", ".join(FORMATTERS)))

    _configure_logging(level)

    try:
        return run_transform(args)
    except KeyboardInterrupt:
        print("\nCancelled by user.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
