"""Configuration constants and .env loading.

WHY: Centralizes defaults so they are easy to find and override. Users
who always feed the same producer's output can pin input/output formats
and log verbosity in a .env file instead of repeating flags.

HOW: python-dotenv loads the .env file on import. Defaults are
module-level strings read with os.getenv. Command-line flags always
take precedence over these values.

RULES:
- Only presentation defaults are configurable here
- The utterance clamp (normalizer.MAX_UTTERANCE_DURATION_MS) and the
  sentence terminators are fixed policy, never read from the environment
- Values are validated by the CLI, not here
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the directory the tool is run from
load_dotenv()

DEFAULT_INPUT_FORMAT = os.getenv("TRANSCRIPT_TRANSFORM_INPUT_FORMAT", "csv-fix")
DEFAULT_OUTPUT_FORMAT = os.getenv("TRANSCRIPT_TRANSFORM_OUTPUT_FORMAT", "pretty")
DEFAULT_LOG_LEVEL = os.getenv("TRANSCRIPT_TRANSFORM_LOG_LEVEL", "WARNING").upper()

STDIO_PATH = "-"
"""Path value meaning standard input (for INPUT) or standard output (for --output)."""

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
