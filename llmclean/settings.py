"""Project settings for llmclean.

Every value here is a plain module-level constant.  A few can be overridden
through environment variables so the CLI can be tuned without flags.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.debug("Ignoring non-integer %s=%r", name, raw)
        return default


# ---------------------------------------------------------------------------
# Chunking
# ---------------------------------------------------------------------------
# Target chunk size in estimated tokens.  Callers clamp to the inclusive
# range [MIN_CHUNK_TOKENS, MAX_CHUNK_TOKENS] before handing it to the chunker.
DEFAULT_CHUNK_TOKENS = _env_int("LLMCLEAN_CHUNK_TOKENS", 1000)
MIN_CHUNK_TOKENS = 400
MAX_CHUNK_TOKENS = 2000

# A text whose estimate is within this factor of the target stays one chunk.
SINGLE_CHUNK_TOLERANCE = 1.2

# ---------------------------------------------------------------------------
# JSON envelope
# ---------------------------------------------------------------------------
SOURCE_TAG = "user-pasted-html"

# ---------------------------------------------------------------------------
# Language detection
# ---------------------------------------------------------------------------
LANGUAGE_SAMPLE_CHARS = 1000
DEFAULT_LANGUAGE = "en"

# ---------------------------------------------------------------------------
# Extraction fallback
# ---------------------------------------------------------------------------
# Body text must exceed this many characters for the line-split fallback.
FALLBACK_MIN_BODY_CHARS = 50
# Fallback lines at or below this length are dropped.
FALLBACK_MIN_LINE_CHARS = 10

# ---------------------------------------------------------------------------
# Output files
# ---------------------------------------------------------------------------
OUTPUT_FILENAMES: dict[str, str] = {
    "plaintext": "cleaned-content.txt",
    "markdown": "cleaned-content.md",
    "json": "cleaned-content.json",
}
