"""llmclean.rag - token-aware chunking and the JSON envelope for LLM ingestion.

Usage::

    from llmclean.rag import chunk_text, to_json, write_json

    chunks = chunk_text(plain_text, target_tokens=1000)
    envelope = to_json(plain_text, target_tokens=1000)
    write_json(envelope, "/tmp/cleaned-content.json")
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

from llmclean.items import ContentChunk, JSONOutput
from llmclean.language import detect_language
from llmclean.settings import DEFAULT_CHUNK_TOKENS, SINGLE_CHUNK_TOLERANCE, SOURCE_TAG
from llmclean.tokens import estimate_tokens

logger = logging.getLogger(__name__)

# Minimum break position, as a fraction of max_chars, for each boundary kind.
# Empirical values; changing them changes chunk boundaries.
_PARAGRAPH_MIN_RATIO = 0.5
_LINE_MIN_RATIO = 0.6
_SENTENCE_MIN_RATIO = 0.5
_WORD_MIN_RATIO = 0.7

_SENTENCE_ENDERS: tuple[str, ...] = (". ", "! ", "? ", ".\n", "!\n", "?\n")


# ---------------------------------------------------------------------------
# Break-point search
# ---------------------------------------------------------------------------

def _last_index(text: str, needle: str, max_pos: int) -> int:
    """Position of the last *needle* starting at or before *max_pos*, else -1."""
    return text.rfind(needle, 0, max_pos + len(needle))


def find_break_point(text: str, max_pos: int) -> int:
    """Return the offset at which to end a chunk of *text* limited to *max_pos*.

    Preference: paragraph break, line break, sentence end, word boundary,
    then a hard cut at *max_pos*.
    """
    paragraph = _last_index(text, "\n\n", max_pos)
    if paragraph > max_pos * _PARAGRAPH_MIN_RATIO:
        return paragraph + 2

    line = _last_index(text, "\n", max_pos)
    if line > max_pos * _LINE_MIN_RATIO:
        return line + 1

    best_pos = -1
    best_len = 0
    for ender in _SENTENCE_ENDERS:
        pos = _last_index(text, ender, max_pos)
        if pos > best_pos and pos > max_pos * _SENTENCE_MIN_RATIO:
            best_pos = pos
            best_len = len(ender)
    if best_pos >= 0:
        return best_pos + best_len

    space = _last_index(text, " ", max_pos)
    if space > max_pos * _WORD_MIN_RATIO:
        return space + 1

    return max_pos


# ---------------------------------------------------------------------------
# Chunking
# ---------------------------------------------------------------------------

def chunk_text(text: str, target_tokens: int = DEFAULT_CHUNK_TOKENS) -> list[ContentChunk]:
    """Split *text* into chunks of roughly *target_tokens* estimated tokens.

    Text within 20 % of the target stays a single chunk.  Otherwise chunks are
    cut at the best boundary inside a window of 1.2x the target (converted to
    characters using the text's own chars-per-token ratio).  Chunk numbers are
    contiguous from 1 and no chunk is empty.
    """
    normalized = (text or "").strip()
    if not normalized:
        return []

    total_tokens = estimate_tokens(normalized)
    if total_tokens <= target_tokens * SINGLE_CHUNK_TOLERANCE:
        return [ContentChunk(chunk=1, text=normalized, approx_tokens=total_tokens)]

    chars_per_token = len(normalized) / total_tokens
    target_chars = math.floor(target_tokens * chars_per_token)
    max_chars = max(1, math.floor(target_chars * 1.2))
    logger.debug(
        "Chunking %d chars (~%d tokens): target=%d chars, min=%d, max=%d",
        len(normalized), total_tokens, target_chars, math.floor(target_chars * 0.8), max_chars,
    )

    chunks: list[ContentChunk] = []
    remaining = normalized

    while remaining:
        if len(remaining) <= max_chars:
            piece = remaining
            remaining = ""
        else:
            cut = max(1, find_break_point(remaining, max_chars))
            piece = remaining[:cut].strip()
            remaining = remaining[cut:].strip()

        if piece:
            chunks.append(
                ContentChunk(chunk=len(chunks) + 1, text=piece, approx_tokens=estimate_tokens(piece)),
            )

    return chunks


# ---------------------------------------------------------------------------
# JSON envelope
# ---------------------------------------------------------------------------

def to_json(text: str, target_tokens: int = DEFAULT_CHUNK_TOKENS) -> JSONOutput:
    """Chunk *text* and wrap it with its detected language and source tag."""
    return JSONOutput(
        source=SOURCE_TAG,
        language=detect_language(text),
        content=chunk_text(text, target_tokens),
    )


def write_json(output: JSONOutput, path: str | Path) -> Path:
    """Write *output* as pretty-printed UTF-8 JSON to *path*; returns the path."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(output.model_dump_json(indent=2), encoding="utf-8")
    return out_path
