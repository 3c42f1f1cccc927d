"""llmclean.query - one-call cleaning API.

Basic usage::

    from llmclean.query import clean

    result = clean(html, chunk_size=800)
    if result.is_empty:
        print("No meaningful content found in the HTML")
    else:
        print(result.plain_text)
        print(result.markdown)
        print(result.render("json"))
        print(result.stats.reduction_percent)

The HTML may come from anywhere (a paste, a file, a fetch proxy); this
module performs no network I/O.
"""

from __future__ import annotations

import logging
import math

from llmclean.extractors.blocks import html_to_elements
from llmclean.extractors.render import to_markdown, to_plain_text
from llmclean.items import CleaningResult, CleaningStats, JSONOutput, OutputMode
from llmclean.rag import to_json
from llmclean.settings import (
    DEFAULT_CHUNK_TOKENS,
    DEFAULT_LANGUAGE,
    MAX_CHUNK_TOKENS,
    MIN_CHUNK_TOKENS,
    OUTPUT_FILENAMES,
    SOURCE_TAG,
)
from llmclean.tokens import count_words, estimate_tokens

logger = logging.getLogger(__name__)


def clamp_chunk_size(value: int | str | None) -> int:
    """Clamp a user-supplied chunk size to ``[MIN_CHUNK_TOKENS, MAX_CHUNK_TOKENS]``.

    Missing or non-numeric values fall back to ``DEFAULT_CHUNK_TOKENS``.
    """
    if value is None:
        return DEFAULT_CHUNK_TOKENS
    try:
        size = int(value)
    except (TypeError, ValueError):
        logger.debug("Invalid chunk size %r; using default %d", value, DEFAULT_CHUNK_TOKENS)
        return DEFAULT_CHUNK_TOKENS
    return max(MIN_CHUNK_TOKENS, min(MAX_CHUNK_TOKENS, size))


def compute_stats(original: str, plain_text: str, chunk_count: int) -> CleaningStats:
    """Summarise how much a clean operation removed."""
    original_length = len(original)
    cleaned_length = len(plain_text)
    if original_length:
        reduction = math.floor((1 - cleaned_length / original_length) * 100 + 0.5)
    else:
        reduction = 0
    return CleaningStats(
        original_length=original_length,
        cleaned_length=cleaned_length,
        reduction_percent=reduction,
        word_count=count_words(plain_text),
        estimated_tokens=estimate_tokens(plain_text),
        chunk_count=chunk_count,
    )


def output_filename(mode: OutputMode) -> str:
    """Conventional download file name for *mode*."""
    try:
        return OUTPUT_FILENAMES[mode]
    except KeyError:
        raise ValueError(f"Unknown output mode {mode!r}") from None


def clean(html: str, chunk_size: int | str | None = DEFAULT_CHUNK_TOKENS) -> CleaningResult:
    """Run the full pipeline on *html* and return every output form.

    An input with no extractable content yields a result whose ``is_empty``
    is True; nothing is raised.
    """
    html = html or ""
    elements = html_to_elements(html)

    if not elements:
        logger.info("No meaningful content found in %d chars of HTML", len(html))
        return CleaningResult(
            json_output=JSONOutput(source=SOURCE_TAG, language=DEFAULT_LANGUAGE),
            stats=CleaningStats(original_length=len(html)),
        )

    plain_text = to_plain_text(elements)
    markdown = to_markdown(elements)
    json_output = to_json(plain_text, clamp_chunk_size(chunk_size))
    stats = compute_stats(html, plain_text, len(json_output.content))

    logger.debug(
        "Cleaned %d -> %d chars (%d%% reduction), %d chunks",
        stats.original_length, stats.cleaned_length, stats.reduction_percent, stats.chunk_count,
    )
    return CleaningResult(
        elements=elements,
        plain_text=plain_text,
        markdown=markdown,
        json_output=json_output,
        stats=stats,
    )
