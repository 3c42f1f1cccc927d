"""llmclean - turn arbitrary HTML into clean, LLM-ready text.

Quick usage::

    from llmclean import clean

    result = clean(html)
    print(result.plain_text)
    print(result.markdown)
    print(result.render("json"))

Lower-level pieces::

    from llmclean import chunk_text, html_to_elements, to_markdown

    elements = html_to_elements(html)
    md       = to_markdown(elements)
    chunks   = chunk_text(md, target_tokens=800)
"""

from llmclean.extractors.blocks import html_to_elements
from llmclean.extractors.render import to_markdown, to_plain_text
from llmclean.items import (
    CleaningResult,
    CleaningStats,
    ContentChunk,
    ExtractedElement,
    JSONOutput,
)
from llmclean.language import detect_language
from llmclean.query import clamp_chunk_size, clean
from llmclean.rag import chunk_text, to_json, write_json
from llmclean.tokens import estimate_tokens

__version__ = "0.1.0"
__all__ = [
    "CleaningResult",
    "CleaningStats",
    "ContentChunk",
    "ExtractedElement",
    "JSONOutput",
    "chunk_text",
    "clamp_chunk_size",
    "clean",
    "detect_language",
    "estimate_tokens",
    "html_to_elements",
    "to_json",
    "to_markdown",
    "to_plain_text",
    "write_json",
]
