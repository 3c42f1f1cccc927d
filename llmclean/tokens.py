"""Heuristic token estimation.

Not tied to any tokenizer: a word costs ~1.3 tokens and every punctuation or
symbol character adds half a token.  Word characters are ASCII only, so
unspaced scripts (CJK, Thai) and accented letters are charged per character.
Good enough to size chunks.
"""

from __future__ import annotations

import math
import re

_WORD_TOKEN_WEIGHT = 1.3
_SYMBOL_TOKEN_WEIGHT = 0.5

_SYMBOL_RE = re.compile(r"[^A-Za-z0-9_\s]")


def count_words(text: str) -> int:
    """Number of whitespace-separated words in *text*."""
    return len(text.split()) if text else 0


def estimate_tokens(text: str) -> int:
    """Return an approximate token count for *text* (0 for empty input)."""
    if not text:
        return 0
    symbols = len(_SYMBOL_RE.findall(text))
    return math.ceil(count_words(text) * _WORD_TOKEN_WEIGHT + symbols * _SYMBOL_TOKEN_WEIGHT)
