"""Language detection helpers."""

from __future__ import annotations

import logging
import re

from llmclean.settings import DEFAULT_LANGUAGE, LANGUAGE_SAMPLE_CHARS

logger = logging.getLogger(__name__)

# Writing systems, checked in order; the first script present decides.
_SCRIPT_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("zh", re.compile(r"[一-鿿]")),
    ("ja", re.compile(r"[぀-ゟ゠-ヿ]")),
    ("ko", re.compile(r"[가-힯]")),
    ("ru", re.compile(r"[Ѐ-ӿ]")),
    ("ar", re.compile(r"[؀-ۿ]")),
    ("he", re.compile(r"[֐-׿]")),
    ("hi", re.compile(r"[ऀ-ॿ]")),
    ("th", re.compile(r"[฀-๿]")),
)

# Latin-script languages told apart by function words.  Words that double as
# common English words ("a", "die", "is", "do", "per") are left out.
_FUNCTION_WORD_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("de", re.compile(r"\b(der|das|dem|den|und|ist|für|nicht|ein|eine|mit|auch|sich|wird)\b")),
    ("fr", re.compile(r"\b(le|les|et|est|pour|une|des|dans|avec|qui)\b")),
    ("es", re.compile(r"\b(el|los|las|está|pero|muy|también|es)\b")),
    ("it", re.compile(r"\b(il|gli|è|della|che|sono|perché|questo)\b")),
    ("pt", re.compile(r"\b(não|você|é|os|ao|são|uma|para|que)\b")),
    ("nl", re.compile(r"\b(het|een|voor|niet|zijn|van|ik)\b")),
)

# Articles shared with English, tried only when no function word matched.
# Matched against the original case: German "die" must precede a noun.
_SHARED_ARTICLE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("de", re.compile(r"\b[Dd]ie [A-ZÄÖÜ]")),
    ("fr", re.compile(r"\b[Ll]a\b")),
)


def detect_language(text: str) -> str:
    """Return a best-effort ISO-639-1 code for *text*, defaulting to ``en``."""
    sample = (text or "")[:LANGUAGE_SAMPLE_CHARS]

    for code, pattern in _SCRIPT_PATTERNS:
        if pattern.search(sample):
            return code

    lowered = sample.lower()
    for code, pattern in _FUNCTION_WORD_PATTERNS:
        if pattern.search(lowered):
            logger.debug("Function words matched language %s", code)
            return code

    for code, pattern in _SHARED_ARTICLE_PATTERNS:
        if pattern.search(sample):
            logger.debug("Shared article matched language %s", code)
            return code

    return DEFAULT_LANGUAGE
