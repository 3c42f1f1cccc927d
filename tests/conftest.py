"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

_SENTENCES = (
    "The committee reviewed the proposal in detail before the vote.",
    "Several members raised questions about the budget and the timeline.",
    "After a short break the discussion continued with fresh energy.",
    "Most participants agreed that the plan needed clearer milestones.",
    "The chair summarised the main points and thanked everyone for attending.",
)


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def article_html() -> str:
    return _read_fixture("article.html")


@pytest.fixture
def long_article_text() -> str:
    """Roughly 5000 words of English prose in paragraphs of five sentences."""
    paragraphs: list[str] = []
    words = 0
    while words < 5000:
        paragraph = " ".join(_SENTENCES)
        paragraphs.append(paragraph)
        words += len(paragraph.split())
    return "\n\n".join(paragraphs)
