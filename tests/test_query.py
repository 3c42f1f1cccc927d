"""Tests for llmclean.query - the one-call clean() API."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from llmclean.items import CleaningStats, ExtractedElement
from llmclean.query import clamp_chunk_size, clean, compute_stats, output_filename

# ---------------------------------------------------------------------------
# clean()
# ---------------------------------------------------------------------------


class TestClean:
    def test_article(self, article_html):
        result = clean(article_html)
        assert not result.is_empty
        assert result.plain_text.startswith("BREWING BETTER COFFEE\n\n")
        assert "• A burr grinder" in result.plain_text
        assert "SuperGrinder" not in result.plain_text
        assert result.markdown.startswith("# Brewing Better Coffee")
        assert result.json_output.source == "user-pasted-html"
        assert result.json_output.language == "en"
        assert len(result.json_output.content) == 1
        assert result.json_output.content[0].text == result.plain_text

    def test_stats(self, article_html):
        result = clean(article_html)
        stats = result.stats
        assert stats.original_length == len(article_html)
        assert stats.cleaned_length == len(result.plain_text)
        assert 0 < stats.reduction_percent < 100
        assert stats.word_count == len(result.plain_text.split())
        assert stats.chunk_count == 1
        assert stats.estimated_tokens > 0

    def test_render_modes(self, article_html):
        result = clean(article_html)
        assert result.render("plaintext") == result.plain_text
        assert result.render("markdown") == result.markdown
        data = json.loads(result.render("json"))
        assert data["source"] == "user-pasted-html"
        assert data["content"][0]["chunk"] == 1

    def test_render_unknown_mode(self, article_html):
        with pytest.raises(ValueError, match="Unknown output mode"):
            clean(article_html).render("pdf")  # type: ignore[arg-type]

    def test_no_meaningful_content(self):
        html = "<html><head><title>x</title></head><body><script>track()</script></body></html>"
        result = clean(html)
        assert result.is_empty
        assert result.plain_text == ""
        assert result.markdown == ""
        assert result.json_output.content == []
        assert result.stats.original_length == len(html)
        assert result.stats.chunk_count == 0

    def test_chunk_size_is_clamped(self, long_article_text):
        html = "<body>" + "".join(f"<p>{p}</p>" for p in long_article_text.split("\n\n")) + "</body>"
        small = clean(html, chunk_size=10)
        clamped = clean(html, chunk_size=400)
        assert [c.text for c in small.json_output.content] == [c.text for c in clamped.json_output.content]
        assert small.stats.chunk_count > 1

    def test_idempotent(self, article_html):
        assert clean(article_html) == clean(article_html)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestClampChunkSize:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, 1000), ("abc", 1000), ("", 1000), (100, 400), (5000, 2000), ("800", 800), (400, 400), (2000, 2000)],
    )
    def test_clamp(self, value, expected):
        assert clamp_chunk_size(value) == expected


class TestComputeStats:
    def test_reduction(self):
        stats = compute_stats("x" * 200, "x" * 50, 1)
        assert stats == CleaningStats(
            original_length=200,
            cleaned_length=50,
            reduction_percent=75,
            word_count=1,
            estimated_tokens=2,
            chunk_count=1,
        )

    def test_rounds_half_up(self):
        assert compute_stats("x" * 8, "x", 1).reduction_percent == 88  # 87.5

    def test_empty_original(self):
        assert compute_stats("", "", 0).reduction_percent == 0


def test_output_filename():
    assert output_filename("plaintext") == "cleaned-content.txt"
    assert output_filename("markdown") == "cleaned-content.md"
    assert output_filename("json") == "cleaned-content.json"
    with pytest.raises(ValueError):
        output_filename("html")  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class TestExtractedElement:
    def test_level_range(self):
        with pytest.raises(ValidationError):
            ExtractedElement(type="heading", level=7, content="x")

    def test_frozen(self):
        el = ExtractedElement(type="text", content="x")
        with pytest.raises(ValidationError):
            el.content = "y"  # type: ignore[misc]

    def test_list_type_alias(self):
        el = ExtractedElement(type="list-item", content="x", listType="ordered")
        assert el.list_type == "ordered"
        assert el.model_dump(by_alias=True)["listType"] == "ordered"

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            ExtractedElement(type="table", content="x")  # type: ignore[arg-type]
