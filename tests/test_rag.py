"""Tests for llmclean.rag - chunking and the JSON envelope."""

from __future__ import annotations

import json

import pytest

from llmclean.items import ContentChunk, JSONOutput
from llmclean.rag import chunk_text, find_break_point, to_json, write_json
from llmclean.tokens import estimate_tokens

# ---------------------------------------------------------------------------
# find_break_point
# ---------------------------------------------------------------------------


class TestFindBreakPoint:
    def test_paragraph_break(self):
        text = "a" * 60 + "\n\n" + "b" * 60
        assert find_break_point(text, 100) == 62

    def test_paragraph_break_exactly_at_limit(self):
        text = "a" * 100 + "\n\n" + "b" * 50
        assert find_break_point(text, 100) == 102

    def test_early_paragraph_break_rejected(self):
        text = "a" * 10 + "\n\n" + "b" * 200
        assert find_break_point(text, 100) == 100

    def test_line_break(self):
        text = "a" * 70 + "\n" + "b" * 100
        assert find_break_point(text, 100) == 71

    def test_sentence_end(self):
        text = "x" * 70 + ". " + "y" * 100
        assert find_break_point(text, 100) == 72

    def test_rightmost_sentence_end_wins(self):
        text = "a" * 55 + "! " + "b" * 20 + "? " + "c" * 100
        assert find_break_point(text, 100) == 79

    def test_word_boundary(self):
        text = "a" * 75 + " " + "b" * 100
        assert find_break_point(text, 100) == 76

    def test_early_space_rejected(self):
        text = "a" * 50 + " " + "b" * 100
        assert find_break_point(text, 100) == 100

    def test_hard_cut(self):
        assert find_break_point("a" * 200, 100) == 100


# ---------------------------------------------------------------------------
# chunk_text
# ---------------------------------------------------------------------------


class TestChunkText:
    @pytest.mark.parametrize("text", ["", "   ", "\n\n\t"])
    def test_empty(self, text):
        assert chunk_text(text) == []

    def test_short_text_single_chunk(self):
        text = "  Just a couple of sentences. Nothing to split here.  "
        chunks = chunk_text(text, 1000)
        assert chunks == [
            ContentChunk(chunk=1, text=text.strip(), approx_tokens=estimate_tokens(text.strip())),
        ]

    def test_within_tolerance_stays_single(self):
        text = " ".join(["word"] * 900)  # 1170 tokens, under 1000 * 1.2
        chunks = chunk_text(text, 1000)
        assert len(chunks) == 1
        assert chunks[0].text == text

    def test_long_article(self, long_article_text):
        chunks = chunk_text(long_article_text, 1000)
        assert len(chunks) > 1
        assert [c.chunk for c in chunks] == list(range(1, len(chunks) + 1))
        for c in chunks:
            assert c.text
            assert c.text == c.text.strip()
            assert c.approx_tokens <= 1300
            assert c.text.endswith(".")
        for c in chunks[:-1]:
            assert c.approx_tokens >= 800

    def test_reconstructs_normalized_text(self, long_article_text):
        chunks = chunk_text(long_article_text, 400)
        joined = " ".join(c.text for c in chunks)
        assert joined.split() == long_article_text.split()

    def test_no_delimiters_hard_cuts(self):
        text = "!" * 5000
        chunks = chunk_text(text, 400)
        assert len(chunks) > 1
        assert "".join(c.text for c in chunks) == text

    def test_unspaced_cjk_text_is_split(self):
        text = "这是一个关于中文内容提取的测试句子。" * 400
        assert estimate_tokens(text) > 3000
        chunks = chunk_text(text, 400)
        assert len(chunks) > 1
        assert "".join(c.text for c in chunks) == text
        for c in chunks:
            assert c.approx_tokens <= 600

    def test_tiny_target_still_terminates(self):
        text = "alpha, beta; gamma! " * 20
        chunks = chunk_text(text, 1)
        assert len(chunks) > 1
        assert [c.chunk for c in chunks] == list(range(1, len(chunks) + 1))
        # Hard cuts may split words, but no character is lost.
        assert "".join("".join(c.text.split()) for c in chunks) == "".join(text.split())


# ---------------------------------------------------------------------------
# to_json / write_json
# ---------------------------------------------------------------------------


class TestJsonEnvelope:
    def test_envelope_fields(self):
        out = to_json("Der Hund ist für das Haus", 1000)
        assert out.source == "user-pasted-html"
        assert out.language == "de"
        assert len(out.content) == 1
        assert out.content[0].chunk == 1

    def test_envelope_json_shape(self, long_article_text):
        data = json.loads(to_json(long_article_text, 800).model_dump_json())
        assert set(data) == {"source", "language", "content"}
        assert data["language"] == "en"
        assert set(data["content"][0]) == {"chunk", "text", "approx_tokens"}

    def test_empty_text(self):
        out = to_json("", 1000)
        assert out.content == []
        assert out.language == "en"

    def test_write_json(self, tmp_path):
        out = JSONOutput(
            source="user-pasted-html",
            language="fr",
            content=[ContentChunk(chunk=1, text="Café crème", approx_tokens=3)],
        )
        path = write_json(out, tmp_path / "nested" / "cleaned-content.json")
        raw = path.read_text(encoding="utf-8")
        assert "Café crème" in raw
        assert json.loads(raw)["content"][0]["text"] == "Café crème"
