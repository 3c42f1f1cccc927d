"""Pydantic schemas for extracted elements, chunks and cleaning results."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ElementType = Literal[
    "text", "heading", "paragraph", "list-item", "blockquote", "code", "break",
]
ListType = Literal["ordered", "unordered"]
OutputMode = Literal["plaintext", "markdown", "json"]

# Content marker carried by a ``break`` produced from ``<hr>``.
HR_MARKER = "---"


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

class ExtractedElement(BaseModel):
    """One typed piece of document content, in document order.

    ``level`` is only set for headings and ``list_type`` only for list items.
    A ``break`` has empty content unless it came from ``<hr>``, in which case
    its content is :data:`HR_MARKER`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: ElementType
    content: str = ""
    level: int | None = Field(default=None, ge=1, le=6)
    list_type: ListType | None = Field(default=None, alias="listType")

    @property
    def is_break(self) -> bool:
        return self.type == "break"

    @property
    def is_rule(self) -> bool:
        return self.type == "break" and self.content == HR_MARKER


# ---------------------------------------------------------------------------
# Chunked JSON output
# ---------------------------------------------------------------------------

class ContentChunk(BaseModel):
    chunk: int = Field(ge=1)
    text: str
    approx_tokens: int = Field(ge=0)

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("chunk text must not be empty")
        return v


class JSONOutput(BaseModel):
    """Envelope handed to downstream LLM consumers."""

    source: str
    language: str
    content: list[ContentChunk] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Cleaning result
# ---------------------------------------------------------------------------

class CleaningStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    original_length: int = 0
    cleaned_length: int = 0
    reduction_percent: int = 0
    word_count: int = 0
    estimated_tokens: int = 0
    chunk_count: int = 0


class CleaningResult(BaseModel):
    """Everything one clean operation produces.

    An empty ``elements`` list is the "no meaningful content" outcome; it is
    a valid result rather than an error.
    """

    elements: list[ExtractedElement] = Field(default_factory=list)
    plain_text: str = ""
    markdown: str = ""
    json_output: JSONOutput
    stats: CleaningStats = Field(default_factory=CleaningStats)

    @property
    def is_empty(self) -> bool:
        return not self.elements

    def render(self, mode: OutputMode = "plaintext") -> str:
        """Return the output for *mode* (``plaintext``, ``markdown`` or ``json``)."""
        if mode == "plaintext":
            return self.plain_text
        if mode == "markdown":
            return self.markdown
        if mode == "json":
            return self.json_output.model_dump_json(indent=2)
        raise ValueError(f"Unknown output mode {mode!r}. Use 'plaintext', 'markdown', or 'json'.")
