"""Convert a cleaned document into a flat sequence of typed elements.

Element types: text | heading | paragraph | list-item | blockquote | code | break
"""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, Tag
from bs4.element import NavigableString, PreformattedString

from llmclean.extractors.main_content import find_content_root, prepare_document
from llmclean.items import HR_MARKER, ExtractedElement, ListType
from llmclean.settings import FALLBACK_MIN_BODY_CHARS, FALLBACK_MIN_LINE_CHARS

logger = logging.getLogger(__name__)

# Heading tags → level number
_HEADING_LEVELS: dict[str, int] = {f"h{i}": i for i in range(1, 7)}

# Elements followed by a break when walked as generic containers
_BLOCK_TAGS = frozenset(
    {
        "p", "div", "section", "article", "main", "blockquote",
        "h1", "h2", "h3", "h4", "h5", "h6",
        "ul", "ol", "li", "dl", "dt", "dd",
        "table", "tr", "th", "td",
        "pre", "code", "figure", "figcaption",
        "address", "hr", "br",
    }
)

# Never contribute to extracted text, even if they survived cleaning
_NON_TEXT_TAGS = frozenset({"script", "style", "noscript"})

_WHITESPACE_RE = re.compile(r"\s+")
_NEWLINES_RE = re.compile(r"\n+")


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run to one space and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def _collect_text(node: Tag, parts: list[str]) -> None:
    for child in node.children:
        if isinstance(child, Tag):
            if child.name not in _NON_TEXT_TAGS:
                _collect_text(child, parts)
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            parts.append(str(child))


def raw_text(tag: Tag) -> str:
    """Concatenated text of *tag*'s subtree, whitespace untouched."""
    parts: list[str] = []
    _collect_text(tag, parts)
    return "".join(parts)


def text_content(tag: Tag) -> str:
    """Whitespace-normalized text of *tag*'s subtree."""
    return normalize_whitespace(raw_text(tag))


def _process_node(node: object, list_type: ListType | None, out: list[ExtractedElement]) -> None:
    """Recursively process *node* and append elements to *out*.

    *list_type* is the type of the nearest enclosing ``ul``/``ol`` and is
    only passed downwards.
    """
    if isinstance(node, NavigableString):
        if isinstance(node, PreformattedString):
            return
        text = normalize_whitespace(str(node))
        if text:
            out.append(ExtractedElement(type="text", content=text))
        return

    if not isinstance(node, Tag) or node.decomposed:
        return

    tag_name = (node.name or "").lower()

    if tag_name in _HEADING_LEVELS:
        out.append(
            ExtractedElement(type="heading", level=_HEADING_LEVELS[tag_name], content=text_content(node)),
        )
        return

    if tag_name == "p":
        out.append(ExtractedElement(type="paragraph", content=text_content(node)))
        return

    if tag_name == "blockquote":
        out.append(ExtractedElement(type="blockquote", content=text_content(node)))
        return

    if tag_name in ("pre", "code"):
        out.append(ExtractedElement(type="code", content=raw_text(node).strip()))
        return

    if tag_name in ("ul", "ol"):
        child_type: ListType = "ordered" if tag_name == "ol" else "unordered"
        for child in node.children:
            if isinstance(child, Tag):
                _process_node(child, child_type, out)
        return

    if tag_name == "li":
        out.append(
            ExtractedElement(
                type="list-item",
                content=text_content(node),
                list_type=list_type or "unordered",
            ),
        )
        return

    if tag_name == "br":
        out.append(ExtractedElement(type="break"))
        return

    if tag_name == "hr":
        out.append(ExtractedElement(type="break", content=HR_MARKER))
        return

    for child in list(node.children):
        _process_node(child, list_type, out)

    if tag_name in _BLOCK_TAGS and out and not out[-1].is_break:
        out.append(ExtractedElement(type="break"))


def consolidate_elements(elements: list[ExtractedElement]) -> list[ExtractedElement]:
    """Drop empty elements, merge adjacent text, and collapse/trim breaks."""
    result: list[ExtractedElement] = []

    for el in elements:
        if not el.content and not el.is_break:
            continue

        last = result[-1] if result else None

        if el.is_break and last is not None and last.is_break:
            continue

        if el.type == "text" and last is not None and last.type == "text":
            result[-1] = last.model_copy(update={"content": f"{last.content} {el.content}"})
            continue

        result.append(el)

    while result and result[0].is_break:
        result.pop(0)
    while result and result[-1].is_break:
        result.pop()

    return result


def _fallback_paragraphs(soup: BeautifulSoup) -> list[ExtractedElement]:
    """Split the body's raw text into paragraphs when structured extraction found nothing."""
    body = soup.body
    if body is None:
        return []
    text = raw_text(body)
    if len(text.strip()) <= FALLBACK_MIN_BODY_CHARS:
        return []
    return [
        ExtractedElement(type="paragraph", content=normalize_whitespace(line))
        for line in _NEWLINES_RE.split(text)
        if len(line.strip()) > FALLBACK_MIN_LINE_CHARS
    ]


def html_to_elements(html: str) -> list[ExtractedElement]:
    """Parse *html* into a consolidated list of typed content elements.

    Never raises on malformed markup.  Returns an empty list when the document
    has no meaningful content.
    """
    if not html or not html.strip():
        return []

    soup = prepare_document(html)
    root = find_content_root(soup)

    raw: list[ExtractedElement] = []
    _process_node(root, None, raw)
    elements = consolidate_elements(raw)

    if not elements:
        elements = _fallback_paragraphs(soup)
        if elements:
            logger.debug("Structured extraction empty; fell back to %d body lines", len(elements))

    return elements
