"""Extraction sub-package: HTML to typed elements, and elements to text."""

from .blocks import consolidate_elements, html_to_elements, text_content
from .main_content import find_content_root, prepare_document, unwrap_html
from .render import to_markdown, to_plain_text

__all__ = [
    "consolidate_elements",
    "find_content_root",
    "html_to_elements",
    "prepare_document",
    "text_content",
    "to_markdown",
    "to_plain_text",
    "unwrap_html",
]
