"""Render extracted elements as plain text or Markdown."""

from __future__ import annotations

import re

from llmclean.items import HR_MARKER, ExtractedElement

_EXCESSIVE_BLANK_LINES_RE = re.compile(r"\n{3,}")

_BULLET = "•"


def _finish(lines: list[str]) -> str:
    return _EXCESSIVE_BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()


def to_plain_text(elements: list[ExtractedElement]) -> str:
    """Render *elements* as readable plain text.

    Headings are upper-cased and set off by blank lines, list items become
    bullets (no numbering), block quotes are wrapped in double quotes.
    """
    lines: list[str] = []

    for el in elements:
        if el.type == "heading":
            if lines:
                lines.append("")
            lines.append(el.content.upper())
            lines.append("")
        elif el.type == "paragraph":
            lines.append(el.content)
            lines.append("")
        elif el.type == "text":
            lines.append(el.content)
        elif el.type == "blockquote":
            lines.append(f'"{el.content}"')
        elif el.type == "code":
            lines.append(el.content)
        elif el.type == "list-item":
            lines.append(f"{_BULLET} {el.content}")
        elif el.type == "break":
            if el.is_rule:
                lines.extend(("", HR_MARKER, ""))
            elif lines and lines[-1] != "":
                lines.append("")

    return _finish(lines)


def to_markdown(elements: list[ExtractedElement]) -> str:
    """Render *elements* as CommonMark.

    Consecutive ordered list items are numbered from 1; the counter restarts
    after any other block, and a blank line separates a list from the block
    after it.  Plain breaks produce nothing, ``<hr>`` becomes
    ``---``.
    """
    lines: list[str] = []
    in_ordered_list = False
    in_list = False
    counter = 0

    for el in elements:
        if in_list and el.type != "list-item" and (el.type != "break" or el.is_rule):
            # End the list before the next block.
            lines.append("")
            in_list = False
        in_list = in_list or el.type == "list-item"

        if el.type == "heading":
            if lines:
                lines.append("")
            lines.append(f"{'#' * (el.level or 1)} {el.content}")
            lines.append("")
            in_ordered_list = False
        elif el.type in ("paragraph", "text"):
            lines.append(el.content)
            lines.append("")
            in_ordered_list = False
        elif el.type == "blockquote":
            lines.append(f"> {el.content}")
            lines.append("")
            in_ordered_list = False
        elif el.type == "code":
            lines.extend(("```", el.content, "```", ""))
            in_ordered_list = False
        elif el.type == "list-item":
            if el.list_type == "ordered":
                if not in_ordered_list:
                    counter = 0
                    in_ordered_list = True
                counter += 1
                lines.append(f"{counter}. {el.content}")
            else:
                in_ordered_list = False
                lines.append(f"- {el.content}")
        elif el.type == "break" and el.is_rule:
            lines.extend(("", HR_MARKER, ""))
            in_ordered_list = False

    return _finish(lines)
