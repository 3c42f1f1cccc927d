"""Document preparation: unwrap, parse, strip noise, pick the content root.

Steps, in order:
  1. Unwrap proxy JSON envelopes (``{"contents": "<html>..."}``).
  2. Parse with BeautifulSoup + lxml (lenient; never raises on bad markup).
  3. Drop non-content tags with their whole subtree.
  4. Drop noise widgets matched by CSS selectors.
  5. Drop inline-hidden elements and strip ``on*`` handler attributes.
  6. Choose the content root (``main``/``article``/... then body).
"""

from __future__ import annotations

import json
import logging
import re

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

# Tags removed together with everything inside them
_REMOVE_TAGS: tuple[str, ...] = (
    "script", "style", "noscript", "iframe", "svg", "canvas",
    "link", "meta", "head", "template", "object", "embed",
    "applet", "audio", "video", "source", "track", "map", "area",
)

# Conservative noise selectors; only obvious non-content is removed
_NOISE_SELECTORS: tuple[str, ...] = (
    ".sidebar", "#sidebar", '[role="navigation"]',
    '[role="complementary"]',
    ".ad", ".ads", ".advertisement", ".sponsored", ".promo",
    ".cookie", ".cookie-banner", ".cookie-notice", ".consent",
    ".popup", ".modal", ".overlay",
    ".social-share", ".share-buttons",
    "[hidden]", '[aria-hidden="true"]', ".hidden",
    ".sr-only", ".visually-hidden", ".screen-reader-text",
)

# Content root candidates; the first match in document order wins
_CONTENT_ROOT_SELECTOR = ", ".join(
    (
        "main",
        "article",
        '[role="main"]',
        "#content",
        ".content",
        "#main",
        ".main",
        ".post",
        ".article",
        ".entry-content",
        ".post-content",
    ),
)

_HIDDEN_STYLE_RE = re.compile(r"display:\s?none|visibility:\s?hidden", re.IGNORECASE)

_TEMPLATE_RE = re.compile(r"<template\b[^>]*>.*?</template>", re.DOTALL | re.IGNORECASE)


def unwrap_html(raw: str) -> str:
    """Return the HTML inside a proxy JSON envelope, or *raw* unchanged.

    Recognised shapes: ``{"contents": "..."}``, ``{"html": "..."}`` and a bare
    JSON string.
    """
    try:
        parsed = json.loads(raw)
    except (ValueError, TypeError, RecursionError):
        return raw

    if isinstance(parsed, str):
        return parsed
    if isinstance(parsed, dict):
        for key in ("contents", "html"):
            value = parsed.get(key)
            if isinstance(value, str) and value:
                logger.debug("Unwrapped HTML from JSON envelope field %r", key)
                return value
    return raw


def parse_document(html: str) -> BeautifulSoup:
    """Parse *html* into a soup.

    ``<template>`` blocks are cut out with a regex first: lxml re-parents
    template children into the body, so removing the tag after parsing would
    leave its placeholder content behind.
    """
    html = _TEMPLATE_RE.sub("", html)
    return BeautifulSoup(html, "lxml")


def strip_unwanted_tags(soup: BeautifulSoup) -> None:
    """Remove every tag in the removal set, including its content."""
    for el in soup.find_all(list(_REMOVE_TAGS)):
        if isinstance(el, Tag) and not el.decomposed:
            el.decompose()


def strip_noise(soup: BeautifulSoup) -> None:
    """Remove noise widgets, inline-hidden elements and event handlers."""
    for selector in _NOISE_SELECTORS:
        try:
            matches = soup.select(selector)
        except Exception as exc:
            logger.debug("CSS selector %r failed: %s", selector, exc)
            continue
        for el in matches:
            if isinstance(el, Tag) and not el.decomposed:
                el.decompose()

    for el in list(soup.find_all(True)):
        if not isinstance(el, Tag) or el.decomposed:
            continue
        try:
            if is_hidden_style(str(el.get("style") or "")):
                el.decompose()
                continue
            for attr in [name for name in el.attrs if name.lower().startswith("on")]:
                del el.attrs[attr]
        except Exception as exc:
            logger.debug("Attribute cleanup failed on <%s>: %s", el.name, exc)


def is_hidden_style(style: str) -> bool:
    """Return True when inline CSS hides the element via display or visibility."""
    if not style:
        return False
    return bool(_HIDDEN_STYLE_RE.search(style))


def find_content_root(soup: BeautifulSoup) -> Tag:
    """Return the main content element, else ``<body>``, else the document root."""
    try:
        root = soup.select_one(_CONTENT_ROOT_SELECTOR)
    except Exception as exc:
        logger.debug("Content root selector failed: %s", exc)
        root = None
    if isinstance(root, Tag):
        return root
    if soup.body is not None:
        return soup.body
    html_el = soup.find("html")
    return html_el if isinstance(html_el, Tag) else soup


def prepare_document(raw: str) -> BeautifulSoup:
    """Unwrap, parse and de-noise *raw*; the returned soup is ready to walk."""
    soup = parse_document(unwrap_html(raw))
    strip_unwanted_tags(soup)
    strip_noise(soup)
    return soup
