"""Text helpers shared by the parser, validator and renderer."""

from __future__ import annotations

import html
import re

_TAG = re.compile(r"<[^>]*>")
_HTML_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
_SCRIPT = re.compile(r"<script\b[^>]*>.*?</script>", re.DOTALL | re.IGNORECASE)
_MARKDOWN_LINK = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")
_HEADING_TAG = re.compile(r"<h[1-6]\b", re.IGNORECASE)
_UNSAFE_SCHEMES = ("javascript:", "data:", "vbscript:")

META_DESCRIPTION_LENGTH = 150
SLUG_MAX_LENGTH = 60


def escape_html(text: str) -> str:
    """Escape text content; quotes are left alone."""
    return html.escape(text, quote=False)


def escape_attr(value: str) -> str:
    return html.escape(value, quote=True)


def is_safe_url(url: str) -> bool:
    """True for http(s), mailto and relative URLs."""
    lowered = url.strip().lower()
    if lowered.startswith(_UNSAFE_SCHEMES):
        return False
    if lowered.startswith(("http://", "https://", "mailto:", "/", "#", "?")):
        return True
    return "://" not in lowered


def text_to_html(text: str) -> str:
    """Escape *text* and turn markdown links into anchors."""
    parts: list[str] = []
    last = 0
    for match in _MARKDOWN_LINK.finditer(text):
        parts.append(escape_html(text[last : match.start()]))
        label, url = match.group(1), match.group(2)
        if is_safe_url(url):
            parts.append(f'<a href="{escape_attr(url)}">{escape_html(label)}</a>')
        else:
            parts.append(escape_html(match.group(0)))
        last = match.end()
    parts.append(escape_html(text[last:]))
    return "".join(parts)


def strip_tags(markup: str) -> str:
    """Visible text of an HTML snippet (scripts and comments dropped)."""
    text = _SCRIPT.sub(" ", markup)
    text = _HTML_COMMENT.sub(" ", text)
    text = _TAG.sub(" ", text)
    return html.unescape(text)


def count_words(text: str) -> int:
    return len(text.split())


def has_heading_tag(text: str) -> bool:
    return bool(_HEADING_TAG.search(text))


def slugify(title: str) -> str:
    """URL-safe identifier derived from a title."""
    slug = title.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_]+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug[:SLUG_MAX_LENGTH].strip("-")


def derive_meta_description(explicit: str, introduction: str) -> str:
    """Explicit meta description, else the head of the introduction."""
    if explicit.strip():
        return explicit.strip()
    intro = " ".join(_TAG.sub("", introduction).split())
    if len(intro) <= META_DESCRIPTION_LENGTH:
        return intro
    return intro[:META_DESCRIPTION_LENGTH].rstrip() + "..."
