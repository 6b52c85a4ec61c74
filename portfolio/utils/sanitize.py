"""
HTML Text Utilities

Strips markup from authored HTML snippets (for meta descriptions and
excerpts) and marks trusted snippets safe for template output.
"""

import html
import re
from typing import Optional

import bleach
from markupsafe import Markup

# Tags allowed inside authored page copy (About paragraphs, tile captions)
INLINE_TAGS = ["b", "strong", "em", "i", "u", "a", "br", "code", "span"]
INLINE_ATTRS = {
    "a": ["href", "title", "target", "rel"],
    "span": ["class"],
}
ALLOWED_PROTOCOLS = ["http", "https", "mailto"]


def strip_tags(text: Optional[str]) -> str:
    """
    Strip all HTML tags and decode entities, returning plain text.

    Whitespace runs (including the non-breaking spaces produced by
    ``&nbsp;`` and ``&ensp;``) collapse to a single space.
    """
    if text is None:
        return ""

    cleaned = bleach.clean(text, tags=[], strip=True)
    cleaned = html.unescape(cleaned)
    return re.sub(r"\s+", " ", cleaned).strip()


def dom_html(text: Optional[str]) -> Markup:
    """
    Return authored HTML as template-safe markup.

    Only inline formatting tags survive; anything else is escaped.
    """
    if text is None:
        return Markup("")

    cleaned = bleach.clean(
        text,
        tags=INLINE_TAGS,
        attributes=INLINE_ATTRS,
        protocols=ALLOWED_PROTOCOLS,
        strip=False,
    )
    return Markup(cleaned)


def truncate_text(text: Optional[str], length: int = 200) -> str:
    """Plain-text excerpt of at most ``length`` characters, cut on a word boundary."""
    plain = strip_tags(text)
    if len(plain) <= length:
        return plain
    cut = plain[:length].rsplit(" ", 1)[0]
    return cut.rstrip(",.;:") + "…"
