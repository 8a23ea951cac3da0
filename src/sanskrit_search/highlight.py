from __future__ import annotations
from typing import Iterable, List

from markupsafe import Markup, escape

from .config import HIGHLIGHT_CLASS
from .models import SearchMatch


def highlight_matches(text: str, matches: Iterable[SearchMatch],
                      css_class: str = HIGHLIGHT_CLASS) -> Markup:
    """
    HTML for `text` with every match wrapped in
    <span class="{css_class}" data-type="{match type}">.

    Offsets index the same NFC string the matches were computed on.
    Overlaps: the earliest match wins, then the longest; the rest are skipped.
    """
    if not text:
        return Markup("")
    ordered = sorted(
        (m for m in matches if m.length > 0 and 0 <= m.position < len(text)),
        key=lambda m: (m.position, -m.length),
    )
    parts: List[str] = []
    cursor = 0
    for m in ordered:
        if m.position < cursor:
            continue
        end = min(len(text), m.position + m.length)
        parts.append(escape(text[cursor:m.position]))
        parts.append(Markup('<span class="{}" data-type="{}">{}</span>').format(
            css_class, m.type.value, text[m.position:end]))
        cursor = end
    parts.append(escape(text[cursor:]))
    return Markup("").join(parts)
