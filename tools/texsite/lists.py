from __future__ import annotations

import re

from .config import (
    BLANK_RUNS,
    HR_CLASS,
    HRULE,
    ITEM_LABEL,
    LIST_CLASS,
    LIST_ENV,
    LIST_ITEM_CLASS,
    LIST_ITEM_SPLIT,
    MD_BULLET_RUN,
)
from .inline import convert_inline_styles
from .utils import escape_html

BULLET = "•"
_MD_BULLET_LINE = re.compile(r"^[ \t]*-[ \t]+(.*)$")
_TRAILING_BREAK = re.compile(r"\s*\\\\\s*$")


def _li(marker: str, text: str) -> str:
    return f'<li class="{LIST_ITEM_CLASS}">{marker} {text}</li>'


def _list_html(kind: str, body: str) -> str:
    tag = "ol" if kind == "enumerate" else "ul"
    items = [p.strip() for p in LIST_ITEM_SPLIT.split(body)]
    rendered = []
    for idx, text in enumerate((p for p in items if p), start=1):
        label = ITEM_LABEL.match(text)
        if label:
            marker = escape_html(label.group(1))
            text = text[label.end():]
        else:
            marker = f"{idx}." if tag == "ol" else BULLET
        text = convert_inline_styles(escape_html(text), ("textbf", "textit"))
        text = BLANK_RUNS.sub("\n", text.replace("\\\\", "")).strip()
        rendered.append(_li(marker, text))
    return f'<{tag} class="{LIST_CLASS}">{"".join(rendered)}</{tag}>'


def convert_lists(text: str) -> str:
    """Convert itemize/enumerate, innermost environments first."""
    # Inner lists wait behind keys so the outer item text can be escaped.
    held = {}

    def repl(m):
        key = f"__LIST_{len(held)}__"
        held[key] = _list_html(m.group(1), m.group(2))
        return f"\n\n{key}\n\n"

    while True:
        new = LIST_ENV.sub(repl, text)
        if new == text:
            break
        text = new
    for key in reversed(list(held)):
        text = text.replace(key, held[key])
    return text


def convert_rules(text: str) -> str:
    return HRULE.sub(f'\n\n<hr class="{HR_CLASS}" />\n\n', text)


def convert_markdown_bullets(text: str) -> str:
    """Runs of `- item` lines become one list."""

    def repl(m):
        items = []
        for line in m.group(0).splitlines():
            bullet = _MD_BULLET_LINE.match(line)
            if bullet:
                body = escape_html(_TRAILING_BREAK.sub("", bullet.group(1)).strip())
                items.append(_li(BULLET, body))
        return f'\n\n<ul class="{LIST_CLASS}">{"".join(items)}</ul>\n\n'

    return MD_BULLET_RUN.sub(repl, text)
