from __future__ import annotations

from typing import Dict, Iterable, Optional

from .config import (
    FOOTNOTE_CLASS,
    FOOTNOTE_CMD,
    HEADING_CLASSES,
    INLINE_STYLE,
    SECTION_CMD,
    SMALLCAPS_CLASS,
)
from .utils import sub_command_args

_STYLE_TAGS = {
    "textbf": ("<strong>", "</strong>"),
    "textit": ("<em>", "</em>"),
    "texttt": ("<code>", "</code>"),
    "emph": ("<em>", "</em>"),
    "textsl": ("<em>", "</em>"),
    "textsc": (f'<span class="{SMALLCAPS_CLASS}">', "</span>"),
    "textrm": ("", ""),
    "textsf": ("", ""),
}


class TagStore:
    """
    Inline tags emitted by the renderer, held as `__TAG_<n>__` keys.

    Paragraph text is escaped in full, so only markup that went through
    `hold` comes back out as live HTML.
    """

    def __init__(self) -> None:
        self.tags: Dict[str, str] = {}

    def hold(self, markup: str) -> str:
        if not markup:
            return ""
        key = f"__TAG_{len(self.tags)}__"
        self.tags[key] = markup
        return key

    def restore(self, text: str) -> str:
        for key, markup in self.tags.items():
            text = text.replace(key, markup)
        return text


def _emit(markup: str, tags: Optional[TagStore]) -> str:
    return tags.hold(markup) if tags is not None else markup


def convert_footnotes(text: str, tags: Optional[TagStore] = None) -> str:
    # Footnote bodies go into the attribute as written.
    return sub_command_args(
        text,
        FOOTNOTE_CMD,
        lambda m, body: _emit(
            f'<sup class="{FOOTNOTE_CLASS}" title="{body}">[*]</sup>', tags
        ),
    )


def convert_headings(text: str) -> str:
    def repl(m, heading):
        tag, css = HEADING_CLASSES[m.group(1)]
        return f'\n\n<{tag} class="{css}">{heading.strip()}</{tag}>\n\n'

    return sub_command_args(text, SECTION_CMD, repl)


def convert_inline_styles(
    text: str,
    commands: Optional[Iterable[str]] = None,
    tags: Optional[TagStore] = None,
) -> str:
    """Innermost groups first, so nested styles unwrap cleanly."""
    allowed = set(commands) if commands is not None else set(_STYLE_TAGS)

    def repl(m):
        if m.group(1) not in allowed:
            return m.group(0)
        open_tag, close_tag = _STYLE_TAGS[m.group(1)]
        return f"{_emit(open_tag, tags)}{m.group(2)}{_emit(close_tag, tags)}"

    while True:
        new = INLINE_STYLE.sub(repl, text)
        if new == text:
            return new
        text = new
