#!/usr/bin/env python3
"""
TeX document body -> HTML fragment.

The rewrite runs as a fixed sequence of phases; each phase assumes the
ones before it already ran:

 1. \\texorpdfstring unwrapping (its text branch may hold math)
 2. math extraction, display forms first, then inline $...$
 3. structural stripping (preamble, tables, layout commands, comments)
 4. title / author / date lifted into a title block
 5. footnotes -> hover markers
 6. section headings
 7. inline text styles
 8. figure environments
 9. standalone \\includegraphics
10. itemize / enumerate
11. horizontal rules
12. markdown-style "- " bullets
13. residual command sweep
14. paragraph wrapping and escaping
15. math placeholders restored

Math is rendered later by `hydrate.hydrate_math`.
"""
from __future__ import annotations

import re
from typing import Mapping, Tuple

from .assets import with_base_url
from .config import (
    AUTHOR_AND,
    AUTHOR_CLASS,
    AUTHOR_CMD,
    BARE_GROUP,
    BLANK_RUNS,
    BLOCK_START,
    CAPTION_CMD,
    DATE_CLASS,
    DATE_CMD,
    DISPLAY_KEY,
    ESCAPED_SPECIAL,
    FIGURE_ENV,
    LABEL_CMD,
    LINE_BREAK,
    PARAGRAPH_CLASS,
    RESIDUAL_CMD,
    STRAY_ESCAPE,
    STRUCTURE_STRIP,
    TEXORPDFSTRING,
    TITLE_CLASS,
    TITLE_CMD,
    TODAY_CMD,
)
from .figures import map_outside, render_figures, render_standalone_images
from .inline import (
    TagStore,
    convert_footnotes,
    convert_headings,
    convert_inline_styles,
)
from .lists import convert_lists, convert_markdown_bullets, convert_rules
from .math_protection import MathStore
from .utils import (
    _norm_text,
    escape_html,
    find_command_arg,
    plain_title,
    sub_command_args,
)

_LEADING_BLANKS = re.compile(r"^(?:[ \t]*\n)+")
_UNWRAP_CMD = re.compile(r"\\[a-zA-Z]+\*?\{([^{}]*)\}")
_BARE_CMD = re.compile(r"\\[a-zA-Z]+\*?")


def _drop(m, arg):
    return ""


def strip_structure(text: str) -> str:
    for regex in STRUCTURE_STRIP:
        text = regex.sub("", text)
    text = LABEL_CMD.sub("", text)
    # Figure captions are read later by the figure phase.
    text = map_outside(
        text, FIGURE_ENV, lambda s: sub_command_args(s, CAPTION_CMD, _drop)
    )
    return _LEADING_BLANKS.sub("", text)


def _meta_text(raw: str) -> str:
    text = LINE_BREAK.sub(" ", plain_title(raw))
    text = AUTHOR_AND.sub(", ", text)
    while True:
        new = _UNWRAP_CMD.sub(r"\1", text)
        if new == text:
            break
        text = new
    text = _BARE_CMD.sub("", text)
    return escape_html(re.sub(r"\s+", " ", text).strip())


def lift_title_block(text: str) -> Tuple[str, str]:
    """Pull \\title, \\author and \\date out of the body into a header."""
    text = TODAY_CMD.sub("", text)
    lines = []
    for cmd, tag, css in (
        (TITLE_CMD, "h1", TITLE_CLASS),
        (AUTHOR_CMD, "p", AUTHOR_CLASS),
        (DATE_CMD, "p", DATE_CLASS),
    ):
        found = find_command_arg(text, cmd)
        if found:
            value = _meta_text(found[1])
            if value:
                lines.append(f'<{tag} class="{css}">{value}</{tag}>\n')
        text = sub_command_args(text, cmd, _drop)
    return "".join(lines), text


def sweep_residual_commands(text: str) -> str:
    text = LINE_BREAK.sub(" ", text)
    text = RESIDUAL_CMD.sub("", text)
    text = ESCAPED_SPECIAL.sub(r"\1", text)
    text = STRAY_ESCAPE.sub("", text)
    while True:
        new = BARE_GROUP.sub(r"\1", text)
        if new == text:
            return new.strip()
        text = new


def wrap_paragraphs(text: str) -> str:
    out = []
    for block in BLANK_RUNS.split(text):
        block = block.strip()
        if not block:
            continue
        if BLOCK_START.match(block):
            out.append(block)
            continue
        # Display math is a block of its own, never inside a <p>.
        for part in DISPLAY_KEY.split(block):
            part = part.strip()
            if not part:
                continue
            if DISPLAY_KEY.fullmatch(part):
                out.append(part)
            else:
                body = escape_html(part)
                out.append(f'<p class="{PARAGRAPH_CLASS}">{body}</p>')
    return "\n".join(out)


def render_tex(
    content: str,
    images: Mapping[str, str],
    base_url: str = "",
) -> str:
    """
    Render a document body to an HTML fragment.

    `images` maps bare filenames to public URLs (as produced by the
    ingest step). Never raises on malformed input.
    """
    images = with_base_url(images, base_url)
    store = MathStore()
    tags = TagStore()
    text = _norm_text(content)

    text = TEXORPDFSTRING.sub(r"\1", text)

    text = store.hold_display(text)
    text = store.hold_inline(text)

    text = strip_structure(text)
    title_html, text = lift_title_block(text)

    text = convert_footnotes(text, tags)
    text = convert_headings(text)
    text = convert_inline_styles(text, tags=tags)

    text = render_figures(text, images, store)
    text = render_standalone_images(text, images)

    text = convert_lists(text)
    text = convert_rules(text)
    text = convert_markdown_bullets(text)

    text = sweep_residual_commands(text)
    body = wrap_paragraphs(text)

    return store.restore(tags.restore(title_html + body))
