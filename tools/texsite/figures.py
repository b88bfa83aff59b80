from __future__ import annotations

import re
from typing import List, Mapping, Optional

from .assets import (
    fallback_image_url,
    find_image_url,
    find_standalone_image_url,
)
from .config import (
    CAPTION_CLASS,
    CAPTION_CMD,
    FIGURE_CLASS,
    FIGURE_ENV,
    FIGURE_IMG,
    FLEX_LAYOUT,
    GRID_LAYOUT,
    INCLUDEGRAPHICS,
    MEDIUM_WIDTHS,
    MINIPAGE_ENV,
    MINIPAGE_ITEM,
    SIZE_FULL,
    SIZE_MEDIUM,
    SIZE_SMALL,
    SMALL_WIDTHS,
    STANDALONE_IMG,
    SUBCAPTION_CLASS,
    SUBFIGURE_ENV,
    SUBFIGURE_ITEM,
)
from .math_protection import MathStore
from .utils import escape_html, find_command_arg


def map_outside(text: str, regex: re.Pattern, fn) -> str:
    """Apply fn to the text between `regex` matches, keeping matches as-is."""
    parts, last = [], 0
    for m in regex.finditer(text):
        parts.append(fn(text[last : m.start()]))
        parts.append(m.group(0))
        last = m.end()
    parts.append(fn(text[last:]))
    return "".join(parts)


def extract_caption(block: str) -> str:
    found = find_command_arg(block, CAPTION_CMD)
    return found[1].strip() if found else ""


def size_class(width_spec: str) -> str:
    if any(w in width_spec for w in MEDIUM_WIDTHS):
        return SIZE_MEDIUM
    if any(w in width_spec for w in SMALL_WIDTHS):
        return SIZE_SMALL
    return SIZE_FULL


def _img(url: str, alt: str, css: str) -> str:
    return (
        f'<img src="{escape_html(url)}" alt="{escape_html(alt)}" '
        f'class="{css}" loading="lazy" />'
    )


def _item(url: str, alt: str, caption: str, item_class: str) -> str:
    sub = f'<p class="{SUBCAPTION_CLASS}">{caption}</p>' if caption else ""
    return f'<div class="{item_class}">{_img(url, alt, FIGURE_IMG)}{sub}</div>'


def _subfigure_items(
    body: str, images: Mapping[str, str], store: MathStore
) -> List[str]:
    items = []
    for sub in SUBFIGURE_ENV.finditer(body):
        img = INCLUDEGRAPHICS.search(sub.group(1))
        if not img:
            continue
        path = img.group("path")
        url = find_image_url(path, images) or fallback_image_url(path)
        caption = extract_caption(sub.group(1))
        caption = escape_html(store.hold_inline(caption))
        items.append(_item(url, path, caption, SUBFIGURE_ITEM))
    return items


def _minipage_items(
    body: str, images: Mapping[str, str], store: MathStore
) -> List[str]:
    items = []
    for page in MINIPAGE_ENV.finditer(body):
        img = INCLUDEGRAPHICS.search(page.group(1))
        if not img:
            continue
        path = img.group("path")
        url = find_image_url(path, images)
        if not url:
            continue
        # Captions found this late still carry raw $...$; mint their own keys.
        caption = extract_caption(page.group(1))
        caption = escape_html(store.hold_inline(caption))
        items.append(_item(url, path, caption, MINIPAGE_ITEM))
    return items


def _direct_image(body: str, images: Mapping[str, str]) -> Optional[str]:
    img = INCLUDEGRAPHICS.search(body)
    if not img:
        return None
    path = img.group("path")
    url = find_image_url(path, images)
    if not url:
        return None
    css = f"{size_class(img.group('opts') or '')} h-auto rounded-lg mx-auto"
    return _img(url, path, css)


def render_figure(
    body: str, images: Mapping[str, str], store: MathStore
) -> str:
    """Render one figure environment body, or "" if no image resolves."""
    if SUBFIGURE_ENV.search(body):
        items = _subfigure_items(body, images, store)
    else:
        items = _minipage_items(body, images, store)
    if not items:
        direct = _direct_image(body, images)
        if direct:
            items = [direct]
    if not items:
        return ""

    outer = SUBFIGURE_ENV.sub("", MINIPAGE_ENV.sub("", body))
    caption = escape_html(store.hold_inline(extract_caption(outer)))
    caption_html = f'<p class="{CAPTION_CLASS}">{caption}</p>' if caption else ""
    layout = GRID_LAYOUT if len(items) == 4 else FLEX_LAYOUT
    return (
        f'\n\n<figure class="{FIGURE_CLASS}"><div class="{layout}">'
        f'{"".join(items)}</div>{caption_html}</figure>\n\n'
    )


def render_figures(
    text: str, images: Mapping[str, str], store: MathStore
) -> str:
    return FIGURE_ENV.sub(lambda m: render_figure(m.group(1), images, store), text)


def render_standalone_images(text: str, images: Mapping[str, str]) -> str:
    def repl(m):
        path = m.group("path")
        url = find_standalone_image_url(path, images)
        if not url:
            return ""
        name = re.sub(r"\s+", "", path.split("/")[-1])
        return f"\n\n{_img(url, name, STANDALONE_IMG)}\n\n"

    return INCLUDEGRAPHICS.sub(repl, text)
