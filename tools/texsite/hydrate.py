from __future__ import annotations

import sys
from typing import Callable

from bs4 import BeautifulSoup
from latex2mathml.converter import convert as latex2mathml_convert

MathRenderer = Callable[[str, bool], str]


def render_math(tex: str, display: bool) -> str:
    """TeX -> MathML markup. May raise on input latex2mathml rejects."""
    return latex2mathml_convert(tex, display="block" if display else "inline")


def hydrate_math(fragment: str, renderer: MathRenderer = render_math) -> str:
    """
    Fill every `[data-math]` placeholder in a rendered fragment.

    Each element's previous children are dropped first, so running this
    again on hydrated output gives the same result. A failing expression
    falls back to its TeX source as text.
    """
    soup = BeautifulSoup(fragment, "html.parser")
    for elem in soup.find_all(attrs={"data-math": True}):
        tex = elem.get("data-math") or ""
        display = elem.get("data-display") == "true"
        elem.clear()
        try:
            markup = renderer(tex, display)
        except Exception as exc:
            print(f"! math render failed for {tex!r}: {exc}", file=sys.stderr)
            elem.string = tex
            continue
        elem.append(BeautifulSoup(markup, "html.parser"))
    return str(soup)
