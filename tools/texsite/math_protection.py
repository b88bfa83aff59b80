#!/usr/bin/env python3
"""
Math protection for the TeX renderer.

Math spans are swapped for `__MATH_DISPLAY_<n>__` / `__MATH_INLINE_<n>__`
keys before any markup rewriting, and swapped back as placeholder
elements at the very end. One store lives for exactly one render call.
"""
from __future__ import annotations

import html
import re
from typing import Dict, Iterable

from .config import DISPLAY_MATH, DISPLAY_MATH_CLASS, INLINE_MATH


def math_element(tex: str, display: bool) -> str:
    attr = html.escape(tex, quote=True)
    if display:
        return (
            f'<div class="{DISPLAY_MATH_CLASS}" data-math="{attr}" '
            f'data-display="true"></div>'
        )
    return f'<span data-math="{attr}" data-display="false"></span>'


class MathStore:
    """Placeholder keys and their markup, numbered by one shared counter."""

    def __init__(self) -> None:
        self.counter = 0
        self.blocks: Dict[str, str] = {}

    def _mint(self, kind: str, tex: str, display: bool) -> str:
        key = f"__MATH_{kind}_{self.counter}__"
        self.counter += 1
        self.blocks[key] = math_element(tex.strip(), display)
        return key

    def _hold(self, regex: re.Pattern, text: str, kind: str, display: bool) -> str:
        def repl(m):
            return self._mint(kind, m.group(1), display)

        return regex.sub(repl, text)

    def hold_display(
        self, text: str, patterns: Iterable[re.Pattern] = DISPLAY_MATH
    ) -> str:
        for regex in patterns:
            text = self._hold(regex, text, "DISPLAY", True)
        return text

    def hold_inline(self, text: str) -> str:
        return self._hold(INLINE_MATH, text, "INLINE", False)

    def restore(self, text: str) -> str:
        for key, markup in self.blocks.items():
            text = text.replace(key, markup)
        return text

    def __len__(self) -> int:
        return len(self.blocks)
