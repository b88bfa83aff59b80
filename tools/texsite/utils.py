from __future__ import annotations

import pathlib
import re
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

import yaml

from .config import SLUG_MAX_LEN, SLUG_STRIP

_HTML_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}
# A bare ampersand, i.e. not already the start of an entity.
_BARE_AMP = re.compile(r"&(?!(?:#\d+|#x[0-9a-fA-F]+|[a-zA-Z][a-zA-Z0-9]*);)")


def slugify(s: str) -> str:
    s = SLUG_STRIP.sub("", s.lower())
    s = re.sub(r"\s+", "-", s)
    return re.sub(r"-+", "-", s)[:SLUG_MAX_LEN]


def read_yaml(path: pathlib.Path) -> Dict[str, Any]:
    if path.exists():
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return {}


def _norm_text(s: str) -> str:
    return s.replace('\r\n', '\n').replace('\r', '\n').lstrip('\ufeff')


def _coerce_date_like(v):
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, date):
        return v
    if isinstance(v, str):
        s = v.strip().strip('"').strip("'")
        try:
            return date.fromisoformat(s)
        except ValueError:
            return v
    return v


def iso_date(v) -> str:
    v = _coerce_date_like(v)
    if isinstance(v, date):
        return v.isoformat()
    return str(v)


def escape_html(text: str) -> str:
    """Escape text for HTML, leaving existing entities untouched."""
    text = _BARE_AMP.sub("&amp;", text)
    for ch, rep in _HTML_ESCAPES.items():
        text = text.replace(ch, rep)
    return text


def read_braced(text: str, open_idx: int) -> Optional[Tuple[str, int]]:
    """
    Read a brace group whose `{` sits at `open_idx`.

    Returns (inner_text, index_after_closing_brace), or None when the
    group never closes. Escaped braces (`\\{`, `\\}`) do not count.
    """
    if open_idx >= len(text) or text[open_idx] != "{":
        return None
    depth = 0
    i = open_idx
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[open_idx + 1 : i], i + 1
        i += 1
    return None


def find_command_arg(
    text: str, pattern: re.Pattern, start: int = 0
) -> Optional[Tuple[int, str, int]]:
    """
    Find the first `pattern` match (which must end on its opening brace)
    and read its brace-balanced argument.

    Returns (match_start, argument, end_index) or None.
    """
    pos = start
    while True:
        m = pattern.search(text, pos)
        if not m:
            return None
        got = read_braced(text, m.end() - 1)
        if got is not None:
            arg, end = got
            return m.start(), arg, end
        pos = m.end()


def sub_command_args(text: str, pattern: re.Pattern, fn) -> str:
    """
    Replace every `pattern` command plus its balanced argument with
    fn(match, argument). Unclosed commands are left as they are.
    """
    parts, pos = [], 0
    while True:
        m = pattern.search(text, pos)
        if not m:
            break
        got = read_braced(text, m.end() - 1)
        if got is None:
            parts.append(text[pos : m.end()])
            pos = m.end()
            continue
        arg, end = got
        parts.append(text[pos : m.start()])
        parts.append(fn(m, arg))
        pos = end
    parts.append(text[pos:])
    return "".join(parts)


_BOLD_WRAP = re.compile(r"^\s*\\textbf\s*\{")
_DOLLAR_MATH = re.compile(r"\$([^$]*)\$")


def plain_title(raw: str) -> str:
    """Unwrap one layer of \\textbf{} and drop `$` math delimiters."""
    text = raw.strip()
    m = _BOLD_WRAP.match(text)
    if m:
        got = read_braced(text, m.end() - 1)
        if got is not None and not text[got[1]:].strip():
            text = got[0]
    return _DOLLAR_MATH.sub(r"\1", text).strip()
