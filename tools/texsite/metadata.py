from __future__ import annotations

from typing import Dict

from .config import (
    CITE_SIMPLE,
    DOCUMENT_BODY,
    FOOTNOTE_SIMPLE,
    OVERVIEW_SECTION,
    SUMMARY_MAX_CHARS,
    TITLE_CMD,
    UNTITLED,
)
from .utils import find_command_arg, plain_title


def extract_title(tex: str) -> str:
    found = find_command_arg(tex, TITLE_CMD)
    if not found:
        return UNTITLED
    return plain_title(found[1]) or UNTITLED


def extract_summary(tex: str) -> str:
    m = OVERVIEW_SECTION.search(tex)
    if not m:
        return ""
    text = FOOTNOTE_SIMPLE.sub("", m.group(1))
    text = CITE_SIMPLE.sub("", text)
    text = text.replace("\\\\", " ")
    lines = [line.strip() for line in text.split("\n")]
    return " ".join(line for line in lines if line)[:SUMMARY_MAX_CHARS].strip()


def extract_body(tex: str) -> str:
    m = DOCUMENT_BODY.search(tex)
    return m.group(1).strip() if m else tex


def extract_tex_metadata(tex: str) -> Dict[str, str]:
    return {
        "title": extract_title(tex),
        "summary": extract_summary(tex),
        "content": extract_body(tex),
    }
