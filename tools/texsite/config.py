#!/usr/bin/env python3
from __future__ import annotations

import pathlib
import re

# ---------- Paths

# This assumes config.py sits in tools/texsite/ under the repo root.
ROOT = pathlib.Path(__file__).resolve().parents[2]
PROJECTS_DIR = ROOT / "projects"
PUBLIC_ASSETS = ROOT / "public" / "assets"
INDEX_OUT = ROOT / "projectIndex.json"
SITE_CONFIG = ROOT / "site.yml"

# ---------- Config

ASSET_URL_PREFIX = "/assets"
DOC_EXTENSIONS = (".tex",)
PROJECT_META_FILE = "project.yml"
SUMMARY_MAX_CHARS = 300
SLUG_MAX_LEN = 50
UNTITLED = "Untitled"
PLACEHOLDER_PREVIEW = "/assets/placeholder.svg"

# Width literals on a lone \includegraphics, bucketed into display sizes.
MEDIUM_WIDTHS = ("0.48", "0.5", "0.6")
SMALL_WIDTHS = ("0.4", "0.3")

# Hand-picked cover art, keyed by slug. site.yml `cover_images` merges on top.
COVER_IMAGES = {
    "project-1": "/assets/project1-cover.jpg",
    "project-2": "/assets/project2-cover.jpg",
    "project-3": "/assets/project3-cover.jpg",
}

# ---------- Extractor regexes

TITLE_CMD = re.compile(r"\\title\s*\{")
OVERVIEW_SECTION = re.compile(
    r"\\section\*?\{Overview\}([\s\S]*?)"
    r"(?=\\section|\\begin\{figure\}|\\end\{document\}|\Z)",
    re.IGNORECASE,
)
DOCUMENT_BODY = re.compile(r"\\begin\{document\}([\s\S]*?)\\end\{document\}")
FOOTNOTE_SIMPLE = re.compile(r"\\footnote\{[^}]*\}")
CITE_SIMPLE = re.compile(r"\\cite[a-zA-Z]*(?:\[[^\]]*\])?\{[^}]*\}")
INCLUDEGRAPHICS = re.compile(
    r"\\includegraphics(?:\s*\[(?P<opts>[^\]]*)\])?\s*\{(?P<path>[^}]+)\}"
)
SLUG_STRIP = re.compile(r"[^\w\s-]", re.ASCII)

# ---------- Transpiler regexes

TEXORPDFSTRING = re.compile(r"\\texorpdfstring\{[^}]*\}\{([^}]*)\}")
DISPLAY_MATH = (
    re.compile(r"(?<!\\)\\\[([\s\S]*?)\\\]"),
    re.compile(r"(?<!\\)\$\$([\s\S]*?)\$\$"),
    re.compile(r"\\begin\{equation\*?\}([\s\S]*?)\\end\{equation\*?\}"),
    re.compile(r"\\begin\{align\*?\}([\s\S]*?)\\end\{align\*?\}"),
    re.compile(r"\\begin\{gather\*?\}([\s\S]*?)\\end\{gather\*?\}"),
    re.compile(r"\\begin\{eqnarray\*?\}([\s\S]*?)\\end\{eqnarray\*?\}"),
    re.compile(r"\\begin\{multline\*?\}([\s\S]*?)\\end\{multline\*?\}"),
)
INLINE_MATH = re.compile(r"(?<!\\)\$([^$]+?)(?<!\\)\$")

STRUCTURE_STRIP = (
    re.compile(r"(?<![\\\d])%[^\n]*"),
    re.compile(r"\\documentclass(?:\[[^\]]*\])?\{[^}]*\}"),
    re.compile(r"\\usepackage(?:\[[^\]]*\])?\{[^}]*\}"),
    re.compile(r"\\begin\{document\}"),
    re.compile(r"\\end\{document\}"),
    re.compile(r"\\begin\{abstract\}[\s\S]*?\\end\{abstract\}"),
    re.compile(r"\\maketitle"),
    re.compile(r"\\begin\{table\*?\}[\s\S]*?\\end\{table\*?\}"),
    re.compile(r"\\begin\{tabular\*?\}[\s\S]*?\\end\{tabular\*?\}"),
    re.compile(r"\\geometry\{[^}]*\}"),
    re.compile(r"\\pagestyle\{[^}]*\}"),
    re.compile(r"\\setcounter\{[^}]*\}\{[^}]*\}"),
    re.compile(r"\\renewcommand\{[^}]*\}\{[^}]*\}"),
    re.compile(r"\\centering\b"),
    re.compile(r"\\hfill\b"),
    re.compile(r"\[!?(?:H|h|t|b|htbp|htb|tbp)\]"),
    re.compile(r"(?<![=\d.])0\.\d+\\(?:textwidth|linewidth)"),
)
FIGURE_ENV = re.compile(
    r"\\begin\{figure\*?\}(?:\[[^\]]*\])?([\s\S]*?)\\end\{figure\*?\}"
)
SUBFIGURE_ENV = re.compile(
    r"\\begin\{subfigure\}(?:\[[^\]]*\])?(?:\{[^}]*\})?"
    r"([\s\S]*?)\\end\{subfigure\}"
)
MINIPAGE_ENV = re.compile(
    r"\\begin\{minipage\}(?:\[[^\]]*\])?\{[^}]*\}"
    r"([\s\S]*?)\\end\{minipage\}"
)
CAPTION_CMD = re.compile(r"\\caption\*?\s*\{")
LABEL_CMD = re.compile(r"\\label\{[^}]*\}")
FOOTNOTE_CMD = re.compile(r"\\footnote\s*\{")
AUTHOR_CMD = re.compile(r"\\author\s*\{")
DATE_CMD = re.compile(r"\\date\s*\{")
TODAY_CMD = re.compile(r"\\today\b")
AUTHOR_AND = re.compile(r"\s*\\and\b\s*")
SECTION_CMD = re.compile(r"\\(section|subsection|subsubsection)\*?\s*\{")
INLINE_STYLE = re.compile(
    r"\\(textbf|textit|texttt|emph|textsl|textsc|textrm|textsf)\{([^{}]*)\}"
)
LIST_ENV = re.compile(
    r"\\begin\{(itemize|enumerate)\}(?:\[[^\]]*\])?"
    r"((?:(?!\\begin\{(?:itemize|enumerate)\})[\s\S])*?)"
    r"\\end\{\1\}"
)
LIST_ITEM_SPLIT = re.compile(r"\\item\b\s*")
ITEM_LABEL = re.compile(r"^\[([^\]]*)\]\s*")
HRULE = re.compile(r"^-{3,}[ \t]*$", re.MULTILINE)
MD_BULLET_RUN = re.compile(r"(?:^[ \t]*-[ \t]+[^\n]*(?:\n|$))+", re.MULTILINE)
LINE_BREAK = re.compile(r"\\\\(?:\[[^\]]*\])?")
RESIDUAL_CMD = re.compile(r"\\[a-zA-Z]+(?:\{[^}]*\})?")
ESCAPED_SPECIAL = re.compile(r"\\([%&#_$])")
STRAY_ESCAPE = re.compile(r"\\[^a-zA-Z]")
BARE_GROUP = re.compile(r"\{([^{}]*)\}")
BLANK_RUNS = re.compile(r"\n[ \t]*(?:\n[ \t]*)+")
BLOCK_START = re.compile(
    r"^<(?:h[1-6]|p|ul|ol|li|figure|div|hr|img|table|blockquote)\b",
    re.IGNORECASE,
)
DISPLAY_KEY = re.compile(r"(__MATH_DISPLAY_\d+__)")

# ---------- CSS hooks shared with the display layer

TITLE_CLASS = "text-4xl font-bold mb-3 text-white"
AUTHOR_CLASS = "text-base text-gray-400 mb-1"
DATE_CLASS = "text-sm text-gray-500 mb-6"
FOOTNOTE_CLASS = "text-orange-400 cursor-help"
HEADING_CLASSES = {
    "section": (
        "h2",
        "text-3xl font-bold mt-10 mb-5 text-white "
        "border-b border-orange-500/50 pb-2",
    ),
    "subsection": ("h3", "text-2xl font-semibold mt-8 mb-4 text-gray-100"),
    "subsubsection": ("h4", "text-xl font-semibold mt-6 mb-3 text-gray-200"),
}
SMALLCAPS_CLASS = "uppercase"
DISPLAY_MATH_CLASS = "my-6 overflow-x-auto"
FIGURE_CLASS = "my-8"
GRID_LAYOUT = "grid grid-cols-1 md:grid-cols-2 gap-4"
FLEX_LAYOUT = "flex flex-wrap gap-4 justify-center"
SUBFIGURE_ITEM = "flex-1 min-w-[280px] max-w-[48%]"
MINIPAGE_ITEM = "w-[48%] min-w-[280px]"
FIGURE_IMG = "w-full h-auto rounded-lg"
SUBCAPTION_CLASS = "text-sm text-gray-400 mt-2 text-center"
CAPTION_CLASS = "text-sm text-gray-400 mt-4 text-center italic"
SIZE_FULL = "max-w-3xl w-full"
SIZE_MEDIUM = "max-w-md w-full"
SIZE_SMALL = "max-w-sm w-full"
STANDALONE_IMG = "max-w-full h-auto rounded-lg my-4"
LIST_CLASS = "my-4 space-y-1"
LIST_ITEM_CLASS = "ml-4 mb-2 text-gray-200"
HR_CLASS = "my-6 border-gray-600"
PARAGRAPH_CLASS = "mb-4 leading-relaxed text-gray-200"
