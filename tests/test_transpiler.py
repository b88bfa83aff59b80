from bs4 import BeautifulSoup

from texsite.config import (
    AUTHOR_CLASS,
    DISPLAY_MATH_CLASS,
    FLEX_LAYOUT,
    GRID_LAYOUT,
    PARAGRAPH_CLASS,
)
from texsite.transpiler import render_tex


def _math(html):
    soup = BeautifulSoup(html, "html.parser")
    return [
        (el["data-math"], el["data-display"])
        for el in soup.find_all(attrs={"data-math": True})
    ]


def test_title_and_paragraph():
    out = render_tex(r"\title{Orbits}\begin{document}Hello\end{document}", {})
    assert out == (
        '<h1 class="text-4xl font-bold mb-3 text-white">Orbits</h1>\n'
        f'<p class="{PARAGRAPH_CLASS}">Hello</p>'
    )


def test_inline_math_round_trip():
    out = render_tex("Energy $E=mc^2$ is conserved.", {})
    assert out == (
        f'<p class="{PARAGRAPH_CLASS}">Energy '
        '<span data-math="E=mc^2" data-display="false"></span>'
        " is conserved.</p>"
    )


def test_display_math_payload_is_untouched():
    src = (
        "Before\n\\begin{equation}\n \\alpha + \\frac{a}{b} % not a comment\n\\end{equation}\n"
        "and $\\textbf{x}_{i}$ after"
    )
    assert _math(render_tex(src, {})) == [
        ("\\alpha + \\frac{a}{b} % not a comment", "true"),
        ("\\textbf{x}_{i}", "false"),
    ]


def test_texorpdfstring_text_branch_is_used():
    out = render_tex("\\section{Mass \\texorpdfstring{$M_\\odot$}{solar mass}}", {})
    assert ">Mass solar mass</h2>" in out
    assert "data-math" not in out


def test_preamble_tables_and_abstract_are_stripped():
    src = (
        "\\documentclass[12pt]{article}\n\\usepackage[margin=1in]{geometry}\n"
        "\\begin{abstract}Abstract text\\end{abstract}\n\\maketitle\n"
        "\\begin{table}[h]\\begin{tabular}{|c|c|}a & b\\end{tabular}\\end{table}\n"
        "Kept."
    )
    out = render_tex(src, {})
    assert out == f'<p class="{PARAGRAPH_CLASS}">Kept.</p>'


def test_author_and_date_lines():
    out = render_tex("\\title{T}\\author{A \\and B}\\date{\\today}\nText", {})
    assert f'<p class="{AUTHOR_CLASS}">A, B</p>' in out
    assert "text-gray-500" not in out
    assert "\\author" not in out


def test_footnote_becomes_hover_marker():
    out = render_tex("Claim\\footnote{See ref}.", {})
    assert (
        'Claim<sup class="text-orange-400 cursor-help" title="See ref">[*]</sup>.'
        in out
    )


def test_section_levels():
    out = render_tex(
        "\\section*{Overview}\n\\subsection{Data}\n\\subsubsection{Cuts}", {}
    )
    assert '<h2 class="text-3xl' in out and ">Overview</h2>" in out
    assert '<h3 class="text-2xl' in out and ">Data</h3>" in out
    assert '<h4 class="text-xl' in out and ">Cuts</h4>" in out


def test_inline_styles_inside_paragraph():
    out = render_tex(
        "\\textbf{Bold} \\textit{it} \\texttt{code} \\textsc{Caps} "
        "\\textrm{plain} \\textbf{\\emph{both}}",
        {},
    )
    assert out == (
        f'<p class="{PARAGRAPH_CLASS}"><strong>Bold</strong> <em>it</em> '
        '<code>code</code> <span class="uppercase">Caps</span> plain '
        "<strong><em>both</em></strong></p>"
    )


def test_unresolved_figure_renders_nothing():
    src = (
        "\\begin{figure}[H]\n\\centering\n\\includegraphics{missing.png}\n"
        "\\caption{Gone}\n\\label{fig:gone}\n\\end{figure}"
    )
    assert render_tex(src, {}) == ""


def test_four_image_figure_grid_three_flex():
    images = {f"f{i}.png": f"/assets/P/f{i}.png" for i in range(4)}

    def fig(n):
        return (
            "\\begin{figure}[htbp]\n\\centering\n"
            + "\n\\hfill\n".join(
                f"\\begin{{subfigure}}[t]{{0.48\\textwidth}}\n"
                f"\\includegraphics[width=\\linewidth]{{P/f{i}.png}}\n"
                f"\\caption{{Panel {i}}}\n\\end{{subfigure}}"
                for i in range(n)
            )
            + "\n\\caption{All panels}\n\\end{figure}"
        )

    four = render_tex(fig(4), images)
    assert GRID_LAYOUT in four and four.count("<img") == 4
    assert "All panels" in four
    three = render_tex(fig(3), images)
    assert FLEX_LAYOUT in three and GRID_LAYOUT not in three


def test_caption_math_is_restored():
    images = {"orbit.png": "/assets/P/orbit.png"}
    src = (
        "\\begin{figure}\\includegraphics{P/orbit.png}"
        "\\caption{Orbit with $e=0.88$}\\end{figure}"
    )
    assert _math(render_tex(src, images)) == [("e=0.88", "false")]


def test_caption_outside_figure_is_removed():
    out = render_tex("Text \\caption{stray {nested}} more", {})
    assert out == f'<p class="{PARAGRAPH_CLASS}">Text  more</p>'


def test_standalone_image_and_base_url():
    out = render_tex("\\includegraphics{P/a.png}", {"a.png": "/assets/P/a.png"}, "/site/")
    assert out.startswith('<img src="/site/assets/P/a.png" alt="a.png"')


def test_lists_rules_and_bullets():
    src = (
        "\\begin{itemize}\\item A\\item B\\end{itemize}\n\n---\n\n"
        "- loose one\n- loose two\n"
    )
    out = render_tex(src, {})
    assert out.count("<ul") == 2
    assert out.count("<li") == 4
    assert "<hr" in out


def test_residual_commands_and_specials():
    out = render_tex(
        "Use \\vspace{2mm}the \\LaTeX{} tool: 50\\% and A\\&B, {Grouped} text.", {}
    )
    assert out == (
        f'<p class="{PARAGRAPH_CLASS}">Use the  tool: 50% and A&amp;B, '
        "Grouped text.</p>"
    )


def test_comments_are_removed():
    out = render_tex("Visible % hidden\nNext", {})
    assert "hidden" not in out
    assert "Visible" in out and "Next" in out


def test_blank_lines_split_paragraphs_and_text_is_escaped():
    out = render_tex("First a < b.\n\n\nSecond \"q\".", {})
    assert out == (
        f'<p class="{PARAGRAPH_CLASS}">First a &lt; b.</p>\n'
        f'<p class="{PARAGRAPH_CLASS}">Second &quot;q&quot;.</p>'
    )


def test_rerendering_output_is_stable():
    images = {"a.png": "/assets/P/a.png"}
    src = (
        "\\title{Orbits}\n\\section{Intro}\nA & B < C's \\textbf{bold}.\n\n"
        "\\begin{itemize}\\item one\\end{itemize}\n\n---\n\n"
        "\\begin{figure}\\includegraphics[width=0.5\\textwidth]{P/a.png}"
        "\\caption{Cap}\\end{figure}"
    )
    once = render_tex(src, images)
    assert render_tex(once, images) == once
    assert "&amp;amp;" not in render_tex(once, images)


def test_calls_do_not_share_counters():
    assert render_tex("$a$", {}) == render_tex("$a$", {})
    assert "__MATH" not in render_tex("$a$ and $$b$$", {})


def test_malformed_input_does_not_raise():
    for src in (
        "\\begin{figure}\\caption{unclosed",
        "\\section{open",
        "$ lonely dollar",
        "\\begin{itemize}\\item x",
        "}}}{{{",
        "",
    ):
        assert isinstance(render_tex(src, {}), str)


def test_spaced_line_break_in_align_stays_inside_its_equation():
    src = (
        "\\begin{align} a &= b \\\\[4pt] c &= d \\end{align}\n\n"
        "Middle text.\n\n\\[ x = 1 \\]"
    )
    out = render_tex(src, {})
    assert _math(out) == [
        ("a &= b \\\\[4pt] c &= d", "true"),
        ("x = 1", "true"),
    ]
    assert f'<p class="{PARAGRAPH_CLASS}">Middle text.</p>' in out


def test_raw_html_in_source_is_escaped():
    out = render_tex(
        'Click <a href="javascript:alert(1)">here</a> \\textbf{x} '
        '<span onmouseover="x()">y</span>',
        {},
    )
    assert out == (
        f'<p class="{PARAGRAPH_CLASS}">Click '
        "&lt;a href=&quot;javascript:alert(1)&quot;&gt;here&lt;/a&gt; "
        "<strong>x</strong> "
        "&lt;span onmouseover=&quot;x()&quot;&gt;y&lt;/span&gt;</p>"
    )


def test_display_math_is_not_nested_in_paragraphs():
    out = render_tex("Before \\[ x \\] after", {})
    assert out == (
        f'<p class="{PARAGRAPH_CLASS}">Before</p>\n'
        f'<div class="{DISPLAY_MATH_CLASS}" data-math="x" data-display="true"></div>\n'
        f'<p class="{PARAGRAPH_CLASS}">after</p>'
    )


def test_captions_and_list_items_are_escaped():
    images = {"a.png": "/assets/P/a.png"}
    src = (
        "\\begin{figure}\\includegraphics{P/a.png}"
        "\\caption{a < b \\textbf{c}}\\end{figure}\n\n"
        "\\begin{itemize}\\item x < y\\end{itemize}"
    )
    out = render_tex(src, images)
    assert "a &lt; b <strong>c</strong></p>" in out
    assert "• x &lt; y</li>" in out
