import pytest

PROJECT_1_TEX = r"""\documentclass{article}
\usepackage{graphicx}
\title{\textbf{Stellar Orbits around Sgr A$^*$}}
\begin{document}
\maketitle
\section*{Overview}
We fit Keplerian orbits to S-stars.\footnote{Data from 1992 onward.}
The mass follows \cite{ghez2008}.

\begin{figure}[H]
\centering
\includegraphics[width=0.5\textwidth]{Project-1/figures/orbit.png}
\caption{Orbit of S2 with $e \approx 0.88$.}
\end{figure}

\section{Method}
Energy $E=mc^2$ is conserved.
\end{document}
"""

BETA_TEX = r"""\title{Beta}
\begin{document}
\includegraphics{Beta/plot.png}
\includegraphics{Beta/absent.png}
\end{document}
"""


@pytest.fixture
def sample_site(tmp_path):
    projects = tmp_path / "projects"
    assets = tmp_path / "public" / "assets"

    (projects / "Project-1").mkdir(parents=True)
    (projects / "Project-1" / "paper.tex").write_text(PROJECT_1_TEX, encoding="utf-8")
    (projects / "Project-2").mkdir()
    (projects / "Project-2" / "notes.txt").write_text("draft", encoding="utf-8")
    (projects / "Beta").mkdir()
    (projects / "Beta" / "beta.tex").write_text(BETA_TEX, encoding="utf-8")

    (assets / "Project-1").mkdir(parents=True)
    (assets / "Project-1" / "orbit.png").write_bytes(b"png")
    (assets / "Beta").mkdir()
    (assets / "Beta" / "plot.png").write_bytes(b"png")

    return {
        "projects": projects,
        "assets": assets,
        "output": tmp_path / "projectIndex.json",
        "config": tmp_path / "site.yml",
    }
