#!/usr/bin/env python3
"""
Project index builder and TeX renderer.

- ingest: projects/<Folder>/<doc>.tex -> projectIndex.json
  record: slug, title, summary, content, images, previewImage, date
- render: one indexed project -> HTML fragment on stdout

Key features:
- Title, Overview summary and document body pulled from each .tex
- \\includegraphics references resolved against public/assets/<Folder>/
- Cover images from a slug table (site.yml can extend it)
- Optional project.yml per folder for a fixed publish date
- Math kept verbatim as placeholders, optionally rendered to MathML
"""

from __future__ import annotations

import argparse
import pathlib
import sys

from .config import INDEX_OUT, PROJECTS_DIR, PUBLIC_ASSETS, SITE_CONFIG
from .hydrate import hydrate_math
from .projects import ingest_projects, load_index
from .transpiler import render_tex


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="texsite",
        description="Build the project index and render TeX write-ups to HTML.",
    )
    sub = parser.add_subparsers(dest="command")

    ingest = sub.add_parser("ingest", help="scan project folders into the index")
    ingest.add_argument("--projects-dir", type=pathlib.Path, default=PROJECTS_DIR)
    ingest.add_argument("--assets-dir", type=pathlib.Path, default=PUBLIC_ASSETS)
    ingest.add_argument("--output", type=pathlib.Path, default=INDEX_OUT)
    ingest.add_argument("--config", type=pathlib.Path, default=SITE_CONFIG)

    render = sub.add_parser("render", help="render one project to HTML")
    render.add_argument("--slug", required=True)
    render.add_argument("--index", type=pathlib.Path, default=INDEX_OUT)
    render.add_argument("--base-url", default="")
    render.add_argument(
        "--hydrate", action="store_true", help="render math to MathML"
    )
    return parser


def run_render(index: pathlib.Path, slug: str, base_url: str, hydrate: bool) -> int:
    if not index.exists():
        print(f"ERROR: {index} missing, run ingest first", file=sys.stderr)
        return 1
    project = next((p for p in load_index(index) if p.get("slug") == slug), None)
    if project is None:
        print(f"ERROR: no project with slug {slug!r}", file=sys.stderr)
        return 1
    html = render_tex(project.get("content", ""), project.get("images") or {}, base_url)
    if hydrate:
        html = hydrate_math(html)
    print(html)
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.command == "render":
        code = run_render(args.index, args.slug, args.base_url, args.hydrate)
        if code:
            sys.exit(code)
        return

    if args.command is None:
        ingest_projects()
        return
    ingest_projects(args.projects_dir, args.assets_dir, args.output, args.config)


if __name__ == "__main__":
    main()
