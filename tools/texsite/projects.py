from __future__ import annotations

import json
import pathlib
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from .assets import extract_images, preview_image_for
from .config import (
    COVER_IMAGES,
    DOC_EXTENSIONS,
    INDEX_OUT,
    PROJECT_META_FILE,
    PROJECTS_DIR,
    PUBLIC_ASSETS,
    SITE_CONFIG,
)
from .metadata import extract_tex_metadata
from .utils import _norm_text, iso_date, read_yaml, slugify


def find_document(project_dir: pathlib.Path) -> Optional[pathlib.Path]:
    for p in sorted(project_dir.iterdir()):
        if p.is_file() and p.suffix.lower() in DOC_EXTENSIONS:
            return p
    return None


def load_cover_images(config_path: pathlib.Path = SITE_CONFIG) -> Dict[str, str]:
    covers = dict(COVER_IMAGES)
    site = read_yaml(config_path)
    covers.update(site.get("cover_images") or {})
    return covers


def make_project_record(
    project_dir: pathlib.Path,
    doc_path: pathlib.Path,
    assets_root: pathlib.Path = PUBLIC_ASSETS,
    cover_images: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    tex = _norm_text(doc_path.read_text(encoding="utf-8"))
    meta = read_yaml(project_dir / PROJECT_META_FILE)

    parsed = extract_tex_metadata(tex)
    images = extract_images(parsed["content"], assets_root)
    slug = slugify(project_dir.name)
    preview = meta.get("previewImage") or preview_image_for(
        slug, images, cover_images
    )
    date_value = meta.get("date") or datetime.now().date()

    return {
        "slug": slug,
        "title": parsed["title"],
        "summary": parsed["summary"],
        "content": parsed["content"],
        "images": images,
        "previewImage": preview,
        "date": iso_date(date_value),
    }


def ingest_projects(
    projects_dir: pathlib.Path = PROJECTS_DIR,
    assets_root: pathlib.Path = PUBLIC_ASSETS,
    output: pathlib.Path = INDEX_OUT,
    config_path: pathlib.Path = SITE_CONFIG,
) -> List[Dict[str, Any]]:
    """Scan every project folder and write the sorted JSON index."""
    if not projects_dir.exists():
        projects_dir.mkdir(parents=True, exist_ok=True)
        print(f"- created {projects_dir}, add your .tex files there")
        write_index([], output)
        return []

    cover_images = load_cover_images(config_path)
    projects: List[Dict[str, Any]] = []

    for folder in sorted(projects_dir.iterdir(), key=lambda p: p.name):
        if not folder.is_dir():
            continue
        doc = find_document(folder)
        if doc is None:
            print(f"! no .tex file found in {folder.name}, skipping")
            continue
        record = make_project_record(folder, doc, assets_root, cover_images)
        projects.append(record)
        print(f"✓ ingested {record['title']}")

    projects.sort(key=lambda p: p["slug"])
    write_index(projects, output)
    print(f"✓ generated {output.name} with {len(projects)} projects")
    return projects


def write_index(projects: List[Dict[str, Any]], output: pathlib.Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        json.dumps(projects, indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )


def load_index(path: pathlib.Path = INDEX_OUT) -> List[Dict[str, Any]]:
    return json.loads(path.read_text(encoding="utf-8"))
