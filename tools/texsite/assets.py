from __future__ import annotations

import pathlib
import re
from typing import Dict, Mapping, Optional

from .config import (
    ASSET_URL_PREFIX,
    COVER_IMAGES,
    INCLUDEGRAPHICS,
    PLACEHOLDER_PREVIEW,
    PUBLIC_ASSETS,
)

_EXTENSION = re.compile(r"\.[^.]+$")


def extract_images(
    body: str,
    assets_root: pathlib.Path = PUBLIC_ASSETS,
) -> Dict[str, str]:
    """
    Map bare image filenames referenced by \\includegraphics to public URLs.

    Convention:
    - A reference `Project-1/figs/orbit.png` is served from
      `<assets_root>/Project-1/orbit.png` as `/assets/Project-1/orbit.png`.
    - Only files that exist on disk are kept; order is first appearance.
    - References without a folder component are ignored.
    """
    images: Dict[str, str] = {}
    for m in INCLUDEGRAPHICS.finditer(body):
        parts = m.group("path").strip().split("/")
        if len(parts) < 2:
            continue
        project_folder = parts[0].strip()
        file_name = parts[-1].strip()
        if not project_folder or not file_name or file_name in images:
            continue
        if (assets_root / project_folder / file_name).is_file():
            images[file_name] = f"{ASSET_URL_PREFIX}/{project_folder}/{file_name}"
    return images


def preview_image_for(
    slug: str,
    images: Mapping[str, str],
    cover_images: Optional[Mapping[str, str]] = None,
) -> str:
    covers = COVER_IMAGES if cover_images is None else cover_images
    if covers.get(slug):
        return covers[slug]
    for url in images.values():
        return url
    return PLACEHOLDER_PREVIEW


def _clean_file_name(path: str) -> str:
    name = path.split("/")[-1]
    return re.sub(r"\s+", "", name) or path


def _stem(name: str) -> str:
    return _EXTENSION.sub("", name).lower()


def find_image_url(path: str, images: Mapping[str, str]) -> Optional[str]:
    """Exact filename or stem match, both case-insensitive."""
    name = _clean_file_name(path)
    lowered, stem = name.lower(), _stem(name)
    for key, url in images.items():
        if key.lower() == lowered or _stem(key) == stem:
            return url
    return None


def find_standalone_image_url(
    path: str, images: Mapping[str, str]
) -> Optional[str]:
    """Case-insensitive filename match, or the filename inside a key."""
    name = _clean_file_name(path)
    for key, url in images.items():
        if key.lower() == name.lower() or name in key:
            return url
    return None


def fallback_image_url(path: str) -> str:
    rel = re.sub(r"\s+", "", path).lstrip("./")
    return f"{ASSET_URL_PREFIX}/{rel}"


def with_base_url(images: Mapping[str, str], base_url: str) -> Dict[str, str]:
    """Prefix every image URL with the site base path."""
    if not base_url:
        return dict(images)
    base = base_url if base_url.endswith("/") else base_url + "/"
    return {key: f"{base}{url.lstrip('/')}" for key, url in images.items()}
