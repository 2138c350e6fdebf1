"""Copy the subset of MathJax the client renderer needs.

Only the loader, the extensions, the element/MathML/TeX input jax and the SVG
output jax are kept. Fonts are dropped except for STIX-Web.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from ..orchestrator import task
from ..orchestrator.gate import ensure_dir
from ..orchestrator.logging import get_logger
from ..orchestrator.utils import asset_path, project_path, project_root

logger = get_logger("tasks.mathjax")

DEFAULT_SOURCE = "node_modules/mathjax"

KEEP_DIRS = ("", "/jax", "/jax/input", "/jax/output")
KEEP_TREES = (
    "/extensions",
    "/MathJax.js",
    "/jax/element",
    "/jax/input/MathML",
    "/jax/input/TeX",
    "/jax/output/SVG",
)


def normalize(path: str) -> str:
    return path.replace("\\", "/")


@dataclass(frozen=True)
class PathFilter:
    """Inclusion by suffix or substring, minus the fonts rule.

    Paths are matched as plain strings. A substring only counts when found
    past the first character, so callers must pass absolute paths.
    """

    include_suffixes: Tuple[str, ...]
    include_substrings: Tuple[str, ...]
    fonts_marker: str = "/fonts/"
    font_keep_marker: str = "/STIX-Web"

    @classmethod
    def for_root(cls, marker: str) -> "PathFilter":
        marker = normalize(marker).rstrip("/")
        return cls(
            include_suffixes=tuple(marker + s for s in KEEP_DIRS),
            include_substrings=tuple(marker + s for s in KEEP_TREES),
        )

    def __call__(self, path: str) -> bool:
        p = normalize(path)
        keep = any(p.endswith(s) for s in self.include_suffixes)
        if any(p.find(s) > 0 for s in self.include_substrings):
            keep = True
        if keep and p.find(self.fonts_marker) > 0 and p.find(self.font_keep_marker) <= 1:
            keep = False
        return keep


def _source(p: Dict) -> Path:
    return project_path(p, "mathjax", "source", default=DEFAULT_SOURCE)


def _dest(p: Dict) -> Path:
    return asset_path(p, "mathjax", "mathjax")


def _marker(p: Dict) -> str:
    src = _source(p).resolve()
    try:
        rel = src.relative_to(project_root(p).resolve())
    except ValueError:
        rel = Path(src.name)
    return "/" + rel.as_posix()


@task(
    name="mathjax",
    inputs=lambda p: [_source(p)],
    outputs=lambda p: [_dest(p)],
    gate=lambda p: [_dest(p)],
)
def mathjax(params: dict):
    dest = ensure_dir(_dest(params))
    copied = copy_filtered(_source(params), dest, PathFilter.for_root(_marker(params)))
    logger.info("Copied %d MathJax files", len(copied))


def copy_filtered(src: Path, dest: Path, keep: PathFilter) -> List[Path]:
    """Recursively copy ``src`` into ``dest``, visiting only what ``keep`` accepts."""
    src = src.resolve()
    root = normalize(str(src))
    logger.info("  %s", root)
    if not keep(root):
        return []
    copied: List[Path] = []

    def _ignore(directory: str, names: List[str]) -> List[str]:
        skipped = []
        for n in names:
            candidate = normalize(os.path.join(directory, n))
            logger.info("  %s", candidate)
            if not keep(candidate):
                skipped.append(n)
        return skipped

    def _copy(s: str, d: str) -> str:
        copied.append(Path(d))
        return shutil.copy2(s, d)

    shutil.copytree(src, dest, ignore=_ignore, copy_function=_copy, dirs_exist_ok=True)
    return copied
