"""ACE (brace) syntax-highlighting build.

Writes a single minified ``ace.js`` made of the editor core, the modelist
extension, the two themes and the markdown mode, then one minified
``mode-<name>.js`` per file of the brace ``mode`` directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

from ..orchestrator import task
from ..orchestrator.gate import ensure_dir
from ..orchestrator.logging import get_logger
from ..orchestrator.pool import map_bounded
from ..orchestrator.utils import _get, ace_core_files, ace_modes_dir, asset_path
from .minify import join_statements, minify_js

logger = get_logger("tasks.ace")

DEFAULT_CONCURRENCY = 3


def _dest(p: Dict) -> Path:
    return asset_path(p, "ace", "ace")


@task(
    name="ace",
    inputs=lambda p: [str(f) for f in ace_core_files(p)] + [str(ace_modes_dir(p))],
    outputs=lambda p: [_dest(p) / "ace.js"],
    gate=lambda p: [_dest(p)],
)
def ace(params: dict):
    dest = ensure_dir(_dest(params))
    build_core(ace_core_files(params), dest / "ace.js")
    concurrency = int(_get(params, "ace", "concurrency", default=DEFAULT_CONCURRENCY))
    written = build_modes(ace_modes_dir(params), dest, concurrency=concurrency)
    logger.info("Wrote ace.js and %d mode files", len(written))


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def build_core(files: List[Path], out_path: Path) -> Path:
    """Read the core files together, join them in order and minify the result."""
    # All core reads in flight at once
    chunks = map_bounded(_read, files, concurrency=max(len(files), 1))
    logger.info("  %s", out_path.name)
    out_path.write_text(minify_js(join_statements(chunks), name=out_path.name), encoding="utf-8")
    return out_path


def build_modes(modes_dir: Path, dest: Path, concurrency: int = DEFAULT_CONCURRENCY) -> List[Path]:
    """Minify every mode file into ``dest/mode-<name>``, ``concurrency`` at a time."""
    mode_files = sorted(p for p in modes_dir.iterdir() if p.is_file())

    def _one(src: Path) -> Path:
        out = dest / f"mode-{src.name}"
        logger.info("  %s", out.name)
        out.write_text(minify_js(_read(src), name=src.name), encoding="utf-8")
        return out

    return map_bounded(_one, mode_files, concurrency=concurrency)
