"""Client localization bundles.

Every locale is merged onto the base (English) browser strings so that keys
missing from a translation fall back to the base text.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..orchestrator import task
from ..orchestrator.gate import ensure_dir
from ..orchestrator.logging import get_logger
from ..orchestrator.utils import _get, asset_path, base_locale_file, locales_dir

logger = get_logger("tasks.i18n")


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``override`` with ``base`` filling every key it lacks.

    Nested mappings merge recursively; on any other conflict the override
    value wins. Neither argument is modified.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def read_locale(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        content = json.load(f)
    if not isinstance(content, dict):
        raise ValueError(f"{path} does not hold a JSON object")
    return content


def discover_locales(directory: Path, locale_file: str) -> List[Tuple[str, Path]]:
    """List ``(lang, file)`` pairs: ``<lang>/<locale_file>`` dirs and ``<lang>.json`` files."""
    found: List[Tuple[str, Path]] = []
    for entry in sorted(directory.iterdir()):
        if entry.is_dir():
            found.append((entry.name, entry / locale_file))
        elif entry.suffix == ".json":
            found.append((entry.stem, entry))
        else:
            logger.debug("Ignoring %s", entry)
    return found


def bundle_locale(lang: str, path: Path, base: Dict[str, Any], out_dir: Path) -> Optional[Exception]:
    """Write ``out_dir/<lang>.json``; returns the load error when the base was used instead."""
    out_path = out_dir / f"{lang}.json"
    logger.info("  %s", out_path.name)
    error: Optional[Exception] = None
    try:
        content = deep_merge(base, read_locale(path))
    except (OSError, ValueError) as e:
        logger.warning("Locale %s unusable (%s); using base strings", lang, e)
        content = base
        error = e
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(content, f, ensure_ascii=False)
        f.write("\n")
    return error


@task(
    name="i18n",
    inputs=lambda p: [base_locale_file(p), locales_dir(p)],
    outputs=lambda p: [asset_path(p, "i18n", "i18n")],
)
def i18n(params: dict):
    out_dir = ensure_dir(asset_path(params, "i18n", "i18n"))
    base = read_locale(base_locale_file(params))
    locale_file = str(_get(params, "i18n", "locale_file", default="browser.json"))
    locales = discover_locales(locales_dir(params), locale_file)
    degraded = [
        lang for lang, path in locales if bundle_locale(lang, path, base, out_dir) is not None
    ]
    logger.info(
        "Bundled %d locales (%d fell back to base)", len(locales), len(degraded)
    )
