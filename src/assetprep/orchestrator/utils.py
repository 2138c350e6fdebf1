from __future__ import annotations

"""Small helpers for building asset paths from config params."""

from pathlib import Path
from typing import Dict, List


def _get(d: Dict, *keys, default=None):
    cur = d
    for k in keys:
        if not isinstance(cur, dict):
            return default
        cur = cur.get(k)
        if cur is None:
            return default
    return cur


def project_root(p: Dict) -> Path:
    return Path(_get(p, "project", "root", default="."))


def project_path(p: Dict, *keys, default: str) -> Path:
    """Resolve a configured path against the project root."""
    raw = Path(str(_get(p, *keys, default=default)))
    if raw.is_absolute():
        return raw
    return project_root(p) / raw


def assets_dir(p: Dict) -> Path:
    return project_path(p, "assets", "dir", default="assets/js")


def asset_path(p: Dict, section: str, default_name: str) -> Path:
    """Destination directory of one asset group, e.g. ``assets/js/ace``."""
    name = _get(p, section, "dest", default=None)
    if name is None:
        return assets_dir(p) / default_name
    return project_path(p, section, "dest", default=default_name)


def ace_core_files(p: Dict) -> List[Path]:
    brace = project_path(p, "ace", "source", default="node_modules/brace")
    core = _get(
        p,
        "ace",
        "core",
        default=[
            "index.js",
            "ext/modelist.js",
            "theme/dawn.js",
            "theme/tomorrow_night.js",
            "mode/markdown.js",
        ],
    )
    return [brace / c for c in core]


def ace_modes_dir(p: Dict) -> Path:
    brace = project_path(p, "ace", "source", default="node_modules/brace")
    return brace / str(_get(p, "ace", "modes", default="mode"))


def locales_dir(p: Dict) -> Path:
    return project_path(p, "i18n", "locales_dir", default="server/locales")


def base_locale_file(p: Dict) -> Path:
    return project_path(p, "i18n", "base", default="server/locales/en/browser.json")
