"""Shared fixtures: a throwaway project tree with every asset source in place."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

MODE_SOURCES = {
    "python.js": 'ace.define("ace/mode/python", [], function (require, exports) {\n'
    "    // python mode\n"
    "    var rules = { start: [] };\n"
    "    exports.Mode = rules;\n"
    "});\n",
    "yaml.js": 'ace.define("ace/mode/yaml", [], function (require, exports) {\n'
    "    /* yaml mode */\n"
    "    var indent = 2;\n"
    "    exports.indent = indent;\n"
    "});\n",
    "markdown.js": 'ace.define("ace/mode/markdown", [], function (require, exports) {\n'
    "    exports.name = 'markdown';\n"
    "});\n",
}

MATHJAX_FILES = [
    "MathJax.js",
    "extensions/tex2jax.js",
    "jax/element/mml/jax.js",
    "jax/input/TeX/config.js",
    "jax/input/MathML/config.js",
    "jax/input/AsciiMath/config.js",
    "jax/output/SVG/jax.js",
    "jax/output/SVG/fonts/TeX/fontdata.js",
    "jax/output/SVG/fonts/STIX-Web/fontdata.js",
    "jax/output/HTML-CSS/jax.js",
    "fonts/HTML-CSS/TeX/woff/MathJax_Main.woff",
    "unpacked/MathJax.js",
    "README.md",
]


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    write(root / "node_modules/simplemde/dist/simplemde.min.js", "var SimpleMDE=function(){};\n")

    brace = root / "node_modules/brace"
    write(brace / "index.js", "var ace = {};\nace.define = function (n, d, f) { return f; };\n")
    write(brace / "ext/modelist.js", "ace.modelist = [];\n")
    write(brace / "theme/dawn.js", "ace.theme = 'dawn';\n")
    write(brace / "theme/tomorrow_night.js", "ace.theme = 'tomorrow_night';\n")
    for name, src in MODE_SOURCES.items():
        write(brace / "mode" / name, src)

    for rel in MATHJAX_FILES:
        write(root / "node_modules/mathjax" / rel, f"// {rel}\n")

    locales = root / "server/locales"
    write(locales / "en/browser.json", json.dumps({"hello": "Hello", "bye": "Bye"}))
    write(locales / "fr/browser.json", json.dumps({"hello": "Bonjour"}))
    write(locales / "de/browser.json", "{not json")

    write(root / "client/js/pre-init/01-polyfill.js", "window.a = 1")
    write(root / "client/js/pre-init/02-config.js", "window.b = 2")
    return root


@pytest.fixture
def params(project: Path) -> dict:
    return {"project": {"root": str(project), "runs_dir": None}}


@pytest.fixture
def mode_sources() -> dict:
    return dict(MODE_SOURCES)
