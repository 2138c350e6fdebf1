"""Tests for assetprep.tasks.mathjax."""

from __future__ import annotations

import logging

from assetprep.tasks.mathjax import PathFilter, copy_filtered, mathjax

ROOT = "/srv/wiki/node_modules/mathjax"


def _files(root):
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())


class TestPathFilter:
    keep = PathFilter.for_root("/node_modules/mathjax")

    def test_root_and_container_dirs(self):
        for suffix in ("", "/jax", "/jax/input", "/jax/output"):
            assert self.keep(ROOT + suffix)

    def test_whitelisted_trees(self):
        assert self.keep(ROOT + "/MathJax.js")
        assert self.keep(ROOT + "/extensions/tex2jax.js")
        assert self.keep(ROOT + "/jax/element/mml/jax.js")
        assert self.keep(ROOT + "/jax/input/TeX/config.js")
        assert self.keep(ROOT + "/jax/input/MathML/config.js")
        assert self.keep(ROOT + "/jax/output/SVG/jax.js")

    def test_other_paths_rejected(self):
        assert not self.keep(ROOT + "/jax/output/HTML-CSS/jax.js")
        assert not self.keep(ROOT + "/jax/input/AsciiMath")
        assert not self.keep(ROOT + "/unpacked/MathJax.js")
        assert not self.keep(ROOT + "/fonts")

    def test_fonts_excluded_except_stix_web(self):
        assert self.keep(ROOT + "/jax/output/SVG/fonts")
        assert not self.keep(ROOT + "/jax/output/SVG/fonts/TeX")
        assert not self.keep(ROOT + "/jax/output/SVG/fonts/TeX/fontdata.js")
        assert self.keep(ROOT + "/jax/output/SVG/fonts/STIX-Web")
        assert self.keep(ROOT + "/jax/output/SVG/fonts/STIX-Web/fontdata.js")

    def test_windows_separators(self):
        assert self.keep("C:\\srv\\node_modules\\mathjax\\extensions\\tex2jax.js")

    def test_substring_at_offset_zero_ignored(self):
        assert not self.keep("/node_modules/mathjax/extensions/tex2jax.js")


class TestCopyFiltered:
    EXPECTED = [
        "MathJax.js",
        "extensions/tex2jax.js",
        "jax/element/mml/jax.js",
        "jax/input/MathML/config.js",
        "jax/input/TeX/config.js",
        "jax/output/SVG/fonts/STIX-Web/fontdata.js",
        "jax/output/SVG/jax.js",
    ]

    def test_copies_subset(self, project, tmp_path):
        dest = tmp_path / "out"
        dest.mkdir()
        copied = copy_filtered(
            project / "node_modules/mathjax", dest, PathFilter.for_root("/node_modules/mathjax")
        )
        assert _files(dest) == self.EXPECTED
        assert len(copied) == len(self.EXPECTED)

    def test_every_visited_path_logged(self, project, tmp_path, caplog):
        dest = tmp_path / "out"
        with caplog.at_level(logging.INFO, logger="tasks.mathjax"):
            copy_filtered(
                project / "node_modules/mathjax", dest, PathFilter.for_root("/node_modules/mathjax")
            )
        logged = caplog.text
        assert "node_modules/mathjax/README.md" in logged
        assert "node_modules/mathjax/jax/output/HTML-CSS" in logged
        assert "node_modules/mathjax/jax/output/SVG/fonts/TeX" in logged

    def test_root_rejected_copies_nothing(self, project, tmp_path):
        dest = tmp_path / "out"
        dest.mkdir()
        assert copy_filtered(project / "node_modules/mathjax", dest, PathFilter.for_root("/elsewhere")) == []
        assert _files(dest) == []


class TestMathJaxTask:
    def test_task_uses_configured_source(self, project, params):
        mathjax(params)
        assert _files(project / "assets/js/mathjax") == TestCopyFiltered.EXPECTED
