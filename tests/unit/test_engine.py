"""Tests for loading sources from disk and running the full analysis."""

from __future__ import annotations

from pathlib import Path

import pytest

from frontal.scanner import engine as engine_module
from frontal.scanner.engine import AnalysisEngine, analyze_files
from frontal.scanner.models import Language, to_dict
from frontal.scoring.models import Grade


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "index.html").write_text(
        '<html><head><meta name="viewport" content="width=device-width"></head></html>'
    )
    (tmp_path / "notes.txt").write_text("not analyzed")
    (tmp_path / "css").mkdir()
    (tmp_path / "css" / "app.css").write_text(".a { color: red; }")
    (tmp_path / "js").mkdir()
    (tmp_path / "js" / "app.mjs").write_text("export const x = 1;")
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "lib.js").write_text("module.exports = {};")
    (tmp_path / "dist").mkdir()
    (tmp_path / "dist" / "bundle.js").write_text("var a;")
    return tmp_path


class TestAnalysisEngine:
    def test_load_directory(self, project):
        files = AnalysisEngine().load([project])
        assert [(f.name, f.language) for f in files] == [
            ("index.html", Language.HTML),
            ("css/app.css", Language.CSS),
            ("dist/bundle.js", Language.JS),
            ("js/app.mjs", Language.JS),
        ]

    def test_exclude_patterns(self, project):
        files = AnalysisEngine(exclude_patterns=["dist", "app.css"]).load([project])
        assert [f.name for f in files] == ["index.html", "js/app.mjs"]

    def test_single_file_path(self, project):
        files = AnalysisEngine().load([project / "css" / "app.css"])
        assert [f.name for f in files] == ["app.css"]

    def test_unknown_extension_skipped(self, project):
        assert AnalysisEngine().load([project / "notes.txt"]) == []

    def test_oversized_file_skipped(self, project, monkeypatch):
        monkeypatch.setattr(engine_module, "_MAX_FILE_SIZE", 20)
        files = AnalysisEngine().load([project])
        assert [f.name for f in files] == ["css/app.css", "dist/bundle.js", "js/app.mjs"]

    def test_analyze(self, project):
        result = AnalysisEngine(exclude_patterns=["dist"]).analyze([project])
        assert result.size.total_bytes > 0
        assert result.score.score == 100
        assert result.score.grade == Grade.A


class TestAnalyzeFiles:
    def test_empty_input(self):
        result = analyze_files([])
        assert result.size.total_bytes == 0
        assert result.duplication.findings == []
        assert result.performance.issues == []
        assert result.score.score == 100

    def test_to_dict_is_json_ready(self, make_file):
        result = analyze_files([make_file("app.js", "console.log(1);\n" * 6)])
        data = to_dict(result)
        assert data["score"]["score"] == 89
        assert data["score"]["grade"] == "B"
        assert data["performance"]["issues"][0]["severity"] == "info"
        assert data["performance"]["issues"][0]["category"] == "js"
        assert data["size"]["bytes_by_language"]["js"] == 96

    def test_single_large_js_file(self, make_file):
        result = analyze_files([make_file("bundle.js", "x" * 300 * 1024)])
        titles = [i.title for i in result.size.issues]
        assert "Large JavaScript Bundle" in titles
        # -10 for >250KB total, -10 for a 100% JS share
        assert result.score.component_scores.size == 80
