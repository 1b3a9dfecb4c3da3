"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from frontal.config import FrontalConfig
from frontal.scanner.models import Language, SourceFile


def _make_file(name: str, content: str, language: Language | None = None) -> SourceFile:
    return SourceFile(
        name=name,
        language=language or Language.from_filename(name),
        content=content,
    )


@pytest.fixture
def make_file():
    """Factory for in-memory source files, language inferred from the name."""
    return _make_file


@pytest.fixture
def config(tmp_path: Path) -> FrontalConfig:
    return FrontalConfig(
        config_dir=tmp_path,
        audit_url="http://audit.test/audit",
        audit_timeout=5.0,
        fetch_timeout=5.0,
    )


@pytest.fixture
def clean_html() -> SourceFile:
    return _make_file(
        "index.html",
        "<!doctype html><html><head>"
        '<meta name="viewport" content="width=device-width, initial-scale=1">'
        '<meta http-equiv="Cache-Control" content="max-age=3600">'
        '<script src="app.js" defer></script>'
        "</head><body><h1>Hello</h1></body></html>",
    )


@pytest.fixture
def lighthouse_report() -> dict:
    """A trimmed Lighthouse result with every shape the adapter reads."""
    return {
        "categories": {
            "performance": {"title": "Performance", "score": 0.72},
            "accessibility": {"title": "Accessibility", "score": 0.95},
            "best-practices": {"title": "Best Practices", "score": 0.5},
            "seo": {"title": "SEO", "score": None},
        },
        "audits": {
            "first-contentful-paint": {
                "id": "first-contentful-paint",
                "title": "First Contentful Paint",
                "score": 0.8,
                "scoreDisplayMode": "numeric",
                "numericValue": 1500,
                "displayValue": "1.5 s",
            },
            "largest-contentful-paint": {
                "id": "largest-contentful-paint",
                "title": "Largest Contentful Paint",
                "score": 0.3,
                "scoreDisplayMode": "numeric",
                "numericValue": 4500,
                "displayValue": "4.5 s",
            },
            "total-blocking-time": {
                "id": "total-blocking-time",
                "title": "Total Blocking Time",
                "score": 0.6,
                "scoreDisplayMode": "numeric",
                "numericValue": 350,
            },
            "cumulative-layout-shift": {
                "id": "cumulative-layout-shift",
                "title": "Cumulative Layout Shift",
                "score": 1,
                "scoreDisplayMode": "numeric",
                "numericValue": 0.02,
                "displayValue": "0.02",
            },
            "render-blocking-resources": {
                "id": "render-blocking-resources",
                "title": "Eliminate render-blocking resources",
                "description": "Resources are blocking the first paint. "
                "[Learn more](https://web.dev/render-blocking/).",
                "score": 0.2,
                "scoreDisplayMode": "numeric",
                "displayValue": "Potential savings of 1,480 ms",
                "details": {
                    "type": "opportunity",
                    "overallSavingsMs": 1480,
                    "overallSavingsBytes": 20480,
                },
            },
            "unused-css-rules": {
                "id": "unused-css-rules",
                "title": "Reduce unused CSS",
                "description": "Remove **dead** rules from `stylesheets`.",
                "score": 0.7,
                "scoreDisplayMode": "numeric",
                "details": {
                    "type": "opportunity",
                    "overallSavingsMs": 450,
                    "overallSavingsBytes": 512,
                },
            },
            "uses-text-compression": {
                "id": "uses-text-compression",
                "title": "Enable text compression",
                "score": 1,
                "scoreDisplayMode": "numeric",
                "details": {"type": "opportunity", "overallSavingsMs": 0},
            },
            "is-on-https": {
                "id": "is-on-https",
                "title": "Uses HTTPS",
                "score": 0,
                "scoreDisplayMode": "binary",
            },
            "final-screenshot": {
                "id": "final-screenshot",
                "title": "Final Screenshot",
                "score": None,
                "scoreDisplayMode": "informative",
            },
            "diagnostics": {
                "id": "diagnostics",
                "title": "Diagnostics",
                "score": 0,
                "scoreDisplayMode": "informative",
            },
        },
    }
