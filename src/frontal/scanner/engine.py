"""Analysis engine — groups source files by language and runs every analyzer."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from frontal.scanner.languages.css import check_css_performance, find_css_duplicates
from frontal.scanner.languages.html import (
    check_html_performance,
    find_html_duplicates,
)
from frontal.scanner.languages.javascript import (
    check_js_performance,
    find_js_duplicates,
)
from frontal.scanner.models import (
    DuplicationReport,
    Finding,
    Language,
    PerformanceReport,
    Priority,
    Recommendation,
    SizeReport,
    SourceFile,
    sort_findings,
)
from frontal.scanner.size import analyze_sizes
from frontal.scoring.models import ScoreReport
from frontal.scoring.scorer import calculate_score

logger = logging.getLogger(__name__)

_DUPLICATE_SCANNERS: list[tuple[Language, Callable[[list[SourceFile]], DuplicationReport]]] = [
    (Language.JS, find_js_duplicates),
    (Language.CSS, find_css_duplicates),
    (Language.HTML, find_html_duplicates),
]

_PERFORMANCE_CHECKS: list[tuple[Language, Callable[[SourceFile], list[Finding]]]] = [
    (Language.HTML, check_html_performance),
    (Language.CSS, check_css_performance),
    (Language.JS, check_js_performance),
]

JS_SHARE_FOR_RECOMMENDATION = 0.5
CSS_SHARE_FOR_RECOMMENDATION = 0.3

# Directories to always skip
_SKIP_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "bower_components",
    "__pycache__",
    ".venv",
    "venv",
    ".cache",
    ".parcel-cache",
    ".next",
    "coverage",
}

# Max file size to load (10 MB)
_MAX_FILE_SIZE = 10 * 1_048_576


@dataclass(frozen=True)
class AnalysisResult:
    """Output of one static analysis run."""

    size: SizeReport
    duplication: DuplicationReport
    performance: PerformanceReport
    score: ScoreReport


def _by_language(files: Iterable[SourceFile], language: Language) -> list[SourceFile]:
    return [f for f in files if f.language == language]


def detect_duplication(files: list[SourceFile]) -> DuplicationReport:
    """Run each language's duplicate scanner over the files of that language."""
    findings: list[Finding] = []
    blocks = 0
    for language, scanner in _DUPLICATE_SCANNERS:
        group = _by_language(files, language)
        if not group:
            continue
        report = scanner(group)
        findings.extend(report.findings)
        blocks += report.duplicate_block_count
    return DuplicationReport(findings=sort_findings(findings), duplicate_block_count=blocks)


def analyze_performance(files: list[SourceFile]) -> PerformanceReport:
    """Check every file for anti-patterns, then add bundle-level advice."""
    issues: list[Finding] = []
    for language, check in _PERFORMANCE_CHECKS:
        for f in _by_language(files, language):
            issues.extend(check(f))
    return PerformanceReport(
        issues=sort_findings(issues),
        recommendations=generate_recommendations(files),
    )


def generate_recommendations(files: list[SourceFile]) -> list[Recommendation]:
    """PageSpeed-style advice driven by bundle composition."""
    sized = [f for f in files if f.language != Language.UNKNOWN]
    total = sum(f.size for f in sized)
    js_size = sum(f.size for f in _by_language(sized, Language.JS))
    css_size = sum(f.size for f in _by_language(sized, Language.CSS))

    recommendations: list[Recommendation] = []
    if js_size > total * JS_SHARE_FOR_RECOMMENDATION:
        recommendations.append(
            Recommendation(
                priority=Priority.HIGH,
                title="Reduce JavaScript Execution Time",
                description=(
                    "JavaScript makes up over 50% of your bundle. Consider code "
                    "splitting, tree shaking, and lazy loading non-critical scripts."
                ),
                impact="High - Can significantly improve Time to Interactive (TTI)",
            )
        )
    if css_size > total * CSS_SHARE_FOR_RECOMMENDATION:
        recommendations.append(
            Recommendation(
                priority=Priority.MEDIUM,
                title="Optimize CSS Delivery",
                description=(
                    "Extract and inline critical CSS, defer non-critical styles, "
                    "and remove unused CSS rules."
                ),
                impact="Medium - Improves First Contentful Paint (FCP)",
            )
        )

    recommendations.append(
        Recommendation(
            priority=Priority.HIGH,
            title="Enable Text Compression",
            description=(
                "Ensure your server compresses text-based resources "
                "(HTML, CSS, JS) with gzip or Brotli."
            ),
            impact="High - Can reduce transfer size by 70-80%",
        )
    )
    recommendations.append(
        Recommendation(
            priority=Priority.MEDIUM,
            title="Implement Resource Hints",
            description=(
                'Use <link rel="preload"> for critical resources and '
                '<link rel="prefetch"> for future navigation.'
            ),
            impact="Medium - Reduces perceived load time",
        )
    )
    if any("cache-control" not in f.content.lower() for f in _by_language(files, Language.HTML)):
        recommendations.append(
            Recommendation(
                priority=Priority.MEDIUM,
                title="Leverage Browser Caching",
                description=(
                    "Set appropriate cache headers for static resources "
                    "to avoid redundant downloads."
                ),
                impact="Medium - Improves repeat visit performance",
            )
        )
    recommendations.append(
        Recommendation(
            priority=Priority.HIGH,
            title="Minimize Main-Thread Work",
            description=(
                "Break up long tasks, use Web Workers for heavy computations, "
                "and defer non-critical JavaScript."
            ),
            impact="High - Improves responsiveness and TTI",
        )
    )
    recommendations.append(
        Recommendation(
            priority=Priority.LOW,
            title="Optimize Images",
            description=(
                "Use modern formats (WebP, AVIF), implement lazy loading, "
                "and serve responsive images."
            ),
            impact="Variable - Depends on image usage",
        )
    )
    return recommendations


def analyze_files(files: list[SourceFile]) -> AnalysisResult:
    """Run the size, duplication and performance analyzers and score them."""
    size = analyze_sizes(files)
    duplication = detect_duplication(files)
    performance = analyze_performance(files)
    score = calculate_score(size, duplication, performance)
    logger.info(
        "Analyzed %d files: score %d (%s)", len(files), score.score, score.grade.value
    )
    return AnalysisResult(
        size=size,
        duplication=duplication,
        performance=performance,
        score=score,
    )


class AnalysisEngine:
    """Loads frontend sources from disk and analyzes them."""

    def __init__(self, exclude_patterns: list[str] | None = None) -> None:
        self._exclude = set(exclude_patterns or [])

    def analyze(self, paths: Iterable[str | Path]) -> AnalysisResult:
        return analyze_files(self.load(paths))

    def load(self, paths: Iterable[str | Path]) -> list[SourceFile]:
        """Read every analyzable file under the given files/directories."""
        files: list[SourceFile] = []
        for path in paths:
            path = Path(path)
            candidates = self._walk(path) if path.is_dir() else [path]
            for file_path in candidates:
                source = self._read(file_path, base=path if path.is_dir() else None)
                if source is not None:
                    files.append(source)
        return files

    def _walk(self, directory: Path):
        """Walk directory yielding candidate files in a stable order."""
        for root, dirs, names in os.walk(directory):
            # Prune skipped directories in-place
            dirs[:] = sorted(
                d for d in dirs if d not in _SKIP_DIRS and d not in self._exclude
            )
            for name in sorted(names):
                if name in self._exclude:
                    continue
                yield Path(root) / name

    def _read(self, file_path: Path, base: Path | None) -> SourceFile | None:
        language = Language.from_filename(file_path.name)
        if language == Language.UNKNOWN:
            return None
        try:
            if file_path.stat().st_size > _MAX_FILE_SIZE:
                logger.debug("Skipping %s: larger than %d bytes", file_path, _MAX_FILE_SIZE)
                return None
            content = file_path.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            logger.debug("Skipping %s: %s", file_path, e)
            return None
        name = file_path.relative_to(base).as_posix() if base else file_path.name
        return SourceFile(name=name, language=language, content=content)
