"""HTML analyzer — repeated markup and render-blocking resource detection."""

from __future__ import annotations

import logging
from collections import Counter

from frontal.scanner.models import (
    DuplicationReport,
    Finding,
    Language,
    Severity,
    SourceFile,
)
from frontal.scanner.patterns import (
    HTML_ASYNC_OR_DEFER,
    HTML_ELEMENT,
    HTML_EXTERNAL_SCRIPT,
    HTML_INLINE_STYLE,
    HTML_LONG_INLINE_STYLE,
    HTML_SCRIPT,
    HTML_SRC_ATTRIBUTE,
    HTML_STYLESHEET_LINK,
    HTML_TAG_OPEN,
    HTML_TEXT_BETWEEN_TAGS,
    WHITESPACE,
    count_matches,
    snippet,
)

logger = logging.getLogger(__name__)

MIN_SKELETON_LENGTH = 30
MIN_STRUCTURE_REPEATS = 3
MAX_INLINE_STYLES = 10
MAX_LONG_INLINE_STYLES = 5
MAX_DOM_ELEMENTS = 1500
MAX_INLINE_SCRIPT_LENGTH = 1000
MAX_BLOCKING_STYLESHEETS = 3


def skeleton(element: str) -> str:
    """Drop the text between tags, keeping the tag structure."""
    return WHITESPACE.sub(" ", HTML_TEXT_BETWEEN_TAGS.sub("><", element))


def find_html_duplicates(files: list[SourceFile]) -> DuplicationReport:
    """Scan the pooled HTML sources for repeated structures and inline styles."""
    content = "\n".join(f.content for f in files)
    source = files[0].name if len(files) == 1 else None
    findings: list[Finding] = []
    blocks = 0

    skeletons = Counter(
        s
        for s in (skeleton(m.group(0)) for m in HTML_ELEMENT.finditer(content))
        if len(s) >= MIN_SKELETON_LENGTH
    )
    for structure, count in skeletons.items():
        if count < MIN_STRUCTURE_REPEATS:
            continue
        findings.append(
            Finding(
                severity=Severity.INFO,
                title="Repeated HTML Structure",
                description=(
                    f"Similar HTML structure appears {count} times. "
                    "Consider componentizing or using templates."
                ),
                category=Language.HTML,
                evidence=snippet(structure),
                source_file=source,
            )
        )
        blocks += 1

    inline_styles = [m.group(0) for m in HTML_INLINE_STYLE.finditer(content)]
    if len(inline_styles) > MAX_INLINE_STYLES:
        findings.append(
            Finding(
                severity=Severity.WARNING,
                title="Excessive Inline Styles",
                description=(
                    f"Found {len(inline_styles)} inline style attributes. "
                    "Move to CSS for better maintainability."
                ),
                category=Language.HTML,
                evidence=inline_styles[0],
                source_file=source,
            )
        )

    logger.debug("HTML duplication: %d findings over %d files", len(findings), len(files))
    return DuplicationReport(findings=findings, duplicate_block_count=blocks)


def check_html_performance(file: SourceFile) -> list[Finding]:
    """Scan a single HTML document for render-blocking patterns."""
    content = file.content
    findings: list[Finding] = []

    def issue(severity: Severity, title: str, description: str, suggestion: str) -> None:
        findings.append(
            Finding(
                severity=severity,
                title=title,
                description=description,
                category=Language.HTML,
                source_file=file.name,
                suggestion=suggestion,
            )
        )

    inline_scripts = [
        m for m in HTML_SCRIPT.finditer(content) if not HTML_SRC_ATTRIBUTE.search(m.group(1))
    ]
    blocking = [m for m in inline_scripts if not HTML_ASYNC_OR_DEFER.search(m.group(1))]
    if blocking:
        issue(
            Severity.ERROR,
            "Render-Blocking Scripts",
            f"Found {len(blocking)} inline script(s) without async/defer. "
            "These block page rendering.",
            "Add defer or async attributes, or move scripts to bottom of body.",
        )

    sync_external = [
        tag
        for tag in HTML_EXTERNAL_SCRIPT.findall(content)
        if not HTML_ASYNC_OR_DEFER.search(tag)
    ]
    if sync_external:
        issue(
            Severity.WARNING,
            "Synchronous External Scripts",
            f"{len(sync_external)} external script(s) load synchronously, "
            "blocking page rendering.",
            "Add defer attribute for scripts that don't need to run immediately.",
        )

    long_styles = count_matches(HTML_LONG_INLINE_STYLE, content)
    if long_styles > MAX_LONG_INLINE_STYLES:
        issue(
            Severity.WARNING,
            "Excessive Inline Styles",
            f"Found {long_styles} elements with large inline styles.",
            "Move styles to external CSS file for better caching and maintainability.",
        )

    elements = count_matches(HTML_TAG_OPEN, content)
    if elements > MAX_DOM_ELEMENTS:
        issue(
            Severity.WARNING,
            "Large DOM Size",
            f"Document contains approximately {elements} elements. "
            "Large DOMs slow down rendering.",
            "Simplify DOM structure, use virtualization for large lists.",
        )

    # Plain substring check; no awareness of <head> or <meta>.
    if "viewport" not in content:
        issue(
            Severity.INFO,
            "Missing Viewport Meta Tag",
            "No viewport meta tag found.",
            'Add <meta name="viewport" content="width=device-width, initial-scale=1"> '
            "for mobile optimization.",
        )

    long_scripts = [m for m in inline_scripts if len(m.group(0)) > MAX_INLINE_SCRIPT_LENGTH]
    if long_scripts:
        issue(
            Severity.WARNING,
            "Long Inline Scripts",
            f"Found {len(long_scripts)} inline script(s) larger than 1KB.",
            "Move large scripts to external files for better caching.",
        )

    blocking_css = [
        tag for tag in HTML_STYLESHEET_LINK.findall(content) if "media=" not in tag
    ]
    if len(blocking_css) > MAX_BLOCKING_STYLESHEETS:
        issue(
            Severity.WARNING,
            "Multiple Render-Blocking CSS Files",
            f"{len(blocking_css)} CSS files block initial render.",
            "Consider inlining critical CSS and lazy-loading non-critical styles.",
        )

    return findings
