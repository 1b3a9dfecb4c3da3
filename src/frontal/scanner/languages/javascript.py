"""JavaScript analyzer — regex-based duplication and anti-pattern detection."""

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
    JS_CLEAR_INTERVAL,
    JS_CONSOLE,
    JS_DOM_QUERY,
    JS_EVENT_LISTENER,
    JS_FUNCTION,
    JS_LIBRARY_SIGNATURES,
    JS_LOOP_INLINE_FUNCTION,
    JS_REFLOW,
    JS_SET_INTERVAL,
    JS_STRING_LITERAL,
    JS_SYNC_XHR,
    count_matches,
    normalize_whitespace,
    snippet,
)

logger = logging.getLogger(__name__)

MIN_STRING_REPEATS = 3
MIN_DOM_QUERY_REPEATS = 4
MAX_REFLOW_READS = 20
MAX_CONSOLE_STATEMENTS = 5
MAX_EVENT_LISTENERS = 20


def find_js_duplicates(files: list[SourceFile]) -> DuplicationReport:
    """Scan the pooled JS sources for repeated code patterns."""
    content = "\n".join(f.content for f in files)
    source = files[0].name if len(files) == 1 else None
    findings: list[Finding] = []
    blocks = 0

    bodies: Counter[str] = Counter()
    first_seen: dict[str, str] = {}
    for match in JS_FUNCTION.finditer(content):
        body = normalize_whitespace(match.group(1))
        bodies[body] += 1
        first_seen.setdefault(body, normalize_whitespace(match.group(0)))

    for body, count in bodies.items():
        if count < 2:
            continue
        findings.append(
            Finding(
                severity=Severity.WARNING,
                title="Duplicate Function Body",
                description=(
                    f"Found {count} identical or very similar function bodies. "
                    "Consider extracting to a shared utility."
                ),
                category=Language.JS,
                evidence=snippet(first_seen[body]),
                source_file=source,
            )
        )
        blocks += 1

    strings = Counter(m.group(0) for m in JS_STRING_LITERAL.finditer(content))
    for literal, count in strings.items():
        if count >= MIN_STRING_REPEATS:
            findings.append(
                Finding(
                    severity=Severity.INFO,
                    title="Repeated String Literal",
                    description=(
                        f"String literal appears {count} times. "
                        "Consider using a constant."
                    ),
                    category=Language.JS,
                    evidence=literal,
                    source_file=source,
                )
            )

    loop_functions = [m.group(0) for m in JS_LOOP_INLINE_FUNCTION.finditer(content)]
    if loop_functions:
        findings.append(
            Finding(
                severity=Severity.WARNING,
                title="Anonymous Functions in Loops",
                description=(
                    f"Found {len(loop_functions)} inline function(s) created inside "
                    "loops. Define functions outside loops to avoid recreation on "
                    "each iteration."
                ),
                category=Language.JS,
                evidence=snippet(loop_functions[0]),
                source_file=source,
            )
        )

    queries = Counter(m.group(0) for m in JS_DOM_QUERY.finditer(content))
    for query, count in queries.items():
        if count >= MIN_DOM_QUERY_REPEATS:
            findings.append(
                Finding(
                    severity=Severity.WARNING,
                    title="Repeated DOM Query",
                    description=(
                        f"Same DOM query executed {count} times. "
                        "Cache the result in a variable."
                    ),
                    category=Language.JS,
                    evidence=query,
                    source_file=source,
                )
            )

    logger.debug("JS duplication: %d findings over %d files", len(findings), len(files))
    return DuplicationReport(findings=findings, duplicate_block_count=blocks)


def check_js_performance(file: SourceFile) -> list[Finding]:
    """Scan a single JS file for main-thread and memory anti-patterns."""
    content = file.content
    findings: list[Finding] = []

    def issue(severity: Severity, title: str, description: str, suggestion: str) -> None:
        findings.append(
            Finding(
                severity=severity,
                title=title,
                description=description,
                category=Language.JS,
                source_file=file.name,
                suggestion=suggestion,
            )
        )

    sync_xhr = count_matches(JS_SYNC_XHR, content)
    if sync_xhr:
        issue(
            Severity.ERROR,
            "Synchronous XMLHttpRequest",
            f"Found {sync_xhr} synchronous XHR call(s). These block the main thread.",
            "Use async XHR or fetch API instead.",
        )

    reflows = count_matches(JS_REFLOW, content)
    if reflows > MAX_REFLOW_READS:
        issue(
            Severity.WARNING,
            "Potential Forced Reflows",
            f"Found {reflows} property access(es) that may trigger reflow.",
            "Batch DOM reads, cache layout properties, avoid layout thrashing.",
        )

    console_calls = count_matches(JS_CONSOLE, content)
    if console_calls > MAX_CONSOLE_STATEMENTS:
        issue(
            Severity.INFO,
            "Console Statements",
            f"Found {console_calls} console statement(s).",
            "Remove console statements from production code.",
        )

    libraries = [
        label for label, signature in JS_LIBRARY_SIGNATURES if signature.search(content)
    ]
    if libraries:
        issue(
            Severity.INFO,
            "Large Utility Libraries Detected",
            f"Detected: {', '.join(libraries)}. These can be large.",
            "Consider smaller alternatives or use native APIs when possible.",
        )

    listeners = count_matches(JS_EVENT_LISTENER, content)
    if listeners > MAX_EVENT_LISTENERS:
        issue(
            Severity.INFO,
            "Many Event Listeners",
            f"Found {listeners} addEventListener calls.",
            "Consider using event delegation to reduce memory usage.",
        )

    intervals = count_matches(JS_SET_INTERVAL, content)
    clears = count_matches(JS_CLEAR_INTERVAL, content)
    if intervals > clears:
        issue(
            Severity.WARNING,
            "Potential Memory Leak",
            f"{intervals} setInterval calls but only {clears} clearInterval. "
            "May cause memory leaks.",
            "Ensure all intervals are cleared when no longer needed.",
        )

    return findings
