"""CSS analyzer — selector/declaration duplication and expensive-rule detection."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass

from frontal.scanner.models import (
    DuplicationReport,
    Finding,
    Language,
    Severity,
    SourceFile,
)
from frontal.scanner.patterns import (
    CSS_BLOCK,
    CSS_COMBINATOR,
    CSS_COMMENT,
    CSS_DECLARATION,
    CSS_EXPENSIVE_SELECTOR,
    CSS_IMPORT,
    CSS_KEYFRAME_STEP,
    CSS_KEYFRAMES,
    CSS_LAYOUT_PROPERTY,
    CSS_RULE,
    CSS_UNIVERSAL,
    CSS_VENDOR_PREFIX,
    count_matches,
    normalize_whitespace,
)

logger = logging.getLogger(__name__)

GLOBAL_CONTEXT = "global"
MIN_DECLARATION_REPEATS = 6
MAX_UNIVERSAL_SELECTORS = 1
DEEP_SELECTOR_PARTS = 4
MAX_VENDOR_PREFIXES = 10
MAX_EXPENSIVE_SELECTORS = 5
MAX_RULE_BLOCKS = 1000

_MEDIA = "@media"


@dataclass(frozen=True)
class CssContext:
    """A selector scope: the global sheet or one top-level @media block."""

    name: str
    content: str


def strip_comments(css: str) -> str:
    return CSS_COMMENT.sub(" ", css)


def parse_css_contexts(css: str) -> list[CssContext]:
    """Split a stylesheet into the global scope and top-level @media blocks.

    The global context always comes first, even when empty. Nested
    ``@media`` rules stay inside their parent block; braces are only
    tracked for depth.
    """
    global_parts: list[str] = []
    media: list[CssContext] = []
    depth = 0
    start = 0
    i = 0
    n = len(css)

    while i < n:
        ch = css[i]
        if depth == 0 and css.startswith(_MEDIA, i):
            open_brace = css.find("{", i)
            if open_brace == -1:
                break
            global_parts.append(css[start:i])
            condition = normalize_whitespace(css[i + len(_MEDIA) : open_brace])
            end = _matching_brace(css, open_brace)
            media.append(
                CssContext(
                    name=f"{_MEDIA} {condition}".strip(),
                    content=css[open_brace + 1 : end],
                )
            )
            i = end + 1
            start = i
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth = max(0, depth - 1)
        i += 1

    global_parts.append(css[start:])
    global_content = "\n".join(part for part in global_parts if part.strip())
    return [CssContext(name=GLOBAL_CONTEXT, content=global_content), *media]


def _matching_brace(css: str, open_brace: int) -> int:
    """Index of the brace closing ``open_brace``, or len(css) if unbalanced."""
    depth = 0
    for j in range(open_brace, len(css)):
        if css[j] == "{":
            depth += 1
        elif css[j] == "}":
            depth -= 1
            if depth == 0:
                return j
    return len(css)


def extract_selectors(css: str) -> list[str]:
    """Individual selectors of every innermost rule, whitespace-normalized."""
    selectors: list[str] = []
    for match in CSS_RULE.finditer(css):
        prelude = match.group(1).rsplit(";", 1)[-1].strip()
        if not prelude or prelude.startswith("@"):
            continue
        for part in prelude.split(","):
            selector = normalize_whitespace(part)
            if selector and not CSS_KEYFRAME_STEP.match(selector):
                selectors.append(selector)
    return selectors


def _selector_depth(selector: str) -> int:
    return sum(1 for part in selector.split() if not CSS_COMBINATOR.match(part))


def find_css_duplicates(files: list[SourceFile]) -> DuplicationReport:
    """Scan CSS files for duplicated selectors, declarations and overuse."""
    findings: list[Finding] = []
    blocks = 0
    universal_total = 0
    deep_selectors: list[str] = []
    vendor_prefixes: list[str] = []

    for f in files:
        css = strip_comments(f.content)

        for context in parse_css_contexts(css):
            selectors = extract_selectors(context.content)
            for selector, count in Counter(selectors).items():
                if count < 2:
                    continue
                where = "" if context.name == GLOBAL_CONTEXT else f" in {context.name}"
                findings.append(
                    Finding(
                        severity=Severity.WARNING,
                        title="Duplicate Selector",
                        description=(
                            f'Selector "{selector}" appears {count} times{where}. '
                            "Consolidate into a single rule."
                        ),
                        category=Language.CSS,
                        evidence=selector,
                        source_file=f.name,
                    )
                )
                blocks += 1
            deep_selectors.extend(
                s for s in selectors if _selector_depth(s) >= DEEP_SELECTOR_PARTS
            )

        declarations = Counter(
            f"{m.group(1)}: {normalize_whitespace(m.group(2))}"
            for m in CSS_DECLARATION.finditer(css)
            if not m.group(1).startswith("--")
        )
        for declaration, count in declarations.items():
            if count >= MIN_DECLARATION_REPEATS:
                findings.append(
                    Finding(
                        severity=Severity.INFO,
                        title="Repeated CSS Declaration",
                        description=(
                            f'"{declaration}" appears {count} times. '
                            "Consider creating a utility class."
                        ),
                        category=Language.CSS,
                        evidence=declaration,
                        source_file=f.name,
                    )
                )

        universal_total += count_matches(CSS_UNIVERSAL, css)
        vendor_prefixes.extend(m.group(0) for m in CSS_VENDOR_PREFIX.finditer(css))

    if universal_total > MAX_UNIVERSAL_SELECTORS:
        findings.append(
            Finding(
                severity=Severity.WARNING,
                title="Multiple Universal Selectors",
                description=(
                    f"Found {universal_total} universal selectors (*). "
                    "These can impact performance."
                ),
                category=Language.CSS,
                evidence="* { ... }",
            )
        )

    if deep_selectors:
        findings.append(
            Finding(
                severity=Severity.WARNING,
                title="Deep Selector Nesting",
                description=(
                    f"Found {len(deep_selectors)} deeply nested selector(s). "
                    "Keep selectors flat for better performance."
                ),
                category=Language.CSS,
                evidence=deep_selectors[0],
            )
        )

    if len(vendor_prefixes) > MAX_VENDOR_PREFIXES:
        findings.append(
            Finding(
                severity=Severity.INFO,
                title="Vendor Prefixes Detected",
                description=(
                    f"Found {len(vendor_prefixes)} vendor-prefixed properties. "
                    "Consider using autoprefixer instead."
                ),
                category=Language.CSS,
                evidence=", ".join(vendor_prefixes[:3]) + "...",
            )
        )

    logger.debug("CSS duplication: %d findings over %d files", len(findings), len(files))
    return DuplicationReport(findings=findings, duplicate_block_count=blocks)


def check_css_performance(file: SourceFile) -> list[Finding]:
    """Scan a single stylesheet for selector, import and animation costs."""
    css = strip_comments(file.content)
    findings: list[Finding] = []

    def issue(severity: Severity, title: str, description: str, suggestion: str) -> None:
        findings.append(
            Finding(
                severity=severity,
                title=title,
                description=description,
                category=Language.CSS,
                source_file=file.name,
                suggestion=suggestion,
            )
        )

    expensive = count_matches(CSS_EXPENSIVE_SELECTOR, css)
    if expensive > MAX_EXPENSIVE_SELECTORS:
        issue(
            Severity.WARNING,
            "Expensive CSS Selectors",
            f"Found {expensive} potentially expensive selector(s) "
            "(universal, attribute, nth-child).",
            "Use simpler, class-based selectors for better performance.",
        )

    imports = count_matches(CSS_IMPORT, css)
    if imports:
        issue(
            Severity.ERROR,
            "CSS @import Usage",
            f"Found {imports} @import statement(s). These prevent parallel downloads.",
            "Use <link> tags instead of @import for better performance.",
        )

    rules = count_matches(CSS_BLOCK, css)
    if rules > MAX_RULE_BLOCKS:
        issue(
            Severity.WARNING,
            "Large CSS File",
            f"CSS file contains {rules} rules. Large stylesheets slow down parsing.",
            "Split into smaller files, remove unused CSS, or use critical CSS.",
        )

    layout_animations = sum(
        1
        for m in CSS_KEYFRAMES.finditer(css)
        if CSS_LAYOUT_PROPERTY.search(m.group(1))
    )
    if layout_animations:
        issue(
            Severity.INFO,
            "Layout-Triggering Animations",
            f"Found {layout_animations} animation(s) that may trigger layout.",
            "Use transform and opacity for animations to leverage GPU acceleration.",
        )

    return findings
