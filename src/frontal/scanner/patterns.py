"""Regex heuristics shared by the per-language scanners.

Detection is deliberately textual: there is no HTML, CSS or JS parser
behind these patterns, so minified code, comments and string contents can
produce false positives or hide real matches.
"""

from __future__ import annotations

import re

# -- JavaScript -------------------------------------------------------------

JS_FUNCTION = re.compile(r"function\s+\w+\s*\([^)]*\)\s*\{([^}]{20,})\}")
JS_STRING_LITERAL = re.compile(r"[\"'`][^\"'`]{15,}[\"'`]")
JS_LOOP_INLINE_FUNCTION = re.compile(
    r"\b(?:for|while|forEach|map|filter)\s*\([^)]*\)\s*\{[^}]*?\bfunction\s*\("
)
JS_DOM_QUERY = re.compile(
    r"document\.(?:querySelectorAll|querySelector|getElementById|getElementsBy\w+)"
    r"\s*\([^)]+\)"
)
JS_SYNC_XHR = re.compile(
    r"\.open\s*\(\s*[\"'][^\"']+[\"']\s*,\s*[^,()]+?\s*,\s*false\s*\)"
)
JS_REFLOW = re.compile(
    r"\b(?:offsetHeight|offsetWidth|clientHeight|clientWidth|scrollHeight"
    r"|scrollWidth|getComputedStyle|getBoundingClientRect)\b"
)
JS_CONSOLE = re.compile(r"\bconsole\.(?:log|warn|error|debug)\b")
JS_EVENT_LISTENER = re.compile(r"\baddEventListener\s*\(")
JS_SET_INTERVAL = re.compile(r"\bsetInterval\s*\(")
JS_CLEAR_INTERVAL = re.compile(r"\bclearInterval\s*\(")

# (label, signature) pairs; one label per library family.
JS_LIBRARY_SIGNATURES = [
    ("jQuery", re.compile(r"\bjQuery\b|\$\s*\(")),
    ("Lodash/Underscore", re.compile(r"\blodash\b|_underscore\b")),
    ("Moment.js", re.compile(r"\bmoment\b")),
]

# -- CSS --------------------------------------------------------------------

CSS_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
CSS_RULE = re.compile(r"([^{}]+)\{[^{}]*\}")
CSS_DECLARATION = re.compile(r"([a-z-]+)\s*:\s*([^;{}]+);")
CSS_UNIVERSAL = re.compile(r"\*\s*\{")
CSS_VENDOR_PREFIX = re.compile(r"-(?:webkit|moz|ms|o)-[a-z-]+")
CSS_KEYFRAME_STEP = re.compile(r"^(?:from|to|\d+(?:\.\d+)?%)$", re.IGNORECASE)
CSS_COMBINATOR = re.compile(r"^[>+~]$")
CSS_EXPENSIVE_SELECTOR = re.compile(
    r"\*[^{;]*\{|\[[^\]]*\^=[^\]]*\]|:nth-child\([^)]*\)"
)
CSS_IMPORT = re.compile(r"@import\b")
CSS_BLOCK = re.compile(r"\{[^}]+\}")
CSS_KEYFRAMES = re.compile(
    r"@(?:-\w+-)?keyframes[^{]*\{((?:[^{}]*\{[^{}]*\})*[^{}]*)\}"
)
CSS_LAYOUT_PROPERTY = re.compile(r"\b(?:width|height|top|left)\b")

# -- HTML -------------------------------------------------------------------

HTML_ELEMENT = re.compile(r"<(\w+)[^>]*>.*?</\1>")
HTML_TEXT_BETWEEN_TAGS = re.compile(r">.*?<")
HTML_INLINE_STYLE = re.compile(r"style\s*=\s*[\"'][^\"']+[\"']")
HTML_LONG_INLINE_STYLE = re.compile(r"style\s*=\s*[\"'][^\"']{50,}[\"']")
HTML_SCRIPT = re.compile(r"<script\b([^>]*)>([\s\S]*?)</script>", re.IGNORECASE)
HTML_EXTERNAL_SCRIPT = re.compile(r"<script[^>]+src=[^>]*>", re.IGNORECASE)
HTML_STYLE_BLOCK = re.compile(r"<style[^>]*>([\s\S]*?)</style>", re.IGNORECASE)
HTML_TAG_OPEN = re.compile(r"<[a-z][\s\S]*?>", re.IGNORECASE)
HTML_STYLESHEET_LINK = re.compile(
    r"<link[^>]+rel=[\"']stylesheet[\"'][^>]*>", re.IGNORECASE
)
HTML_ASYNC_OR_DEFER = re.compile(r"\b(?:async|defer)\b", re.IGNORECASE)
HTML_SRC_ATTRIBUTE = re.compile(r"\bsrc\s*=", re.IGNORECASE)

WHITESPACE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    return WHITESPACE.sub(" ", text).strip()


def count_matches(pattern: re.Pattern[str], text: str) -> int:
    return sum(1 for _ in pattern.finditer(text))


def snippet(text: str, limit: int = 100) -> str:
    """Shorten evidence text for display."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
