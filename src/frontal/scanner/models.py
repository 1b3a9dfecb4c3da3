"""Scanner data models — source files, findings, and analysis reports."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any


class Language(enum.Enum):
    """Language tag of a source file."""

    HTML = "html"
    CSS = "css"
    JS = "js"
    UNKNOWN = "unknown"

    @classmethod
    def from_filename(cls, name: str) -> Language:
        """Guess the language from a file extension."""
        ext = name.rsplit(".", 1)[-1].lower() if "." in name else ""
        return _EXTENSIONS.get(ext, cls.UNKNOWN)

    @classmethod
    def parse(cls, value: str | None, name: str = "") -> Language:
        """Parse a language tag, falling back to the file name."""
        if value:
            try:
                return cls(value.lower())
            except ValueError:
                return cls.UNKNOWN
        return cls.from_filename(name)


_EXTENSIONS = {
    "html": Language.HTML,
    "htm": Language.HTML,
    "css": Language.CSS,
    "js": Language.JS,
    "mjs": Language.JS,
    "cjs": Language.JS,
}


class Severity(enum.Enum):
    """Finding severity level."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


SEVERITY_ORDER = {
    Severity.ERROR: 0,
    Severity.WARNING: 1,
    Severity.INFO: 2,
}


class Priority(enum.Enum):
    """Recommendation priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class SourceFile:
    """A single in-memory input file."""

    name: str
    language: Language
    content: str

    @property
    def size(self) -> int:
        return len(self.content.encode("utf-8"))


@dataclass(frozen=True)
class Finding:
    """A detected issue or duplicate pattern."""

    severity: Severity
    title: str
    description: str
    category: Language | None = None
    evidence: str | None = None
    source_file: str | None = None
    suggestion: str | None = None


@dataclass(frozen=True)
class Recommendation:
    """An advisory action with a priority and expected impact."""

    priority: Priority
    title: str
    description: str
    impact: str


@dataclass(frozen=True)
class Metric:
    """A labelled display value."""

    label: str
    value: str


@dataclass(frozen=True)
class SizeReport:
    """Bundle size composition."""

    total_bytes: int = 0
    bytes_by_language: dict[str, int] = field(
        default_factory=lambda: {"html": 0, "css": 0, "js": 0}
    )
    percent_by_language: dict[str, float] = field(
        default_factory=lambda: {"html": 0.0, "css": 0.0, "js": 0.0}
    )
    per_file_bytes: dict[str, int] = field(default_factory=dict)
    metrics: list[Metric] = field(default_factory=list)
    issues: list[Finding] = field(default_factory=list)


@dataclass(frozen=True)
class DuplicationReport:
    """Duplicate code patterns found across the input files."""

    findings: list[Finding] = field(default_factory=list)
    duplicate_block_count: int = 0


@dataclass(frozen=True)
class PerformanceReport:
    """Performance anti-patterns plus generic recommendations."""

    issues: list[Finding] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)


def sort_findings(findings: list[Finding]) -> list[Finding]:
    """Order findings error → warning → info, keeping detection order."""
    return sorted(findings, key=lambda f: SEVERITY_ORDER.get(f.severity, 9))


def to_dict(value: Any) -> Any:
    """Convert a report (or any nesting of them) into JSON-ready data."""
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_dict(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, dict):
        return {str(k): to_dict(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_dict(v) for v in value]
    return value
