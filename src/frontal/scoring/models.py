"""Score data models — immutable results of the scorer and score combination."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Grade(enum.Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class ScoreCategory(enum.Enum):
    """Traffic-light bucket used by the rendering layer."""

    GOOD = "good"
    WARNING = "warning"
    DANGER = "danger"


@dataclass(frozen=True)
class Deduction:
    reason: str
    points: int


@dataclass(frozen=True)
class ComponentScores:
    """The three 100-point sub-scores."""

    size: int = 100
    duplication: int = 100
    performance: int = 100


@dataclass(frozen=True)
class CombinationMetadata:
    """How a combined score was weighted."""

    static_weight: float
    external_weight: float
    static_score: int | None = None
    external_score: int | None = None


@dataclass(frozen=True)
class ScoreReport:
    """Final bounded score with grade, deductions and advice."""

    score: int
    grade: Grade
    category: ScoreCategory
    component_scores: ComponentScores = field(default_factory=ComponentScores)
    deductions: list[Deduction] = field(default_factory=list)
    summary: list[str] = field(default_factory=list)
    combination: CombinationMetadata | None = None
