"""Proficiency labels for competency percentages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ProficiencyLevel(str, Enum):
    """Five-level proficiency scale."""

    EXPERT = "EXPERT"
    ADVANCED = "ADVANCED"
    PROFICIENT = "PROFICIENT"
    DEVELOPING = "DEVELOPING"
    BEGINNING = "BEGINNING"


# Lower bound (inclusive) per level, highest first
_THRESHOLDS: tuple[tuple[float, ProficiencyLevel], ...] = (
    (85.0, ProficiencyLevel.EXPERT),
    (70.0, ProficiencyLevel.ADVANCED),
    (50.0, ProficiencyLevel.PROFICIENT),
    (30.0, ProficiencyLevel.DEVELOPING),
)

_LABELS: dict[str, dict[ProficiencyLevel, str]] = {
    "en": {
        ProficiencyLevel.EXPERT: "Expert",
        ProficiencyLevel.ADVANCED: "Advanced",
        ProficiencyLevel.PROFICIENT: "Proficient",
        ProficiencyLevel.DEVELOPING: "Developing",
        ProficiencyLevel.BEGINNING: "Beginning",
    },
    "ru": {
        ProficiencyLevel.EXPERT: "Эксперт",
        ProficiencyLevel.ADVANCED: "Опытный",
        ProficiencyLevel.PROFICIENT: "Компетентный",
        ProficiencyLevel.DEVELOPING: "Развивающийся",
        ProficiencyLevel.BEGINNING: "Начальный",
    },
}

DEFAULT_LOCALE = "en"


@dataclass(frozen=True)
class ScoreInterpretation:
    """A percentage's proficiency level and localized label."""

    level: ProficiencyLevel
    label: str


def interpret(percentage: float, locale: str = DEFAULT_LOCALE) -> ScoreInterpretation:
    """Map a 0-100 percentage to a proficiency level.

    Unknown locales fall back to English.
    """
    level = ProficiencyLevel.BEGINNING
    for lower_bound, candidate in _THRESHOLDS:
        if percentage >= lower_bound:
            level = candidate
            break
    labels = _LABELS.get((locale or DEFAULT_LOCALE).lower(), _LABELS[DEFAULT_LOCALE])
    return ScoreInterpretation(level=level, label=labels[level])
