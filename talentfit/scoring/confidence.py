"""Decision confidence for job-fit pass/fail outcomes."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from talentfit.scoring.config import ScoringConfig, get_scoring_config
from talentfit.scoring.models import BenchmarkProfile, CompetencyScore, ConfidenceLevel

_MESSAGES: dict[tuple[bool, ConfidenceLevel], str] = {
    (True, ConfidenceLevel.HIGH): (
        "Candidate meets the role requirements with high confidence."
    ),
    (True, ConfidenceLevel.MEDIUM): (
        "Candidate meets the role requirements with moderate confidence."
    ),
    (True, ConfidenceLevel.LOW): (
        "Candidate narrowly meets the role requirements with low confidence; "
        "further assessment is recommended."
    ),
    (False, ConfidenceLevel.HIGH): (
        "Candidate does not meet the role requirements with high confidence."
    ),
    (False, ConfidenceLevel.MEDIUM): (
        "Candidate does not meet the role requirements with moderate confidence."
    ),
    (False, ConfidenceLevel.LOW): (
        "Candidate falls just short of the role requirements with low confidence; "
        "further assessment is recommended."
    ),
}


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass
class ConfidenceAssessment:
    """Blended confidence with its level and fixed-template message."""

    confidence: float
    level: ConfidenceLevel
    message: str

    def __post_init__(self) -> None:
        if not (0.0 <= self.confidence <= 1.0):
            raise ValueError(
                f"confidence must be between 0.0 and 1.0 (got {self.confidence})"
            )


class ConfidenceEstimator:
    """Blends score margin, evidence sufficiency and benchmark coverage."""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self.config = config or get_scoring_config()

    def margin_factor(self, percentage: float, threshold: float) -> float:
        """Distance from the threshold, saturating at the configured margin scale."""
        margin = abs(percentage / 100.0 - threshold)
        return min(margin / self.config.confidence_margin_scale, 1.0)

    def evidence_factor(self, scores: Sequence[CompetencyScore]) -> float:
        """Share of competencies with enough answered questions."""
        if not scores:
            return 0.0
        minimum = self.config.min_questions_per_competency
        sufficient = sum(1 for s in scores if s.questions_answered >= minimum)
        return sufficient / len(scores)

    def coverage_factor(
        self, scores: Sequence[CompetencyScore], benchmark: BenchmarkProfile | None
    ) -> float:
        """Share of benchmark competencies that were assessed (1.0 without one)."""
        if benchmark is None or not benchmark.benchmarks:
            return 1.0
        wanted = {name.strip().lower() for name in benchmark.benchmarks}
        assessed = {s.competency_name.strip().lower() for s in scores}
        return len(wanted & assessed) / len(wanted)

    def estimate(
        self,
        margin_factor: float,
        evidence_factor: float,
        coverage_factor: float,
        passed: bool,
    ) -> ConfidenceAssessment:
        confidence = _clamp01(
            self.config.confidence_weight_margin * _clamp01(margin_factor)
            + self.config.confidence_weight_evidence * _clamp01(evidence_factor)
            + self.config.confidence_weight_coverage * _clamp01(coverage_factor)
        )
        level = self.level_for(confidence)
        return ConfidenceAssessment(
            confidence=confidence,
            level=level,
            message=_MESSAGES[(passed, level)],
        )

    def level_for(self, confidence: float) -> ConfidenceLevel:
        if confidence >= self.config.confidence_high_threshold:
            return ConfidenceLevel.HIGH
        if confidence >= self.config.confidence_medium_threshold:
            return ConfidenceLevel.MEDIUM
        return ConfidenceLevel.LOW
