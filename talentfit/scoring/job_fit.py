"""Job-fit scoring strategy."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from talentfit.lookup.protocols import (
    BenchmarkProvider,
    CompetencyResolver,
    IndicatorResolver,
)
from talentfit.lookup.resolvers import ResolutionContext
from talentfit.scoring.aggregation import CompetencyAggregator
from talentfit.scoring.blueprints import resolve_onet_soc_code, resolve_strictness_level
from talentfit.scoring.confidence import ConfidenceEstimator
from talentfit.scoring.config import ScoringConfig, get_scoring_config
from talentfit.scoring.models import (
    Answer,
    AssessmentGoal,
    BenchmarkProfile,
    CompetencyScore,
    JobFitMetrics,
    ScoringResult,
    Session,
)
from talentfit.scoring.normalizer import meets_threshold

logger = logging.getLogger(__name__)

# Benchmarks use a 1-5 importance scale
BENCHMARK_SCALE_TO_PERCENT = 20.0


class JobFitScoringStrategy:
    """Scores a session against a role's requirements.

    Competencies carrying an O*NET code are weighted up. The pass
    threshold rises linearly with the blueprint's strictness, and the
    decision carries a confidence estimate built from score margin,
    evidence sufficiency and benchmark coverage.
    """

    def __init__(
        self,
        competency_resolver: CompetencyResolver | None = None,
        indicator_resolver: IndicatorResolver | None = None,
        benchmark_provider: BenchmarkProvider | None = None,
        config: ScoringConfig | None = None,
        aggregator: CompetencyAggregator | None = None,
    ) -> None:
        self.config = config or get_scoring_config()
        self.competency_resolver = competency_resolver
        self.indicator_resolver = indicator_resolver
        self.benchmark_provider = benchmark_provider
        self.aggregator = aggregator or CompetencyAggregator()
        self.estimator = ConfidenceEstimator(config=self.config)

    def supported_goal(self) -> AssessmentGoal:
        return AssessmentGoal.JOB_FIT

    def effective_threshold(self, strictness_level: int) -> float:
        """Pass threshold (0-1) for a strictness level (0-100)."""
        return (
            self.config.job_fit_base_threshold
            + (strictness_level / 100.0) * self.config.job_fit_strictness_max_adjustment
        )

    def weight_for(self, score: CompetencyScore) -> float:
        if score.onet_code and score.onet_code.strip():
            return self.config.onet_boost
        return 1.0

    def calculate(self, session: Session, answers: Sequence[Answer]) -> ScoringResult:
        blueprint = session.template.blueprint
        strictness = resolve_strictness_level(
            blueprint, self.config.default_strictness_level
        )
        soc_code = resolve_onet_soc_code(blueprint)
        threshold = self.effective_threshold(strictness)

        context = ResolutionContext.build(
            answers, self.indicator_resolver, self.competency_resolver
        )
        scores = self.aggregator.aggregate(answers, context)

        benchmark = self._load_benchmark(soc_code)
        if benchmark is not None:
            self._apply_benchmarks(scores, benchmark)
        self._flag_evidence(scores)

        percentage = self._weighted_percentage(scores)
        overall_score = sum(s.score for s in scores) / len(scores) if scores else 0.0
        passed = bool(scores) and meets_threshold(percentage, threshold)

        margin = self.estimator.margin_factor(percentage, threshold)
        evidence = self.estimator.evidence_factor(scores)
        coverage = self.estimator.coverage_factor(scores, benchmark)
        assessment = self.estimator.estimate(margin, evidence, coverage, passed)

        logger.info(
            "Job fit for session %s: %.1f%% vs threshold %.0f%% (strictness %d) -> %s, "
            "confidence %s (%.2f)",
            session.id,
            percentage,
            threshold * 100,
            strictness,
            "PASS" if passed else "FAIL",
            assessment.level.value,
            assessment.confidence,
        )

        return ScoringResult(
            goal=AssessmentGoal.JOB_FIT,
            overall_score=overall_score,
            overall_percentage=percentage,
            passed=passed,
            competency_scores=scores,
            job_fit_metrics=JobFitMetrics(
                effective_threshold=threshold,
                strictness_level=strictness,
                onet_soc_code=soc_code,
                decision_confidence=assessment.confidence,
                confidence_level=assessment.level,
                confidence_message=assessment.message,
                margin_factor=margin,
                evidence_factor=evidence,
                coverage_factor=coverage,
            ),
        )

    def _weighted_percentage(self, scores: Sequence[CompetencyScore]) -> float:
        total_weight = 0.0
        weighted_sum = 0.0
        for score in scores:
            weight = self.weight_for(score)
            weighted_sum += weight * score.average
            total_weight += weight
        if total_weight <= 0:
            return 0.0
        return max(0.0, min(100.0, 100.0 * weighted_sum / total_weight))

    def _load_benchmark(self, soc_code: str | None) -> BenchmarkProfile | None:
        if soc_code is None or self.benchmark_provider is None:
            return None
        benchmark = self.benchmark_provider.get_benchmark_profile(soc_code)
        if benchmark is None:
            logger.info("No benchmark available for %s; coverage factor is 1.0", soc_code)
        return benchmark

    def _apply_benchmarks(
        self, scores: Sequence[CompetencyScore], benchmark: BenchmarkProfile
    ) -> None:
        by_name = {
            name.strip().lower(): importance
            for name, importance in benchmark.benchmarks.items()
        }
        for score in scores:
            importance = by_name.get(score.competency_name.strip().lower())
            if importance is not None:
                score.benchmark_score = importance * BENCHMARK_SCALE_TO_PERCENT

    def _flag_evidence(self, scores: Sequence[CompetencyScore]) -> None:
        minimum = self.config.min_questions_per_competency
        for score in scores:
            if score.questions_answered < minimum:
                score.insufficient_evidence = True
                score.evidence_note = (
                    f"Only {score.questions_answered} of {minimum} "
                    "minimum questions answered"
                )
                logger.warning(
                    "Insufficient evidence for %s: %d of %d questions",
                    score.competency_name,
                    score.questions_answered,
                    minimum,
                )
