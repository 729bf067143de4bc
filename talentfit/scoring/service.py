"""Assessment scoring service: goal dispatch, result records and formatting."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime
from typing import Protocol

from talentfit.lookup.protocols import (
    BenchmarkProvider,
    CompetencyResolver,
    IndicatorResolver,
    TeamProfileProvider,
)
from talentfit.scoring.config import ScoringConfig, get_scoring_config
from talentfit.scoring.interpreter import interpret
from talentfit.scoring.job_fit import JobFitScoringStrategy
from talentfit.scoring.models import (
    Answer,
    AssessmentGoal,
    AssessmentResult,
    ResultStatus,
    ScoringResult,
    Session,
)
from talentfit.scoring.team_fit import TeamFitScoringStrategy

logger = logging.getLogger(__name__)


class ScoringStrategy(Protocol):
    """One scoring implementation per assessment goal."""

    def supported_goal(self) -> AssessmentGoal: ...

    def calculate(self, session: Session, answers: Sequence[Answer]) -> ScoringResult: ...


class UnsupportedGoalError(ValueError):
    """Raised when no strategy is registered for a template's goal."""

    def __init__(self, goal: AssessmentGoal) -> None:
        super().__init__(f"No scoring strategy registered for goal {goal.value}")
        self.goal = goal


class ScoringService:
    """Routes sessions to the strategy registered for their template's goal."""

    def __init__(
        self,
        strategies: Iterable[ScoringStrategy],
        config: ScoringConfig | None = None,
    ) -> None:
        self.config = config or get_scoring_config()
        self._strategies: dict[AssessmentGoal, ScoringStrategy] = {}
        for strategy in strategies:
            goal = strategy.supported_goal()
            if goal in self._strategies:
                raise ValueError(f"Duplicate scoring strategy for goal {goal.value}")
            self._strategies[goal] = strategy

    @classmethod
    def from_providers(
        cls,
        competency_resolver: CompetencyResolver | None = None,
        indicator_resolver: IndicatorResolver | None = None,
        benchmark_provider: BenchmarkProvider | None = None,
        team_profile_provider: TeamProfileProvider | None = None,
        config: ScoringConfig | None = None,
    ) -> ScoringService:
        """Build a service with the job-fit and team-fit strategies."""
        config = config or get_scoring_config()
        return cls(
            [
                JobFitScoringStrategy(
                    competency_resolver=competency_resolver,
                    indicator_resolver=indicator_resolver,
                    benchmark_provider=benchmark_provider,
                    config=config,
                ),
                TeamFitScoringStrategy(
                    competency_resolver=competency_resolver,
                    indicator_resolver=indicator_resolver,
                    team_profile_provider=team_profile_provider,
                    config=config,
                ),
            ],
            config=config,
        )

    @property
    def supported_goals(self) -> list[AssessmentGoal]:
        return list(self._strategies)

    def strategy_for(self, goal: AssessmentGoal) -> ScoringStrategy:
        try:
            return self._strategies[goal]
        except KeyError:
            raise UnsupportedGoalError(goal) from None

    def calculate(self, session: Session, answers: Sequence[Answer]) -> ScoringResult:
        """Score a session with the strategy for its template's goal."""
        strategy = self.strategy_for(session.template.goal)
        return strategy.calculate(session, answers)

    def evaluate(
        self,
        session: Session,
        answers: Sequence[Answer],
        result_id: str | None = None,
    ) -> AssessmentResult:
        """Score a session and wrap the outcome in a completed result record."""
        scoring = self.calculate(session, answers)
        skipped = sum(1 for a in answers if a.skipped)
        result = AssessmentResult(
            id=result_id or str(uuid.uuid4()),
            template_id=session.template.id,
            user_id=session.user_id,
            display_name=session.display_name,
            scoring=scoring,
            questions_answered=len(answers) - skipped,
            questions_skipped=skipped,
            status=ResultStatus.COMPLETED,
            completed_at=datetime.now(UTC),
        )
        logger.debug(
            "Result %s for user %s: %d answered, %d skipped",
            result.id,
            result.user_id,
            result.questions_answered,
            result.questions_skipped,
        )
        return result

    def format_result(self, result: AssessmentResult, locale: str = "en") -> str:
        """Format an AssessmentResult for CLI output."""
        scoring = result.scoring
        lines: list[str] = []
        lines.append(f"{result.label} ({scoring.goal.value})")
        lines.append(
            f"Result: {'PASSED' if scoring.passed else 'NOT PASSED'} "
            f"(overall={scoring.overall_percentage:.1f}%, "
            f"answered={result.questions_answered}, skipped={result.questions_skipped})"
        )

        job = scoring.job_fit_metrics
        if job is not None:
            lines.append(
                f"Threshold: {job.effective_threshold * 100:.0f}% "
                f"(strictness={job.strictness_level})"
            )
            lines.append(
                f"Confidence: {job.confidence_level.value} ({job.decision_confidence:.2f}) "
                f"margin={job.margin_factor:.2f} evidence={job.evidence_factor:.2f} "
                f"coverage={job.coverage_factor:.2f}"
            )
            lines.append(job.confidence_message)

        team = scoring.team_fit_metrics
        if team is not None:
            lines.append(
                f"Threshold: {team.pass_threshold * 100:.0f}% "
                f"(team_size={team.team_size}, "
                f"team_context={'yes' if team.team_context_available else 'no'})"
            )
            lines.append(
                f"Balance: diversity={team.diversity_count} "
                f"saturation={team.saturation_count} gaps={team.gap_count} "
                f"multiplier={team.team_fit_multiplier:.3f}"
            )
            if team.personality_compatibility is not None:
                lines.append(
                    f"Personality compatibility: {team.personality_compatibility:.2f}"
                )

        if scoring.competency_scores:
            lines.append("Competencies:")
        for score in scoring.competency_scores:
            label = interpret(score.percentage, locale).label
            line = (
                f"  - {score.competency_name}: {score.percentage:.1f}% [{label}] "
                f"({score.questions_correct}/{score.questions_answered})"
            )
            if score.benchmark_score is not None:
                line += f" benchmark={score.benchmark_score:.0f}%"
            if score.insufficient_evidence and score.evidence_note:
                line += f" ! {score.evidence_note}"
            lines.append(line)
        return "\n".join(lines)
