"""Side-by-side comparison of team-fit candidates."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from itertools import combinations

from talentfit.comparison.models import (
    CandidateComparison,
    CandidateSummary,
    ComparisonInputError,
    CompetencyComparison,
    ComplementarityPair,
    GapCoverage,
)
from talentfit.lookup.protocols import (
    ResultRepository,
    TeamProfileProvider,
    TemplateRepository,
)
from talentfit.scoring.blueprints import resolve_target_role, resolve_team_id
from talentfit.scoring.config import ScoringConfig, get_scoring_config
from talentfit.scoring.models import (
    UNKNOWN_COMPETENCY_ID,
    AssessmentGoal,
    AssessmentResult,
)
from talentfit.team.models import TeamProfile

logger = logging.getLogger(__name__)


def _rank(
    candidates: Sequence[CandidateSummary],
    key: Callable[[CandidateSummary], float | None],
) -> dict[str, int]:
    """Rank 1..n by ``key`` descending; None sorts last and ties keep input order."""
    ordered = sorted(
        candidates,
        key=lambda c: (key(c) is None, -(key(c) or 0.0)),
    )
    return {candidate.result_id: position for position, candidate in enumerate(ordered, 1)}


class CandidateComparator:
    """Validates, ranks and cross-compares 2-5 team-fit results."""

    def __init__(
        self,
        result_repository: ResultRepository,
        template_repository: TemplateRepository,
        team_profile_provider: TeamProfileProvider | None = None,
        config: ScoringConfig | None = None,
    ) -> None:
        self.config = config or get_scoring_config()
        self.result_repository = result_repository
        self.template_repository = template_repository
        self.team_profile_provider = team_profile_provider

    def compare_results(
        self, result_ids: Sequence[str], template_id: str
    ) -> CandidateComparison:
        """Compare results taken on the same team-fit template.

        Raises:
            ComparisonInputError: If the id count is outside the allowed
                range, ids repeat, a result is missing, a result belongs to
                another template, or the template is not a team-fit template.
        """
        results = self._load_results(result_ids, template_id)
        template = self.template_repository.get_template(template_id)
        if template is None:
            raise ComparisonInputError("template_not_found", f"Template not found: {template_id}")
        if template.goal != AssessmentGoal.TEAM_FIT:
            raise ComparisonInputError(
                "template_goal",
                "Comparison is only supported for TEAM_FIT templates, "
                f"got: {template.goal.value}",
            )

        team_id = resolve_team_id(template.blueprint)
        target_role = resolve_target_role(template.blueprint)
        profile = self._load_team_profile(team_id)
        team_saturation = dict(profile.saturation) if profile is not None else {}

        candidates = [self._summary(result) for result in results]
        competencies = self._compare_competencies(results, team_saturation)
        gaps = self._gap_coverage(competencies)
        for candidate in candidates:
            candidate.gaps_covered = [
                gap.competency_id
                for gap in gaps
                if candidate.result_id in gap.candidate_coverage
            ]
        self._assign_ranks(candidates)
        pairs = self._complementarity(candidates, len(gaps))

        logger.info(
            "Comparison complete: %d candidates, %d competencies, %d gaps, %d pairs",
            len(candidates),
            len(competencies),
            len(gaps),
            len(pairs),
        )
        return CandidateComparison(
            template_id=template.id,
            template_name=template.name,
            team_id=team_id,
            target_role=target_role,
            team_size=profile.team_size if profile is not None else 0,
            team_context_available=bool(team_saturation),
            candidates=candidates,
            competency_comparison=competencies,
            gap_coverage=gaps,
            complementarity=pairs,
            team_saturation=team_saturation,
        )

    def _load_results(
        self, result_ids: Sequence[str], template_id: str
    ) -> list[AssessmentResult]:
        count = len(result_ids)
        if count < self.config.min_candidates:
            raise ComparisonInputError(
                "candidate_count",
                f"At least {self.config.min_candidates} results are required for comparison",
            )
        if count > self.config.max_candidates:
            raise ComparisonInputError(
                "candidate_count",
                f"At most {self.config.max_candidates} results can be compared at once",
            )
        if len(set(result_ids)) != count:
            raise ComparisonInputError("duplicate_ids", "Result ids must be distinct")

        found = self.result_repository.find_results(result_ids)
        missing = [rid for rid in result_ids if rid not in found]
        if missing:
            raise ComparisonInputError("results_not_found", f"Results not found: {missing}")

        results = [found[rid] for rid in result_ids]
        for result in results:
            if result.template_id != template_id:
                raise ComparisonInputError(
                    "template_mismatch",
                    f"Result {result.id} belongs to template {result.template_id}, "
                    f"expected {template_id}",
                )
        return results

    def _load_team_profile(self, team_id: str | None) -> TeamProfile | None:
        if team_id is None or self.team_profile_provider is None:
            return None
        profile = self.team_profile_provider.get_team_profile(team_id)
        if profile is None:
            logger.info(
                "Team %s not found or inactive; comparing without team context", team_id
            )
        return profile

    @staticmethod
    def _summary(result: AssessmentResult) -> CandidateSummary:
        scoring = result.scoring
        metrics = scoring.team_fit_metrics
        return CandidateSummary(
            result_id=result.id,
            user_id=result.user_id,
            display_name=result.label,
            overall_percentage=scoring.overall_percentage,
            passed=scoring.passed,
            diversity_ratio=metrics.diversity_ratio if metrics else None,
            saturation_ratio=metrics.saturation_ratio if metrics else None,
            team_fit_multiplier=metrics.team_fit_multiplier if metrics else None,
            personality_compatibility=(
                metrics.personality_compatibility if metrics else None
            ),
            big_five_profile=dict(scoring.big_five_profile),
            completed_at=result.completed_at.isoformat() if result.completed_at else None,
        )

    @staticmethod
    def _assign_ranks(candidates: Sequence[CandidateSummary]) -> None:
        overall = _rank(candidates, lambda c: c.overall_percentage)
        diversity = _rank(candidates, lambda c: c.diversity_ratio)
        personality = _rank(candidates, lambda c: c.personality_compatibility)
        for candidate in candidates:
            candidate.overall_rank = overall[candidate.result_id]
            candidate.diversity_rank = diversity[candidate.result_id]
            candidate.personality_rank = personality[candidate.result_id]

    def _compare_competencies(
        self, results: Sequence[AssessmentResult], team_saturation: dict[str, float]
    ) -> list[CompetencyComparison]:
        """Per-competency scores across candidates, flagging team gaps.

        With team saturation data, a competency the team lacks counts as
        saturation 0.0. Without it there are no gaps.
        """
        comparisons: dict[str, CompetencyComparison] = {}
        for result in results:
            for score in result.scoring.competency_scores:
                comparison = comparisons.get(score.competency_id)
                if comparison is None:
                    comparison = CompetencyComparison(
                        competency_id=score.competency_id,
                        competency_name=score.competency_name,
                    )
                    comparisons[score.competency_id] = comparison
                comparison.candidate_scores[result.id] = score.percentage

        for comparison in comparisons.values():
            if comparison.candidate_scores:
                comparison.best_candidate_id = max(
                    comparison.candidate_scores, key=comparison.candidate_scores.__getitem__
                )
            if team_saturation and comparison.competency_id != UNKNOWN_COMPETENCY_ID:
                saturation = team_saturation.get(comparison.competency_id, 0.0)
                comparison.team_saturation = saturation
                comparison.is_team_gap = saturation < self.config.diversity_threshold
        return list(comparisons.values())

    def _gap_coverage(
        self, competencies: Sequence[CompetencyComparison]
    ) -> list[GapCoverage]:
        threshold = self.config.gap_coverage_threshold
        entries: list[GapCoverage] = []
        for comparison in competencies:
            if not comparison.is_team_gap:
                continue
            coverage = {
                result_id: value
                for result_id, value in comparison.candidate_scores.items()
                if value >= threshold
            }
            best = max(coverage, key=coverage.__getitem__) if coverage else None
            entries.append(
                GapCoverage(
                    competency_id=comparison.competency_id,
                    competency_name=comparison.competency_name,
                    team_saturation=comparison.team_saturation,
                    candidate_coverage=coverage,
                    best_candidate_id=best,
                )
            )
        return entries

    @staticmethod
    def _complementarity(
        candidates: Sequence[CandidateSummary], total_gaps: int
    ) -> list[ComplementarityPair]:
        pairs: list[ComplementarityPair] = []
        for first, second in combinations(candidates, 2):
            combined = len(set(first.gaps_covered) | set(second.gaps_covered))
            score = 100.0 * combined / total_gaps if total_gaps else 0.0
            pairs.append(
                ComplementarityPair(
                    candidate_a_id=first.result_id,
                    candidate_b_id=second.result_id,
                    candidate_a_name=first.display_name,
                    candidate_b_name=second.display_name,
                    complementarity_score=score,
                    combined_gaps_covered=combined,
                    total_gaps=total_gaps,
                )
            )
        return pairs
