"""Team-fit scoring strategy."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from talentfit.lookup.protocols import (
    CompetencyResolver,
    IndicatorResolver,
    TeamProfileProvider,
)
from talentfit.lookup.resolvers import ResolutionContext
from talentfit.scoring.aggregation import CompetencyAggregator
from talentfit.scoring.blueprints import (
    resolve_role_weights,
    resolve_saturation_threshold,
    resolve_target_role,
    resolve_team_id,
)
from talentfit.scoring.config import ScoringConfig, get_scoring_config
from talentfit.scoring.models import (
    Answer,
    AssessmentGoal,
    CompetencyScore,
    ScoringResult,
    Session,
    TeamFitMetrics,
    trait_key,
)
from talentfit.scoring.normalizer import meets_threshold
from talentfit.team.models import TeamProfile

logger = logging.getLogger(__name__)


class CompetencyRole(str, Enum):
    """How a competency relates to the team's existing coverage."""

    GAP = "gap"
    DIVERSITY = "diversity"
    SATURATION = "saturation"


@dataclass
class BalanceSummary:
    """Classification counts across the scored competencies."""

    roles: dict[str, CompetencyRole] = field(default_factory=dict)
    diversity_count: int = 0
    saturation_count: int = 0
    gap_count: int = 0

    @property
    def total(self) -> int:
        return self.diversity_count + self.saturation_count + self.gap_count

    @property
    def diversity_ratio(self) -> float:
        return self.diversity_count / self.total if self.total else 0.0

    @property
    def saturation_ratio(self) -> float:
        return self.saturation_count / self.total if self.total else 0.0


def sigmoid(x: float) -> float:
    return 1.0 / (1.0 + math.exp(-x))


def personality_compatibility(
    candidate: dict[str, float], team: dict[str, float]
) -> float | None:
    """Similarity of two 0-100 trait profiles over their shared traits.

    Returns ``1 - euclidean_distance / (100 * sqrt(n))`` clamped to [0, 1],
    or None when the profiles share no trait.
    """
    shared = [trait for trait in candidate if trait in team]
    if not shared:
        return None
    distance = math.sqrt(sum((candidate[t] - team[t]) ** 2 for t in shared))
    max_distance = 100.0 * math.sqrt(len(shared))
    return max(0.0, min(1.0, 1.0 - distance / max_distance))


class TeamFitScoringStrategy:
    """Scores how well a candidate complements an existing team.

    Each competency is classified as a gap, a diversity contribution or a
    saturation against the team's coverage (or, without team data, against
    the candidate's own averages). The weighted score is scaled by a
    sigmoid balance multiplier and, when both sides report Big Five traits,
    a personality-compatibility adjustment. Passing needs both the score
    and a minimum diversity ratio.
    """

    def __init__(
        self,
        competency_resolver: CompetencyResolver | None = None,
        indicator_resolver: IndicatorResolver | None = None,
        team_profile_provider: TeamProfileProvider | None = None,
        config: ScoringConfig | None = None,
        aggregator: CompetencyAggregator | None = None,
    ) -> None:
        self.config = config or get_scoring_config()
        self.competency_resolver = competency_resolver
        self.indicator_resolver = indicator_resolver
        self.team_profile_provider = team_profile_provider
        self.aggregator = aggregator or CompetencyAggregator()

    def supported_goal(self) -> AssessmentGoal:
        return AssessmentGoal.TEAM_FIT

    def calculate(self, session: Session, answers: Sequence[Answer]) -> ScoringResult:
        blueprint = session.template.blueprint
        threshold = resolve_saturation_threshold(
            blueprint, self.config.saturation_threshold
        )
        team_id = resolve_team_id(blueprint)
        target_role = resolve_target_role(blueprint)
        role_weights = resolve_role_weights(blueprint)
        profile = self._load_team_profile(team_id)
        team_context = profile is not None and bool(profile.saturation)

        context = ResolutionContext.build(
            answers, self.indicator_resolver, self.competency_resolver
        )
        scores = self.aggregator.aggregate(answers, context)

        balance = self.classify(scores, threshold, profile if team_context else None)
        big_five = self.big_five_profile(scores)

        compatibility = None
        if profile is not None and big_five and profile.personality_traits:
            compatibility = personality_compatibility(big_five, profile.personality_traits)
        multiplier = self.balance_multiplier(
            balance.diversity_ratio - balance.saturation_ratio, compatibility
        )

        raw_percentage = self._weighted_percentage(
            scores, profile if team_context else None, role_weights
        )
        percentage = max(0.0, min(100.0, raw_percentage * multiplier))
        overall_score = sum(s.score for s in scores) / len(scores) if scores else 0.0

        pass_threshold = self.pass_threshold(profile)
        passed = (
            bool(scores)
            and meets_threshold(percentage, pass_threshold)
            and balance.diversity_ratio >= self.config.min_diversity_ratio
        )

        logger.info(
            "Team fit for session %s: %.1f%% (raw %.1f%%, x%.3f) vs threshold %.0f%%, "
            "diversity %.2f -> %s",
            session.id,
            percentage,
            raw_percentage,
            multiplier,
            pass_threshold * 100,
            balance.diversity_ratio,
            "PASS" if passed else "FAIL",
        )

        return ScoringResult(
            goal=AssessmentGoal.TEAM_FIT,
            overall_score=overall_score,
            overall_percentage=percentage,
            passed=passed,
            competency_scores=scores,
            team_fit_metrics=TeamFitMetrics(
                diversity_ratio=balance.diversity_ratio,
                saturation_ratio=balance.saturation_ratio,
                team_fit_multiplier=multiplier,
                diversity_count=balance.diversity_count,
                saturation_count=balance.saturation_count,
                gap_count=balance.gap_count,
                competency_saturation={s.competency_id: s.average for s in scores},
                saturation_threshold=threshold,
                pass_threshold=pass_threshold,
                team_id=team_id,
                target_role=target_role,
                team_size=profile.team_size if profile is not None else 0,
                team_context_available=team_context,
                personality_compatibility=compatibility,
            ),
            big_five_profile=big_five,
        )

    def classify(
        self,
        scores: Sequence[CompetencyScore],
        saturation_threshold: float,
        profile: TeamProfile | None,
    ) -> BalanceSummary:
        """Classify each competency as gap, diversity or saturation.

        With a team profile the team's saturation is used (0.0 for
        competencies the team lacks); otherwise the candidate's own average.
        """
        summary = BalanceSummary()
        for score in scores:
            if profile is not None:
                value = profile.saturation.get(score.competency_id, 0.0)
            else:
                value = score.average

            if value >= saturation_threshold:
                role = CompetencyRole.SATURATION
                summary.saturation_count += 1
            elif value >= self.config.diversity_threshold:
                role = CompetencyRole.DIVERSITY
                summary.diversity_count += 1
            else:
                role = CompetencyRole.GAP
                summary.gap_count += 1
            summary.roles[score.competency_id] = role
            logger.debug("%s classified as %s (%.2f)", score.competency_name, role.value, value)
        return summary

    def balance_multiplier(
        self, balance: float, compatibility: float | None = None
    ) -> float:
        """Sigmoid multiplier between the saturation penalty and diversity bonus."""
        low = self.config.saturation_penalty
        high = self.config.diversity_bonus
        multiplier = low + (high - low) * sigmoid(self.config.sigmoid_steepness * balance)
        if compatibility is not None:
            multiplier += (compatibility - 0.5) * self.config.personality_weight
        return multiplier

    def pass_threshold(self, profile: TeamProfile | None) -> float:
        threshold = self.config.pass_threshold
        if profile is not None and profile.team_size < self.config.small_team_threshold:
            threshold -= self.config.small_team_adjustment
        return max(threshold, self.config.min_pass_threshold)

    def weight_for(self, score: CompetencyScore) -> float:
        """Taxonomy weight: ESCO and Big Five boosts compound."""
        weight = 1.0
        if score.esco_uri and score.esco_uri.strip():
            weight *= self.config.esco_boost
        if score.big_five_category and score.big_five_category.strip():
            weight *= self.config.big_five_boost
        return weight

    def big_five_profile(self, scores: Sequence[CompetencyScore]) -> dict[str, float]:
        """Per-trait mean normalized answer score on 0-100."""
        sums: dict[str, float] = {}
        counts: dict[str, int] = {}
        for score in scores:
            if not (score.big_five_category and score.big_five_category.strip()):
                continue
            trait = trait_key(score.big_five_category)
            sums[trait] = sums.get(trait, 0.0) + score.score
            counts[trait] = counts.get(trait, 0) + score.questions_answered
        return {
            trait: 100.0 * sums[trait] / counts[trait]
            for trait in sums
            if counts[trait] > 0
        }

    def _weighted_percentage(
        self,
        scores: Sequence[CompetencyScore],
        profile: TeamProfile | None,
        role_weights: dict[str, float],
    ) -> float:
        weighted_sum = 0.0
        total_weight = 0.0
        for score in scores:
            weight = self.weight_for(score)
            if profile is not None:
                weight *= 1.0 + (1.0 - profile.saturation.get(score.competency_id, 0.0))
            weight *= role_weights.get(
                score.competency_id, role_weights.get(score.competency_name, 1.0)
            )
            weight = min(weight, self.config.max_weight_multiplier)
            weighted_sum += weight * score.average
            total_weight += weight
        if total_weight <= 0:
            return 0.0
        return 100.0 * weighted_sum / total_weight

    def _load_team_profile(self, team_id: str | None) -> TeamProfile | None:
        if team_id is None or self.team_profile_provider is None:
            return None
        profile = self.team_profile_provider.get_team_profile(team_id)
        if profile is None:
            logger.info("No team profile for %s; using self-referential scoring", team_id)
        return profile
