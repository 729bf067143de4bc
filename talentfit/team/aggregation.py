"""Aggregation of member results into a team profile."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from talentfit.scoring.config import ScoringConfig, get_scoring_config
from talentfit.scoring.models import (
    UNKNOWN_COMPETENCY_ID,
    AssessmentResult,
    ResultStatus,
    trait_key,
)
from talentfit.team.models import TeamMember, TeamMemberProfile, TeamProfile, TeamStatus

if TYPE_CHECKING:
    from talentfit.lookup.protocols import (
        CompetencyResolver,
        ResultRepository,
        TeamDirectory,
    )

logger = logging.getLogger(__name__)

# Percentages map onto the 0-5 proficiency scale used for team coverage
PERCENT_PER_SCALE_POINT = 20.0
MAX_SCALE = 5.0

_EPOCH = datetime.min.replace(tzinfo=UTC)


def _completed_at(result: AssessmentResult) -> datetime:
    stamp = result.completed_at
    if stamp is None:
        return _EPOCH
    if stamp.tzinfo is None:
        return stamp.replace(tzinfo=UTC)
    return stamp


def latest_completed(results: Sequence[AssessmentResult]) -> AssessmentResult | None:
    """Most recently completed result, or None."""
    completed = [r for r in results if r.status == ResultStatus.COMPLETED]
    if not completed:
        return None
    return max(completed, key=_completed_at)


class TeamProfileAggregator:
    """Computes competency saturation and personality for a team.

    Only active teams produce a profile. Each active member contributes the
    competency scores of their most recent completed result, converted to a
    0-5 scale. Members without results still count toward coverage.
    """

    def __init__(
        self,
        team_directory: TeamDirectory,
        result_repository: ResultRepository,
        competency_resolver: CompetencyResolver | None = None,
        config: ScoringConfig | None = None,
    ) -> None:
        self.config = config or get_scoring_config()
        self.team_directory = team_directory
        self.result_repository = result_repository
        self.competency_resolver = competency_resolver

    def compute_team_profile(self, team_id: str) -> TeamProfile | None:
        team = self.team_directory.get_team(team_id)
        if team is None:
            logger.warning("Team %s not found", team_id)
            return None
        if team.status != TeamStatus.ACTIVE:
            logger.info("Team %s is %s; no profile", team_id, team.status.value)
            return None

        members = self.team_directory.list_active_members(team_id)
        if not members:
            logger.info("Team %s has no active members", team_id)
            return TeamProfile.empty(team)

        competency_names: dict[str, str] = {}
        member_profiles = [
            self._member_profile(member, competency_names) for member in members
        ]

        saturation = self._saturation(member_profiles)
        skill_gaps = [
            competency_id
            for competency_id, value in saturation.items()
            if value < self.config.skill_gap_threshold
        ]
        personality = self._average_traits(member_profiles)

        logger.info(
            "Team %s profile: %d members, %d competencies, %d gaps",
            team_id,
            len(member_profiles),
            len(saturation),
            len(skill_gaps),
        )
        return TeamProfile(
            team_id=team.id,
            team_name=team.name,
            members=member_profiles,
            saturation=saturation,
            personality_traits=personality,
            skill_gaps=skill_gaps,
            competency_names={cid: competency_names.get(cid, cid) for cid in saturation},
        )

    def _member_profile(
        self, member: TeamMember, competency_names: dict[str, str]
    ) -> TeamMemberProfile:
        results = self.result_repository.find_completed_results_for_user(member.user_id)
        latest = latest_completed(results)
        if latest is None:
            logger.debug("Member %s has no completed results", member.user_id)
            return TeamMemberProfile(user_id=member.user_id, name=member.name, role=member.role)

        scores: dict[str, float] = {}
        for competency_score in latest.scoring.competency_scores:
            if competency_score.competency_id == UNKNOWN_COMPETENCY_ID:
                continue
            scaled = competency_score.percentage / PERCENT_PER_SCALE_POINT
            scores[competency_score.competency_id] = max(0.0, min(MAX_SCALE, scaled))
            competency_names.setdefault(
                competency_score.competency_id, competency_score.competency_name
            )

        return TeamMemberProfile(
            user_id=member.user_id,
            name=member.name,
            role=member.role,
            competency_scores=scores,
            personality_traits=self._member_traits(latest),
        )

    def _member_traits(self, result: AssessmentResult) -> dict[str, float]:
        """Big Five profile of a result, derived from competencies when absent."""
        if result.scoring.big_five_profile:
            return {
                trait_key(trait): value
                for trait, value in result.scoring.big_five_profile.items()
            }

        categories: dict[str, str] = {}
        unmapped: list[str] = []
        for score in result.scoring.competency_scores:
            if score.big_five_category and score.big_five_category.strip():
                categories[score.competency_id] = score.big_five_category
            elif score.competency_id != UNKNOWN_COMPETENCY_ID:
                unmapped.append(score.competency_id)

        if unmapped and self.competency_resolver is not None:
            for competency_id, competency in self.competency_resolver.resolve_competencies(
                unmapped
            ).items():
                if competency.big_five_category and competency.big_five_category.strip():
                    categories[competency_id] = competency.big_five_category

        grouped: dict[str, list[float]] = {}
        for score in result.scoring.competency_scores:
            category = categories.get(score.competency_id)
            if category is not None:
                grouped.setdefault(trait_key(category), []).append(score.percentage)
        return {trait: sum(values) / len(values) for trait, values in grouped.items()}

    @staticmethod
    def _saturation(members: Sequence[TeamMemberProfile]) -> dict[str, float]:
        holders: dict[str, list[float]] = {}
        for member in members:
            for competency_id, value in member.competency_scores.items():
                holders.setdefault(competency_id, []).append(value)

        saturation: dict[str, float] = {}
        for competency_id, values in holders.items():
            coverage = len(values) / len(members)
            average = sum(values) / len(values)
            saturation[competency_id] = max(0.0, min(1.0, coverage * (average / MAX_SCALE)))
        return saturation

    @staticmethod
    def _average_traits(members: Sequence[TeamMemberProfile]) -> dict[str, float]:
        reported: dict[str, list[float]] = {}
        for member in members:
            for trait, value in member.personality_traits.items():
                reported.setdefault(trait, []).append(value)
        return {trait: sum(values) / len(values) for trait, values in reported.items()}
