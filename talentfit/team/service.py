"""Team service: cached team profiles and saturation queries."""

from __future__ import annotations

import logging

from talentfit.lookup.cache import LookupCache
from talentfit.scoring.config import ScoringConfig, get_scoring_config
from talentfit.team.aggregation import MAX_SCALE, TeamProfileAggregator
from talentfit.team.models import TeamProfile, TeamStatus

logger = logging.getLogger(__name__)

# Fixed scores for the gap-filling heuristic
NO_GAPS_SCORE = 50.0
NO_GAPS_FILLED_SCORE = 25.0
GAP_FILL_WEIGHT = 0.6
GAP_COVERAGE_POINTS = 40.0


class TeamService:
    """Team profile access for scoring and comparison.

    Profiles are cached per team until invalidated. Teams without a
    profile are not cached, so they are recomputed on the next request.
    """

    def __init__(
        self,
        aggregator: TeamProfileAggregator,
        config: ScoringConfig | None = None,
        cache: LookupCache[str, TeamProfile] | None = None,
    ) -> None:
        self.config = config or get_scoring_config()
        self.aggregator = aggregator
        self.cache = cache if cache is not None else LookupCache("team_profile")

    def get_team_profile(self, team_id: str) -> TeamProfile | None:
        if team_id in self.cache:
            return self.cache.get(team_id)
        profile = self.aggregator.compute_team_profile(team_id)
        if profile is not None:
            self.cache.put(team_id, profile)
        return profile

    def invalidate_team_cache(self, team_id: str) -> None:
        logger.debug("Invalidating cached profile for team %s", team_id)
        self.cache.invalidate(team_id)

    def get_saturation(self, team_id: str, competency_id: str) -> float | None:
        """Team saturation for one competency, or None when unknown."""
        profile = self.get_team_profile(team_id)
        if profile is None:
            return None
        return profile.saturation_for(competency_id)

    def get_undersaturated_competencies(
        self, team_id: str, threshold: float
    ) -> list[str]:
        profile = self.get_team_profile(team_id)
        if profile is None:
            return []
        return profile.undersaturated(threshold)

    def calculate_team_fit_score(
        self, team_id: str, candidate_scores: dict[str, float]
    ) -> float:
        """0-100 heuristic for how well a candidate fills the team's skill gaps.

        ``candidate_scores`` maps competency id to a 0-5 score. A gap is
        filled when the candidate scores at least the configured proficiency.
        """
        profile = self.get_team_profile(team_id)
        if profile is None:
            return 0.0
        gaps = profile.skill_gaps
        if not gaps:
            return NO_GAPS_SCORE

        fills = [
            candidate_scores[gap] / MAX_SCALE * 100.0
            for gap in gaps
            if candidate_scores.get(gap, 0.0) >= self.config.team_fit_gap_proficiency
        ]
        if not fills:
            return NO_GAPS_FILLED_SCORE

        gap_coverage = len(fills) / len(gaps)
        average_fill = sum(fills) / len(fills)
        return average_fill * GAP_FILL_WEIGHT + gap_coverage * GAP_COVERAGE_POINTS

    def is_valid_team(self, team_id: str) -> bool:
        team = self.aggregator.team_directory.get_team(team_id)
        return team is not None and team.status == TeamStatus.ACTIVE
