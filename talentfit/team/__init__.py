"""Teams and aggregated team profiles.

Public API:
    - TeamProfileAggregator: Computes saturation and personality from member results
    - TeamService: Cached profiles, saturation queries and gap-fill scoring
    - Team / TeamMember / TeamStatus: Team directory models
    - TeamProfile / TeamMemberProfile: Aggregated profile models
"""

from talentfit.team.aggregation import TeamProfileAggregator
from talentfit.team.models import (
    Team,
    TeamMember,
    TeamMemberProfile,
    TeamProfile,
    TeamStatus,
)
from talentfit.team.service import TeamService

__all__ = [
    "TeamProfileAggregator",
    "TeamService",
    "Team",
    "TeamMember",
    "TeamStatus",
    "TeamProfile",
    "TeamMemberProfile",
]
