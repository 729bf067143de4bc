"""Data models for teams and aggregated team profiles."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum

from pydantic import BaseModel, Field


class TeamStatus(str, Enum):
    """Lifecycle state of a team."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ARCHIVED = "ARCHIVED"


class TeamMember(BaseModel):
    """A person on a team."""

    user_id: str = Field(..., description="Member's user id")
    name: str = Field(default="", description="Display name")
    role: str | None = Field(default=None, description="Role on the team")
    is_active: bool = Field(default=True, description="Whether the member is active")


class Team(BaseModel):
    """A team and its membership."""

    id: str = Field(..., description="Team id")
    name: str = Field(default="", description="Team name")
    status: TeamStatus = Field(default=TeamStatus.ACTIVE)
    members: list[TeamMember] = Field(default_factory=list)

    @property
    def active_members(self) -> list[TeamMember]:
        return [m for m in self.members if m.is_active]

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> Team:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


@dataclass
class TeamMemberProfile:
    """One active member's latest competency scores and personality.

    Attributes:
        user_id: Member's user id.
        name: Display name.
        role: Role on the team, if known.
        competency_scores: Competency id -> score on a 0-5 scale.
        personality_traits: Big Five trait -> 0-100.
    """

    user_id: str
    name: str = ""
    role: str | None = None
    competency_scores: dict[str, float] = field(default_factory=dict)
    personality_traits: dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for competency_id, value in self.competency_scores.items():
            if not (0.0 <= value <= 5.0):
                raise ValueError(
                    f"competency score for {competency_id} must be between 0 and 5 "
                    f"(got {value})"
                )


@dataclass
class TeamProfile:
    """Aggregated competency coverage and personality of a team.

    Attributes:
        team_id: Team id.
        team_name: Team name.
        members: Profiles of all active members, including those without results.
        saturation: Competency id -> saturation in [0, 1]. Competencies no
            member has are absent.
        personality_traits: Big Five trait -> average 0-100 across reporting members.
        skill_gaps: Competency ids whose saturation is below the gap threshold.
        competency_names: Competency id -> display name.
    """

    team_id: str
    team_name: str = ""
    members: list[TeamMemberProfile] = field(default_factory=list)
    saturation: dict[str, float] = field(default_factory=dict)
    personality_traits: dict[str, float] = field(default_factory=dict)
    skill_gaps: list[str] = field(default_factory=list)
    competency_names: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for competency_id, value in self.saturation.items():
            if not (0.0 <= value <= 1.0):
                raise ValueError(
                    f"saturation for {competency_id} must be between 0.0 and 1.0 "
                    f"(got {value})"
                )

    @property
    def team_size(self) -> int:
        return len(self.members)

    def saturation_for(self, competency_id: str) -> float | None:
        return self.saturation.get(competency_id)

    def undersaturated(self, threshold: float) -> list[str]:
        """Competency ids with saturation strictly below ``threshold``."""
        return [cid for cid, value in self.saturation.items() if value < threshold]

    @classmethod
    def empty(cls, team: Team) -> TeamProfile:
        return cls(team_id=team.id, team_name=team.name)

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        payload = asdict(self)
        payload["team_size"] = self.team_size
        return payload
