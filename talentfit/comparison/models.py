"""Data models for team-fit candidate comparison."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


class ComparisonInputError(ValueError):
    """Raised when a comparison request violates an input rule.

    ``rule`` names the violated rule, e.g. ``candidate_count`` or
    ``template_mismatch``.
    """

    def __init__(self, rule: str, message: str) -> None:
        super().__init__(message)
        self.rule = rule


@dataclass
class CandidateSummary:
    """One candidate's headline numbers and ranks (1 = best)."""

    result_id: str
    user_id: str
    display_name: str
    overall_percentage: float
    passed: bool
    diversity_ratio: float | None = None
    saturation_ratio: float | None = None
    team_fit_multiplier: float | None = None
    personality_compatibility: float | None = None
    big_five_profile: dict[str, float] = field(default_factory=dict)
    overall_rank: int = 0
    diversity_rank: int = 0
    personality_rank: int = 0
    gaps_covered: list[str] = field(default_factory=list)
    completed_at: str | None = None


@dataclass
class CompetencyComparison:
    """Every candidate's percentage for one competency."""

    competency_id: str
    competency_name: str
    candidate_scores: dict[str, float] = field(default_factory=dict)
    best_candidate_id: str | None = None
    team_saturation: float | None = None
    is_team_gap: bool = False


@dataclass
class GapCoverage:
    """Which candidates cover one team gap."""

    competency_id: str
    competency_name: str
    team_saturation: float | None
    candidate_coverage: dict[str, float] = field(default_factory=dict)
    best_candidate_id: str | None = None


@dataclass
class ComplementarityPair:
    """How much of the team's gaps two candidates cover together."""

    candidate_a_id: str
    candidate_b_id: str
    candidate_a_name: str
    candidate_b_name: str
    complementarity_score: float
    combined_gaps_covered: int
    total_gaps: int

    def __post_init__(self) -> None:
        if not (0.0 <= self.complementarity_score <= 100.0):
            raise ValueError(
                "complementarity_score must be between 0 and 100 "
                f"(got {self.complementarity_score})"
            )


@dataclass
class CandidateComparison:
    """Ranked side-by-side comparison of team-fit candidates."""

    template_id: str
    template_name: str
    team_id: str | None
    target_role: str | None
    team_size: int
    team_context_available: bool
    candidates: list[CandidateSummary] = field(default_factory=list)
    competency_comparison: list[CompetencyComparison] = field(default_factory=list)
    gap_coverage: list[GapCoverage] = field(default_factory=list)
    complementarity: list[ComplementarityPair] = field(default_factory=list)
    team_saturation: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return asdict(self)
