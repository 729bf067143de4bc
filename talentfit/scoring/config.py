"""Configuration settings for assessment scoring."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringConfig(BaseSettings):
    """Scoring weights, thresholds and heuristics.

    All settings have sensible defaults and can be overridden via
    environment variables with `SCORING_` prefix or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Taxonomy boosts (never below 1.0, boosts only increase weight)
    onet_boost: Annotated[float, Field(ge=1.0)] = Field(
        default=1.2,
        description="Job-fit weight for competencies carrying an O*NET code",
    )
    esco_boost: Annotated[float, Field(ge=1.0)] = Field(
        default=1.15,
        description="Team-fit weight for competencies carrying an ESCO URI",
    )
    big_five_boost: Annotated[float, Field(ge=1.0)] = Field(
        default=1.1,
        description="Team-fit weight for competencies mapped to a Big Five trait",
    )
    max_weight_multiplier: Annotated[float, Field(ge=1.0)] = Field(
        default=3.0,
        description="Cap on a competency's compounded team-fit weight",
    )

    # Job fit
    job_fit_base_threshold: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.5,
        description="Pass threshold at strictness 0",
    )
    job_fit_strictness_max_adjustment: Annotated[float, Field(ge=0.0, le=1.0)] = (
        Field(
            default=0.3,
            description="Threshold increase at strictness 100",
        )
    )
    default_strictness_level: Annotated[int, Field(ge=0, le=100)] = Field(
        default=50,
        description="Strictness used when the blueprint does not provide one",
    )
    min_questions_per_competency: Annotated[int, Field(ge=1)] = Field(
        default=3,
        description="Answered questions needed for sufficient evidence",
    )

    # Decision confidence
    confidence_margin_scale: Annotated[float, Field(gt=0.0)] = Field(
        default=0.15,
        description="Distance from threshold at which margin factor saturates",
    )
    confidence_weight_margin: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.5,
        description="Confidence weight for score margin",
    )
    confidence_weight_evidence: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.3,
        description="Confidence weight for evidence sufficiency",
    )
    confidence_weight_coverage: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.2,
        description="Confidence weight for benchmark coverage",
    )
    confidence_high_threshold: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.7,
        description="Minimum confidence for HIGH",
    )
    confidence_medium_threshold: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.4,
        description="Minimum confidence for MEDIUM",
    )

    # Team fit classification
    saturation_threshold: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.75,
        description="Default saturation threshold when the blueprint has none",
    )
    diversity_threshold: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.5,
        description="Lower bound of the diversity band",
    )

    # Team fit balance multiplier
    diversity_bonus: Annotated[float, Field(ge=1.0)] = Field(
        default=1.1,
        description="Upper asymptote of the balance multiplier",
    )
    saturation_penalty: Annotated[float, Field(gt=0.0, le=1.0)] = Field(
        default=0.9,
        description="Lower asymptote of the balance multiplier",
    )
    sigmoid_steepness: Annotated[float, Field(gt=0.0)] = Field(
        default=10.0,
        description="Steepness of the balance sigmoid",
    )
    personality_weight: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.1,
        description="Multiplier adjustment per unit of personality compatibility",
    )

    # Team fit pass decision
    pass_threshold: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.6,
        description="Team-fit pass threshold before small-team adjustment",
    )
    min_diversity_ratio: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.3,
        description="Minimum diversity ratio required to pass team fit",
    )
    small_team_threshold: Annotated[int, Field(ge=0)] = Field(
        default=5,
        description="Teams smaller than this get a lowered pass threshold",
    )
    small_team_adjustment: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.1,
        description="Pass threshold reduction for small teams",
    )
    min_pass_threshold: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.3,
        description="Floor for the adjusted team-fit pass threshold",
    )

    # Team profile
    skill_gap_threshold: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.3,
        description="Team saturation below which a competency is a skill gap",
    )
    team_fit_gap_proficiency: Annotated[float, Field(ge=0.0, le=5.0)] = Field(
        default=3.0,
        description="Candidate 0-5 score needed to count as filling a team gap",
    )

    # Candidate comparison
    gap_coverage_threshold: Annotated[float, Field(ge=0.0, le=100.0)] = Field(
        default=50.0,
        description="Candidate percentage needed to cover a team gap",
    )
    min_candidates: Annotated[int, Field(ge=2)] = Field(
        default=2,
        description="Minimum number of results in a comparison",
    )
    max_candidates: Annotated[int, Field(ge=2)] = Field(
        default=5,
        description="Maximum number of results in a comparison",
    )

    @model_validator(mode="after")
    def validate_confidence_weights_sum_to_one(self) -> ScoringConfig:
        """Ensure confidence weights sum to 1.0 (within tolerance)."""
        weight_sum = (
            self.confidence_weight_margin
            + self.confidence_weight_evidence
            + self.confidence_weight_coverage
        )
        if abs(weight_sum - 1.0) > 1e-6:
            raise ValueError(
                "Confidence weights must sum to 1.0. "
                f"Got {weight_sum:.6f} "
                f"(margin={self.confidence_weight_margin}, "
                f"evidence={self.confidence_weight_evidence}, "
                f"coverage={self.confidence_weight_coverage})."
            )
        return self

    @model_validator(mode="after")
    def validate_ordered_bounds(self) -> ScoringConfig:
        """Ensure paired thresholds are consistently ordered."""
        if self.confidence_medium_threshold > self.confidence_high_threshold:
            raise ValueError(
                "confidence_medium_threshold must not exceed confidence_high_threshold"
            )
        if self.min_candidates > self.max_candidates:
            raise ValueError("min_candidates must not exceed max_candidates")
        if self.saturation_penalty > self.diversity_bonus:
            raise ValueError("saturation_penalty must not exceed diversity_bonus")
        return self


# Singleton instance for easy import
_scoring_config: ScoringConfig | None = None


def get_scoring_config() -> ScoringConfig:
    """Get the scoring configuration singleton."""
    global _scoring_config
    if _scoring_config is None:
        _scoring_config = ScoringConfig()
    return _scoring_config


def reset_scoring_config() -> None:
    """Reset the scoring configuration singleton (useful for testing)."""
    global _scoring_config
    _scoring_config = None
