"""Data models for assessment scoring."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from talentfit.scoring.blueprints import Blueprint, coerce_blueprint

UNKNOWN_COMPETENCY_ID = "00000000-0000-0000-0000-000000000000"
UNKNOWN_COMPETENCY_NAME = "Unknown Competency"


class AssessmentGoal(str, Enum):
    """What an assessment template measures."""

    JOB_FIT = "JOB_FIT"
    TEAM_FIT = "TEAM_FIT"


class ConfidenceLevel(str, Enum):
    """Confidence in a job-fit pass/fail decision."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class ResultStatus(str, Enum):
    """Lifecycle state of a persisted assessment result."""

    COMPLETED = "COMPLETED"
    PENDING = "PENDING"


def trait_key(label: str) -> str:
    """Canonical form of a Big Five trait label."""
    return label.strip().upper()


class Competency(BaseModel):
    """A measurable competency with optional external-taxonomy references."""

    id: str = Field(..., description="Competency id")
    name: str = Field(..., description="Display name")
    category: str | None = Field(default=None, description="Framework category")
    onet_code: str | None = Field(default=None, description="O*NET element code")
    esco_uri: str | None = Field(default=None, description="ESCO skill URI")
    big_five_category: str | None = Field(
        default=None, description="Big Five trait this competency maps to"
    )

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> Competency:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


class Indicator(BaseModel):
    """Behavioral indicator belonging to a competency."""

    id: str = Field(..., description="Indicator id")
    competency_id: str | None = Field(default=None, description="Owning competency")
    name: str = Field(default="", description="Display name")
    weight: float = Field(default=1.0, gt=0.0, description="Relative indicator weight")


class Question(BaseModel):
    """Assessment question measuring one indicator."""

    id: str = Field(..., description="Question id")
    indicator_id: str | None = Field(default=None, description="Measured indicator")
    text: str = Field(default="", description="Question text")


class Answer(BaseModel):
    """A single answer given in an assessment session."""

    id: str = Field(..., description="Answer id")
    question: Question | None = Field(default=None, description="Answered question")
    likert_value: int | None = Field(default=None, description="Likert response 1-5")
    score: float | None = Field(default=None, description="Raw score, normally 0-1")
    skipped: bool = Field(default=False, description="Whether the question was skipped")

    @property
    def indicator_id(self) -> str | None:
        return self.question.indicator_id if self.question else None

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> Answer:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


class Template(BaseModel):
    """Assessment template: a goal plus its goal-specific blueprint."""

    id: str = Field(..., description="Template id")
    name: str = Field(default="", description="Display name")
    goal: AssessmentGoal = Field(..., description="What the template measures")
    blueprint: Blueprint | None = Field(
        default=None, description="Typed or legacy goal-specific configuration"
    )

    @field_validator("blueprint", mode="before")
    @classmethod
    def validate_blueprint(cls, v: object) -> Blueprint | None:
        """Accept typed blueprints, tagged dicts, or legacy key/value maps."""
        return coerce_blueprint(v)

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> Template:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


class Session(BaseModel):
    """A taker's run through a template."""

    id: str = Field(..., description="Session id")
    user_id: str = Field(..., description="Assessment taker")
    template: Template = Field(..., description="Template being taken")
    display_name: str | None = Field(default=None, description="Taker display name")


class BenchmarkProfile(BaseModel):
    """External occupation benchmark: competency name -> importance (1-5)."""

    code: str = Field(..., description="Occupation code, e.g. O*NET SOC")
    title: str = Field(default="", description="Occupation title")
    benchmarks: dict[str, float] = Field(
        default_factory=dict, description="Competency name -> importance on 1-5"
    )


class IndicatorScore(BaseModel):
    """Informational per-indicator breakdown inside a competency."""

    indicator_id: str
    name: str = ""
    weight: float = 1.0
    score: float = 0.0
    questions_answered: int = 0
    percentage: float = Field(default=0.0, ge=0.0, le=100.0)


class CompetencyScore(BaseModel):
    """Aggregate of the normalized answers for one competency."""

    competency_id: str
    competency_name: str
    score: float = Field(default=0.0, ge=0.0, description="Sum of normalized answers")
    max_score: float = Field(default=0.0, ge=0.0, description="Answered count")
    questions_answered: int = Field(default=0, ge=0)
    questions_correct: int = Field(default=0, ge=0)
    percentage: float = Field(default=0.0, ge=0.0, le=100.0)
    onet_code: str | None = None
    esco_uri: str | None = None
    big_five_category: str | None = None
    insufficient_evidence: bool = False
    evidence_note: str | None = None
    benchmark_score: float | None = Field(
        default=None, description="External benchmark as a percentage"
    )
    indicator_scores: list[IndicatorScore] = Field(default_factory=list)

    @property
    def average(self) -> float:
        """Mean normalized score in [0, 1]."""
        if self.max_score <= 0:
            return 0.0
        return self.score / self.max_score


class JobFitMetrics(BaseModel):
    """Threshold and decision-confidence details for job fit."""

    effective_threshold: float
    strictness_level: int
    onet_soc_code: str | None = None
    decision_confidence: float = Field(ge=0.0, le=1.0)
    confidence_level: ConfidenceLevel
    confidence_message: str
    margin_factor: float = Field(ge=0.0, le=1.0)
    evidence_factor: float = Field(ge=0.0, le=1.0)
    coverage_factor: float = Field(ge=0.0, le=1.0)


class TeamFitMetrics(BaseModel):
    """Balance, personality and threshold details for team fit."""

    diversity_ratio: float = Field(ge=0.0, le=1.0)
    saturation_ratio: float = Field(ge=0.0, le=1.0)
    team_fit_multiplier: float
    diversity_count: int = 0
    saturation_count: int = 0
    gap_count: int = 0
    competency_saturation: dict[str, float] = Field(
        default_factory=dict,
        description="Competency id -> candidate average (0-1)",
    )
    saturation_threshold: float = 0.75
    pass_threshold: float = 0.6
    team_id: str | None = None
    target_role: str | None = None
    team_size: int = 0
    team_context_available: bool = False
    personality_compatibility: float | None = None


class ScoringResult(BaseModel):
    """Outcome of scoring one session."""

    goal: AssessmentGoal
    overall_score: float = Field(default=0.0, ge=0.0)
    overall_percentage: float = Field(default=0.0, ge=0.0, le=100.0)
    passed: bool = False
    competency_scores: list[CompetencyScore] = Field(default_factory=list)
    job_fit_metrics: JobFitMetrics | None = None
    team_fit_metrics: TeamFitMetrics | None = None
    big_five_profile: dict[str, float] = Field(
        default_factory=dict, description="Trait -> 0-100 (team fit only)"
    )

    def score_for(self, competency_id: str) -> CompetencyScore | None:
        """Competency score by id, or None."""
        for competency_score in self.competency_scores:
            if competency_score.competency_id == competency_id:
                return competency_score
        return None

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> ScoringResult:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


class AssessmentResult(BaseModel):
    """A persisted scoring outcome for one taker and template."""

    id: str = Field(..., description="Result id")
    template_id: str = Field(..., description="Template the session was taken on")
    user_id: str = Field(..., description="Assessment taker")
    display_name: str | None = Field(default=None, description="Taker display name")
    scoring: ScoringResult = Field(..., description="Scoring outcome")
    questions_answered: int = Field(default=0, ge=0)
    questions_skipped: int = Field(default=0, ge=0)
    status: ResultStatus = Field(default=ResultStatus.COMPLETED)
    completed_at: datetime | None = Field(
        default_factory=lambda: datetime.now(UTC), description="Completion time"
    )

    @property
    def label(self) -> str:
        return self.display_name or self.user_id

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> AssessmentResult:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)
