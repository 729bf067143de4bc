"""Assessment scoring engine.

This module scores an assessment session's answers against a competency
framework, either for job fit (role requirements) or team fit (how a
candidate complements an existing team).

Public API:
    - ScoringService: Goal dispatch, result records and formatting
    - JobFitScoringStrategy / TeamFitScoringStrategy: Per-goal scoring
    - CompetencyAggregator: Per-competency statistics from answers
    - ScoreNormalizer: Answer -> [0, 1]
    - ConfidenceEstimator: Job-fit decision confidence
    - interpret: Proficiency label for a percentage
    - ScoringConfig: Configuration settings
"""

from talentfit.scoring.aggregation import CompetencyAggregator
from talentfit.scoring.blueprints import (
    JobFitBlueprint,
    LegacyBlueprint,
    TeamFitBlueprint,
)
from talentfit.scoring.confidence import ConfidenceAssessment, ConfidenceEstimator
from talentfit.scoring.config import ScoringConfig, get_scoring_config, reset_scoring_config
from talentfit.scoring.interpreter import ProficiencyLevel, ScoreInterpretation, interpret
from talentfit.scoring.job_fit import JobFitScoringStrategy
from talentfit.scoring.models import (
    Answer,
    AssessmentGoal,
    AssessmentResult,
    BenchmarkProfile,
    Competency,
    CompetencyScore,
    ConfidenceLevel,
    Indicator,
    JobFitMetrics,
    Question,
    ScoringResult,
    Session,
    TeamFitMetrics,
    Template,
)
from talentfit.scoring.normalizer import ScoreNormalizer
from talentfit.scoring.service import ScoringService, UnsupportedGoalError
from talentfit.scoring.team_fit import TeamFitScoringStrategy

__all__ = [
    "ScoringService",
    "UnsupportedGoalError",
    "JobFitScoringStrategy",
    "TeamFitScoringStrategy",
    "CompetencyAggregator",
    "ScoreNormalizer",
    "ConfidenceEstimator",
    "ConfidenceAssessment",
    "interpret",
    "ProficiencyLevel",
    "ScoreInterpretation",
    "JobFitBlueprint",
    "TeamFitBlueprint",
    "LegacyBlueprint",
    "Answer",
    "AssessmentGoal",
    "AssessmentResult",
    "BenchmarkProfile",
    "Competency",
    "CompetencyScore",
    "ConfidenceLevel",
    "Indicator",
    "JobFitMetrics",
    "Question",
    "ScoringResult",
    "Session",
    "TeamFitMetrics",
    "Template",
    "ScoringConfig",
    "get_scoring_config",
    "reset_scoring_config",
]
