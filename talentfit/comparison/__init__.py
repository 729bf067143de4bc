"""Team-fit candidate comparison.

Public API:
    - CandidateComparator: Validates, ranks and cross-compares 2-5 results
    - CandidateComparison: Comparison output model
    - ComparisonInputError: Raised for invalid comparison requests
"""

from talentfit.comparison.models import (
    CandidateComparison,
    CandidateSummary,
    ComparisonInputError,
    CompetencyComparison,
    ComplementarityPair,
    GapCoverage,
)
from talentfit.comparison.service import CandidateComparator

__all__ = [
    "CandidateComparator",
    "CandidateComparison",
    "CandidateSummary",
    "CompetencyComparison",
    "GapCoverage",
    "ComplementarityPair",
    "ComparisonInputError",
]
