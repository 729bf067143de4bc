"""Lookup interfaces, caching and answer resolution.

Public API:
    - LookupCache: Thread-safe cache with batch warm-up
    - ResolutionContext: Indicators/competencies resolved for one scoring call
    - CachedCompetencyResolver / CachedIndicatorResolver: Cache-backed resolvers
    - Protocols: CompetencyResolver, IndicatorResolver, TeamProfileProvider,
      BenchmarkProvider, TeamDirectory, ResultRepository, TemplateRepository

The YAML/JSON workspace lives in ``talentfit.lookup.workspace``.
"""

from talentfit.lookup.cache import LookupCache
from talentfit.lookup.protocols import (
    BenchmarkProvider,
    CompetencyResolver,
    IndicatorResolver,
    ResultRepository,
    TeamDirectory,
    TeamProfileProvider,
    TemplateRepository,
)
from talentfit.lookup.resolvers import (
    CachedCompetencyResolver,
    CachedIndicatorResolver,
    ResolutionContext,
)

__all__ = [
    "LookupCache",
    "ResolutionContext",
    "CachedCompetencyResolver",
    "CachedIndicatorResolver",
    "CompetencyResolver",
    "IndicatorResolver",
    "TeamProfileProvider",
    "BenchmarkProvider",
    "TeamDirectory",
    "ResultRepository",
    "TemplateRepository",
]
