"""Cached resolvers and per-call answer resolution."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from talentfit.lookup.cache import LookupCache

if TYPE_CHECKING:
    from talentfit.lookup.protocols import CompetencyResolver, IndicatorResolver
    from talentfit.scoring.models import Answer, Competency, Indicator

logger = logging.getLogger(__name__)


class CachedCompetencyResolver:
    """CompetencyResolver that remembers what the backend returned."""

    def __init__(
        self,
        backend: CompetencyResolver,
        cache: LookupCache[str, Competency] | None = None,
    ) -> None:
        self.backend = backend
        self.cache = cache if cache is not None else LookupCache("competency")

    def resolve_competencies(self, ids: Iterable[str]) -> dict[str, Competency]:
        return self.cache.warm(ids, self.backend.resolve_competencies)


class CachedIndicatorResolver:
    """IndicatorResolver that remembers what the backend returned."""

    def __init__(
        self,
        backend: IndicatorResolver,
        cache: LookupCache[str, Indicator] | None = None,
    ) -> None:
        self.backend = backend
        self.cache = cache if cache is not None else LookupCache("indicator")

    def resolve_indicators(self, ids: Iterable[str]) -> dict[str, Indicator]:
        return self.cache.warm(ids, self.backend.resolve_indicators)


@dataclass
class ResolutionContext:
    """Indicators and competencies resolved once for one scoring call.

    Either map may be partially populated or empty; lookups for anything
    unresolved return None and the caller falls back to the
    "Unknown Competency" bucket.
    """

    indicators: dict[str, Indicator] = field(default_factory=dict)
    competencies: dict[str, Competency] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        answers: Sequence[Answer],
        indicator_resolver: IndicatorResolver | None,
        competency_resolver: CompetencyResolver | None,
    ) -> ResolutionContext:
        """Resolve every indicator and competency the answers reference.

        Issues at most one indicator batch and one competency batch.
        """
        indicator_ids = {a.indicator_id for a in answers if a.indicator_id}
        indicators: dict[str, Indicator] = {}
        if indicator_ids and indicator_resolver is not None:
            indicators = dict(indicator_resolver.resolve_indicators(indicator_ids))

        competency_ids = {i.competency_id for i in indicators.values() if i.competency_id}
        competencies: dict[str, Competency] = {}
        if competency_ids and competency_resolver is not None:
            competencies = dict(competency_resolver.resolve_competencies(competency_ids))

        missing = competency_ids - set(competencies)
        if missing:
            logger.warning("Could not resolve %d competencies", len(missing))

        return cls(indicators=indicators, competencies=competencies)

    def indicator_for(self, answer: Answer) -> Indicator | None:
        indicator_id = answer.indicator_id
        if indicator_id is None:
            return None
        return self.indicators.get(indicator_id)

    def competency_id_for(self, answer: Answer) -> str | None:
        """Competency id the answer's chain points at, resolved or not."""
        indicator = self.indicator_for(answer)
        if indicator is None:
            return None
        return indicator.competency_id

    def competency_for(self, answer: Answer) -> Competency | None:
        competency_id = self.competency_id_for(answer)
        if competency_id is None:
            return None
        return self.competencies.get(competency_id)
