"""Grouping of normalized answers into per-competency scores."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from talentfit.lookup.resolvers import ResolutionContext
from talentfit.scoring.models import (
    UNKNOWN_COMPETENCY_ID,
    UNKNOWN_COMPETENCY_NAME,
    Answer,
    Competency,
    CompetencyScore,
    Indicator,
    IndicatorScore,
)
from talentfit.scoring.normalizer import ScoreNormalizer

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass
class _Bucket:
    competency_id: str
    competency: Competency | None
    values: list[float] = field(default_factory=list)
    indicators: dict[str, tuple[Indicator, list[float]]] = field(default_factory=dict)


class CompetencyAggregator:
    """Builds one CompetencyScore per resolved competency.

    Skipped answers are ignored. Answers whose question/indicator chain
    cannot be followed are grouped under the "Unknown Competency"
    sentinel. A competency id that is referenced but cannot be resolved
    keeps its own group, named "Unknown Competency" without taxonomy
    references. Groups are returned in first-seen order.
    """

    def __init__(self, normalizer: ScoreNormalizer | None = None) -> None:
        self.normalizer = normalizer or ScoreNormalizer()

    def aggregate(
        self, answers: Sequence[Answer], context: ResolutionContext
    ) -> list[CompetencyScore]:
        buckets: dict[str, _Bucket] = {}
        unresolved = 0

        for answer in answers:
            if answer.skipped:
                continue

            competency_id = context.competency_id_for(answer)
            if competency_id is None:
                unresolved += 1
                competency_id = UNKNOWN_COMPETENCY_ID

            bucket = buckets.get(competency_id)
            if bucket is None:
                bucket = _Bucket(
                    competency_id=competency_id,
                    competency=context.competencies.get(competency_id),
                )
                buckets[competency_id] = bucket

            value = self.normalizer.normalize(answer)
            bucket.values.append(value)

            indicator = context.indicator_for(answer)
            if indicator is not None:
                _, indicator_values = bucket.indicators.setdefault(
                    indicator.id, (indicator, [])
                )
                indicator_values.append(value)

        if unresolved:
            logger.warning(
                "%d answers could not be traced to a competency; grouped as %s",
                unresolved,
                UNKNOWN_COMPETENCY_NAME,
            )

        return [self._to_score(bucket) for bucket in buckets.values()]

    def _to_score(self, bucket: _Bucket) -> CompetencyScore:
        count = len(bucket.values)
        total = sum(bucket.values)
        average = total / count if count else 0.0
        competency = bucket.competency

        if competency is None and bucket.competency_id != UNKNOWN_COMPETENCY_ID:
            logger.warning(
                "Competency %s not found; scoring as %s",
                bucket.competency_id,
                UNKNOWN_COMPETENCY_NAME,
            )

        score = CompetencyScore(
            competency_id=bucket.competency_id,
            competency_name=competency.name if competency else UNKNOWN_COMPETENCY_NAME,
            score=total,
            max_score=float(count),
            questions_answered=count,
            questions_correct=round_half_up(average * count),
            percentage=min(100.0, 100.0 * total / count) if count else 0.0,
            onet_code=competency.onet_code if competency else None,
            esco_uri=competency.esco_uri if competency else None,
            big_five_category=competency.big_five_category if competency else None,
            indicator_scores=[
                self._indicator_score(indicator, values)
                for indicator, values in bucket.indicators.values()
            ],
        )
        logger.debug(
            "Competency %s: %d answers, %.1f%%",
            score.competency_name,
            count,
            score.percentage,
        )
        return score

    @staticmethod
    def _indicator_score(indicator: Indicator, values: list[float]) -> IndicatorScore:
        total = sum(values)
        return IndicatorScore(
            indicator_id=indicator.id,
            name=indicator.name,
            weight=indicator.weight,
            score=total,
            questions_answered=len(values),
            percentage=min(100.0, 100.0 * total / len(values)),
        )
