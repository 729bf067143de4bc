"""Normalization of raw answers to the [0, 1] range."""

from __future__ import annotations

import logging

from talentfit.scoring.models import Answer

logger = logging.getLogger(__name__)

LIKERT_MIN = 1
LIKERT_MAX = 5


class ScoreNormalizer:
    """Maps one answer to a value in [0, 1].

    Skipped answers score 0. Likert values are clamped to 1-5 and mapped
    linearly so that 1 -> 0.0 and 5 -> 1.0. Raw scores are clamped to
    [0, 1]. An answer carrying neither scores 0.
    """

    def normalize(self, answer: Answer) -> float:
        if answer.skipped:
            return 0.0
        if answer.likert_value is not None:
            return self.normalize_likert(answer.likert_value)
        if answer.score is not None:
            return self.normalize_raw(answer.score)

        logger.debug("Answer %s has neither Likert value nor score", answer.id)
        return 0.0

    @staticmethod
    def normalize_likert(value: float) -> float:
        clamped = max(LIKERT_MIN, min(LIKERT_MAX, value))
        return (clamped - LIKERT_MIN) / (LIKERT_MAX - LIKERT_MIN)

    @staticmethod
    def normalize_raw(value: float) -> float:
        return max(0.0, min(1.0, float(value)))


# Decimal places at which pass decisions compare 0-1 fractions
THRESHOLD_PRECISION = 9


def meets_threshold(percentage: float, threshold: float) -> bool:
    """Whether a 0-100 percentage reaches a 0-1 threshold; ties pass.

    Both sides are rounded first so a score that lands exactly on the
    threshold is not failed by float error in the weighted average.
    """
    return round(percentage / 100.0, THRESHOLD_PRECISION) >= round(
        threshold, THRESHOLD_PRECISION
    )
