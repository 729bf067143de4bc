"""Interfaces the scoring engine consumes from its surroundings.

Implementations may be backed by a database, a remote service, or the
in-memory workspace in ``talentfit.lookup.workspace``. Lookups return
partial results: missing ids are simply absent, never an error.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from talentfit.scoring.models import (
        AssessmentResult,
        BenchmarkProfile,
        Competency,
        Indicator,
        Template,
    )
    from talentfit.team.models import Team, TeamMember, TeamProfile


@runtime_checkable
class CompetencyResolver(Protocol):
    """Batch competency lookup."""

    def resolve_competencies(self, ids: Iterable[str]) -> dict[str, Competency]:
        """Return the competencies found for ``ids``."""


@runtime_checkable
class IndicatorResolver(Protocol):
    """Batch indicator lookup."""

    def resolve_indicators(self, ids: Iterable[str]) -> dict[str, Indicator]:
        """Return the indicators found for ``ids``."""


@runtime_checkable
class TeamProfileProvider(Protocol):
    """Source of aggregated team profiles."""

    def get_team_profile(self, team_id: str) -> TeamProfile | None:
        """Return the team's profile, or None when unavailable."""


@runtime_checkable
class BenchmarkProvider(Protocol):
    """Source of external occupation benchmarks."""

    def get_benchmark_profile(self, code: str) -> BenchmarkProfile | None:
        """Return the benchmark for an occupation code, or None."""


@runtime_checkable
class TeamDirectory(Protocol):
    """Read access to teams and their membership."""

    def get_team(self, team_id: str) -> Team | None:
        """Return the team, or None if unknown."""

    def list_active_members(self, team_id: str) -> list[TeamMember]:
        """Return the team's active members."""


@runtime_checkable
class ResultRepository(Protocol):
    """Read access to persisted assessment results."""

    def find_results(self, ids: Iterable[str]) -> dict[str, AssessmentResult]:
        """Return the results found for ``ids``."""

    def find_completed_results_for_user(self, user_id: str) -> list[AssessmentResult]:
        """Return the user's completed results, newest first."""


@runtime_checkable
class TemplateRepository(Protocol):
    """Read access to assessment templates."""

    def get_template(self, template_id: str) -> Template | None:
        """Return the template, or None if unknown."""
