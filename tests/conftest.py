"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import itertools
from datetime import UTC, datetime
from pathlib import Path

import pytest

EXAMPLE_WORKSPACE = Path(__file__).resolve().parents[1] / "data" / "workspace.example.yaml"


@pytest.fixture
def example_workspace_path() -> Path:
    """Path to the bundled example workspace."""
    return EXAMPLE_WORKSPACE


@pytest.fixture(autouse=True)
def _reset_app_logging():
    """Keep module loggers propagating to pytest's capture between tests."""
    from talentfit.utils.logging import reset_logging

    yield
    reset_logging()


@pytest.fixture
def scoring_config():
    """ScoringConfig with defaults only (no .env)."""
    from talentfit.scoring.config import ScoringConfig

    return ScoringConfig(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def catalog(scoring_config):
    """Factory: workspace with one indicator per competency ("ind-<competency id>")."""

    def _catalog(*competencies: dict, **sections):
        from talentfit.lookup.workspace import Workspace, WorkspaceDocument

        document = WorkspaceDocument.model_validate(
            {
                "competencies": list(competencies),
                "indicators": [
                    {
                        "id": f"ind-{c['id']}",
                        "competency_id": c["id"],
                        "name": f"{c['name']} indicator",
                    }
                    for c in competencies
                ],
                **sections,
            }
        )
        return Workspace(document, config=scoring_config)

    return _catalog


@pytest.fixture
def make_answers():
    """Factory: answers for one competency's indicator (Likert unless raw=True)."""
    counter = itertools.count(1)

    def _make(competency_id: str, *values, raw: bool = False, skipped: bool = False):
        from talentfit.scoring.models import Answer, Question

        answers = []
        for value in values:
            n = next(counter)
            answers.append(
                Answer(
                    id=f"a-{n}",
                    question=Question(id=f"q-{n}", indicator_id=f"ind-{competency_id}"),
                    likert_value=None if raw else value,
                    score=value if raw else None,
                    skipped=skipped,
                )
            )
        return answers

    return _make


@pytest.fixture
def make_session():
    """Factory: session on a single template."""

    def _make(
        goal: str = "JOB_FIT",
        blueprint=None,
        template_id: str = "tpl-1",
        user_id: str = "user-1",
        session_id: str = "session-1",
    ):
        from talentfit.scoring.models import Session, Template

        return Session(
            id=session_id,
            user_id=user_id,
            template=Template(
                id=template_id, name="Template", goal=goal, blueprint=blueprint
            ),
        )

    return _make


@pytest.fixture
def make_result():
    """Factory: persisted result with competency percentages."""

    def _make(
        result_id: str,
        user_id: str,
        percentages: dict[str, float],
        template_id: str = "tpl-team",
        goal: str = "TEAM_FIT",
        overall: float = 70.0,
        completed_at: datetime | None = None,
        big_five: dict[str, float] | None = None,
        categories: dict[str, str] | None = None,
        team_metrics: dict | None = None,
        status: str = "COMPLETED",
    ):
        from talentfit.scoring.models import AssessmentResult

        categories = categories or {}
        return AssessmentResult.model_validate(
            {
                "id": result_id,
                "template_id": template_id,
                "user_id": user_id,
                "display_name": f"Candidate {user_id}",
                "status": status,
                "completed_at": completed_at or datetime(2026, 1, 1, tzinfo=UTC),
                "scoring": {
                    "goal": goal,
                    "overall_percentage": overall,
                    "overall_score": overall / 100,
                    "passed": overall >= 60,
                    "competency_scores": [
                        {
                            "competency_id": cid,
                            "competency_name": cid.title(),
                            "score": pct / 100,
                            "max_score": 1.0,
                            "questions_answered": 1,
                            "percentage": pct,
                            "big_five_category": categories.get(cid),
                        }
                        for cid, pct in percentages.items()
                    ],
                    "big_five_profile": big_five or {},
                    "team_fit_metrics": team_metrics,
                },
            }
        )

    return _make
