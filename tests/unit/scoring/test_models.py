"""Tests for scoring data models."""

from datetime import UTC, datetime

import pytest


class TestTemplate:
    """Test Template blueprint coercion."""

    def test_template_accepts_legacy_map(self):
        """A plain mapping blueprint should become a LegacyBlueprint."""
        from talentfit.scoring.blueprints import LegacyBlueprint
        from talentfit.scoring.models import Template

        template = Template(id="t-1", goal="JOB_FIT", blueprint={"strictnessLevel": 70})

        assert isinstance(template.blueprint, LegacyBlueprint)

    def test_template_round_trip_keeps_typed_blueprint(self):
        """Serialized templates should restore their typed blueprint."""
        from talentfit.scoring.blueprints import TeamFitBlueprint
        from talentfit.scoring.models import Template

        template = Template(
            id="t-1",
            goal="TEAM_FIT",
            blueprint=TeamFitBlueprint(team_id="team-1", saturation_threshold=0.8),
        )

        restored = Template.from_dict(template.to_dict())

        assert isinstance(restored.blueprint, TeamFitBlueprint)
        assert restored.blueprint.saturation_threshold == 0.8

    def test_template_rejects_unknown_goal(self):
        """Unknown goals should fail validation."""
        from pydantic import ValidationError

        from talentfit.scoring.models import Template

        with pytest.raises(ValidationError):
            Template(id="t-1", goal="CULTURE_FIT")


class TestIndicatorAndAnswer:
    """Test Indicator and Answer."""

    def test_indicator_weight_must_be_positive(self):
        """Indicator weight must be > 0."""
        from pydantic import ValidationError

        from talentfit.scoring.models import Indicator

        with pytest.raises(ValidationError):
            Indicator(id="i-1", weight=0)

    def test_answer_indicator_id_follows_question(self):
        """Answer.indicator_id comes from its question."""
        from talentfit.scoring.models import Answer, Question

        assert Answer(id="a", question=Question(id="q", indicator_id="i")).indicator_id == "i"
        assert Answer(id="a").indicator_id is None


class TestCompetencyScore:
    """Test CompetencyScore."""

    def test_average(self):
        """average is score / max_score, and 0 when nothing was answered."""
        from talentfit.scoring.models import CompetencyScore

        assert CompetencyScore(
            competency_id="c", competency_name="C", score=1.5, max_score=2.0
        ).average == pytest.approx(0.75)
        assert CompetencyScore(competency_id="c", competency_name="C").average == 0.0

    def test_percentage_bounds(self):
        """Percentages above 100 are rejected."""
        from pydantic import ValidationError

        from talentfit.scoring.models import CompetencyScore

        with pytest.raises(ValidationError):
            CompetencyScore(competency_id="c", competency_name="C", percentage=101.0)


class TestAssessmentResult:
    """Test AssessmentResult."""

    def test_label_prefers_display_name(self, make_result):
        """label falls back to the user id."""
        result = make_result("r-1", "u-1", {"a": 50.0})

        assert result.label == "Candidate u-1"
        result.display_name = None
        assert result.label == "u-1"

    def test_round_trip(self, make_result):
        """Results should survive to_dict/from_dict."""
        from talentfit.scoring.models import AssessmentResult

        result = make_result(
            "r-1",
            "u-1",
            {"a": 80.0},
            completed_at=datetime(2026, 3, 1, 12, 0, tzinfo=UTC),
        )

        restored = AssessmentResult.from_dict(result.to_dict())

        assert restored.completed_at == result.completed_at
        assert restored.scoring.score_for("a").percentage == 80.0
        assert restored.scoring.score_for("missing") is None

    def test_trait_key(self):
        """trait_key normalizes Big Five labels."""
        from talentfit.scoring.models import trait_key

        assert trait_key(" openness ") == "OPENNESS"
