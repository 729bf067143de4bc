"""End-to-end tests: score sessions, build team profiles, compare candidates."""

import pytest

pytestmark = pytest.mark.integration


@pytest.fixture
def workspace(scoring_config, example_workspace_path):
    from talentfit.lookup.workspace import WorkspaceLoader

    return WorkspaceLoader(scoring_config).load(example_workspace_path)


class TestJobFitFlow:
    """Score the example job-fit session."""

    def test_job_fit_session(self, workspace):
        """The example candidate passes with benchmark coverage 2/3."""
        service = workspace.scoring_service()
        session = workspace.get_session("s-job-1")

        result = service.evaluate(session, workspace.answers_for("s-job-1"))

        scoring = result.scoring
        assert [s.competency_id for s in scoring.competency_scores] == ["comm", "sql", "ops"]
        # (1.2 * 11/12 + 10/12 + 5/8) / 3.2
        expected = 100.0 * (1.2 * 11 / 12 + 10 / 12 + 5 / 8) / 3.2
        assert scoring.overall_percentage == pytest.approx(expected)
        assert scoring.passed is True

        metrics = scoring.job_fit_metrics
        assert metrics.onet_soc_code == "15-1252.00"
        assert metrics.coverage_factor == pytest.approx(2 / 3)
        assert metrics.evidence_factor == pytest.approx(2 / 3)
        assert scoring.score_for("comm").benchmark_score == pytest.approx(80.0)
        assert scoring.score_for("sql").benchmark_score == pytest.approx(90.0)
        assert scoring.score_for("ops").insufficient_evidence is True
        assert result.questions_answered == 8
        assert result.questions_skipped == 1


class TestTeamFlow:
    """Team profile, team-fit scoring and comparison on the example team."""

    def test_team_profile(self, workspace):
        """The platform team lacks SQL and averages its members' traits."""
        profile = workspace.get_team_profile("team-platform")

        assert profile.team_size == 3
        assert profile.saturation["comm"] == pytest.approx(2 / 3 * 0.7)
        assert profile.saturation["lead"] == pytest.approx(2 / 3 * 0.8)
        assert profile.saturation["sql"] == pytest.approx(0.1)
        assert profile.skill_gaps == ["sql"]
        assert profile.personality_traits == {
            "EXTRAVERSION": pytest.approx(60.0),
            "CONSCIENTIOUSNESS": pytest.approx(85.0),
        }

    def test_team_fit_session_uses_team_context(self, workspace):
        """Team-fit scoring reads the team from the legacy blueprint."""
        service = workspace.scoring_service()
        session = workspace.get_session("s-team-1")

        result = service.evaluate(session, workspace.answers_for("s-team-1"))

        metrics = result.scoring.team_fit_metrics
        assert metrics.team_id == "team-platform"
        assert metrics.target_role == "Backend Engineer"
        assert metrics.team_context_available is True
        assert metrics.team_size == 3
        # small team: 0.6 - 0.1
        assert metrics.pass_threshold == pytest.approx(0.5)
        # sql and ops are team gaps, comm is below the diversity band
        assert metrics.gap_count == 3
        assert metrics.personality_compatibility is not None

    def test_new_result_refreshes_team_profile(self, workspace):
        """Scoring a team member updates the cached team profile."""
        workspace.get_team_profile("team-platform")
        service = workspace.scoring_service()
        session = workspace.get_session("s-team-1").model_copy(update={"user_id": "u-carol"})

        workspace.add_result(service.evaluate(session, workspace.answers_for("s-team-1")))

        profile = workspace.get_team_profile("team-platform")
        assert profile.saturation["sql"] > 0.1
        assert "ops" in profile.saturation

    def test_compare_candidates(self, workspace):
        """Two candidates covering different gaps complement fully."""
        from talentfit.comparison import CandidateComparator

        comparator = CandidateComparator(
            result_repository=workspace,
            template_repository=workspace,
            team_profile_provider=workspace.team_service,
            config=workspace.config,
        )

        comparison = comparator.compare_results(["r-cand-3", "r-cand-4"], "tpl-backend-team")

        assert comparison.team_id == "team-platform"
        assert [g.competency_id for g in comparison.gap_coverage] == ["sql", "ops", "comm"]
        by_id = {c.result_id: c for c in comparison.candidates}
        assert by_id["r-cand-3"].overall_rank == 1
        assert by_id["r-cand-4"].personality_rank == 1
        assert by_id["r-cand-3"].gaps_covered == ["sql", "comm"]
        assert by_id["r-cand-4"].gaps_covered == ["ops", "comm"]
        pair = comparison.complementarity[0]
        assert pair.combined_gaps_covered == 3
        assert pair.complementarity_score == pytest.approx(100.0)
