"""Tests for team-fit candidate comparison."""

from types import SimpleNamespace

import pytest

TEAM_TEMPLATE = {
    "id": "tpl-team",
    "name": "Backend hire",
    "goal": "TEAM_FIT",
    "blueprint": {"strategy": "TEAM_FIT", "team_id": "team-1", "target_role": "Backend"},
}
JOB_TEMPLATE = {"id": "tpl-job", "name": "Job", "goal": "JOB_FIT"}


def _comparator(workspace, profile=None):
    from talentfit.comparison.service import CandidateComparator

    return CandidateComparator(
        result_repository=workspace,
        template_repository=workspace,
        team_profile_provider=SimpleNamespace(get_team_profile=lambda team_id: profile),
        config=workspace.config,
    )


def _profile(saturation, members=4):
    from talentfit.team.models import TeamMemberProfile, TeamProfile

    return TeamProfile(
        team_id="team-1",
        members=[TeamMemberProfile(user_id=f"m-{i}") for i in range(members)],
        saturation=saturation,
    )


class TestComparisonValidation:
    """Test input rules."""

    @pytest.mark.parametrize("count", [1, 6])
    def test_candidate_count_out_of_range(self, catalog, make_result, count):
        """Fewer than 2 or more than 5 ids are rejected."""
        from talentfit.comparison import ComparisonInputError

        results = [make_result(f"r-{i}", f"u-{i}", {"a": 50.0}) for i in range(count)]
        workspace = catalog(templates=[TEAM_TEMPLATE], results=results)

        with pytest.raises(ComparisonInputError) as exc_info:
            _comparator(workspace).compare_results([r.id for r in results], "tpl-team")

        assert exc_info.value.rule == "candidate_count"

    def test_duplicate_ids_rejected(self, catalog, make_result):
        """The same id twice is rejected."""
        from talentfit.comparison import ComparisonInputError

        workspace = catalog(
            templates=[TEAM_TEMPLATE], results=[make_result("r-1", "u-1", {"a": 50.0})]
        )

        with pytest.raises(ComparisonInputError) as exc_info:
            _comparator(workspace).compare_results(["r-1", "r-1"], "tpl-team")

        assert exc_info.value.rule == "duplicate_ids"

    def test_unknown_result_rejected(self, catalog, make_result):
        """Missing result ids are reported."""
        from talentfit.comparison import ComparisonInputError

        workspace = catalog(
            templates=[TEAM_TEMPLATE], results=[make_result("r-1", "u-1", {"a": 50.0})]
        )

        with pytest.raises(ComparisonInputError, match="r-404") as exc_info:
            _comparator(workspace).compare_results(["r-1", "r-404"], "tpl-team")

        assert exc_info.value.rule == "results_not_found"

    def test_results_spanning_templates_rejected(self, catalog, make_result):
        """Results from another template are rejected."""
        from talentfit.comparison import ComparisonInputError

        workspace = catalog(
            templates=[TEAM_TEMPLATE],
            results=[
                make_result("r-1", "u-1", {"a": 50.0}),
                make_result("r-2", "u-2", {"a": 50.0}, template_id="tpl-other"),
            ],
        )

        with pytest.raises(ComparisonInputError) as exc_info:
            _comparator(workspace).compare_results(["r-1", "r-2"], "tpl-team")

        assert exc_info.value.rule == "template_mismatch"

    def test_non_team_fit_template_rejected(self, catalog, make_result):
        """Only TEAM_FIT templates can be compared."""
        from talentfit.comparison import ComparisonInputError

        workspace = catalog(
            templates=[JOB_TEMPLATE],
            results=[
                make_result("r-1", "u-1", {"a": 50.0}, template_id="tpl-job", goal="JOB_FIT"),
                make_result("r-2", "u-2", {"a": 50.0}, template_id="tpl-job", goal="JOB_FIT"),
            ],
        )

        with pytest.raises(ComparisonInputError, match="TEAM_FIT") as exc_info:
            _comparator(workspace).compare_results(["r-1", "r-2"], "tpl-job")

        assert exc_info.value.rule == "template_goal"

    def test_unknown_template_rejected(self, catalog, make_result):
        """A template that does not exist is rejected."""
        from talentfit.comparison import ComparisonInputError

        workspace = catalog(
            results=[
                make_result("r-1", "u-1", {"a": 50.0}),
                make_result("r-2", "u-2", {"a": 50.0}),
            ]
        )

        with pytest.raises(ComparisonInputError) as exc_info:
            _comparator(workspace).compare_results(["r-1", "r-2"], "tpl-team")

        assert exc_info.value.rule == "template_not_found"


class TestComparisonRanking:
    """Test candidate ranks."""

    def test_overall_rank_descending_with_stable_ties(self, catalog, make_result):
        """Higher overall ranks first; ties keep input order."""
        workspace = catalog(
            templates=[TEAM_TEMPLATE],
            results=[
                make_result("r-1", "u-1", {"a": 50.0}, overall=60.0),
                make_result("r-2", "u-2", {"a": 50.0}, overall=80.0),
                make_result("r-3", "u-3", {"a": 50.0}, overall=60.0),
            ],
        )

        comparison = _comparator(workspace).compare_results(["r-1", "r-2", "r-3"], "tpl-team")

        ranks = {c.result_id: c.overall_rank for c in comparison.candidates}
        assert ranks == {"r-2": 1, "r-1": 2, "r-3": 3}

    def test_missing_metrics_rank_last(self, catalog, make_result):
        """Candidates without team metrics rank last on diversity."""
        metrics = {
            "diversity_ratio": 0.6,
            "saturation_ratio": 0.2,
            "team_fit_multiplier": 1.05,
            "personality_compatibility": 0.8,
        }
        workspace = catalog(
            templates=[TEAM_TEMPLATE],
            results=[
                make_result("r-1", "u-1", {"a": 50.0}),
                make_result("r-2", "u-2", {"a": 50.0}, team_metrics=metrics),
            ],
        )

        comparison = _comparator(workspace).compare_results(["r-1", "r-2"], "tpl-team")

        by_id = {c.result_id: c for c in comparison.candidates}
        assert by_id["r-2"].diversity_rank == 1
        assert by_id["r-1"].diversity_rank == 2
        assert by_id["r-2"].personality_rank == 1
        assert by_id["r-2"].diversity_ratio == 0.6


class TestGapCoverage:
    """Test gap coverage and complementarity."""

    def test_two_candidates_covering_both_gaps(self, catalog, make_result):
        """Both candidates covering both gaps give complementarity 100."""
        workspace = catalog(
            templates=[TEAM_TEMPLATE],
            results=[
                make_result("r-1", "u-1", {"sql": 80.0, "ops": 50.0, "comm": 90.0}),
                make_result("r-2", "u-2", {"sql": 60.0, "ops": 70.0, "comm": 10.0}),
            ],
        )
        profile = _profile({"sql": 0.1, "ops": 0.4, "comm": 0.9})

        comparison = _comparator(workspace, profile).compare_results(
            ["r-1", "r-2"], "tpl-team"
        )

        assert [g.competency_id for g in comparison.gap_coverage] == ["sql", "ops"]
        assert len(comparison.complementarity) == 1
        pair = comparison.complementarity[0]
        assert pair.complementarity_score == pytest.approx(100.0)
        assert pair.combined_gaps_covered == 2
        assert pair.total_gaps == 2
        sql = comparison.gap_coverage[0]
        assert sql.best_candidate_id == "r-1"
        assert comparison.team_context_available is True
        assert comparison.team_size == 4
        assert comparison.target_role == "Backend"

    def test_competency_absent_from_team_is_a_gap(self, catalog, make_result):
        """Competencies the team lacks count as saturation 0."""
        workspace = catalog(
            templates=[TEAM_TEMPLATE],
            results=[
                make_result("r-1", "u-1", {"new": 40.0}),
                make_result("r-2", "u-2", {"new": 55.0}),
            ],
        )
        profile = _profile({"comm": 0.9})

        comparison = _comparator(workspace, profile).compare_results(
            ["r-1", "r-2"], "tpl-team"
        )

        gap = comparison.gap_coverage[0]
        assert gap.competency_id == "new"
        assert gap.team_saturation == 0.0
        assert gap.candidate_coverage == {"r-2": 55.0}
        by_id = {c.result_id: c for c in comparison.candidates}
        assert by_id["r-1"].gaps_covered == []
        assert by_id["r-2"].gaps_covered == ["new"]
        assert comparison.complementarity[0].complementarity_score == pytest.approx(100.0)

    def test_partial_complementarity(self, catalog, make_result):
        """Pair scores count the union of covered gaps."""
        workspace = catalog(
            templates=[TEAM_TEMPLATE],
            results=[
                make_result("r-1", "u-1", {"sql": 80.0, "ops": 10.0, "ml": 10.0}),
                make_result("r-2", "u-2", {"sql": 10.0, "ops": 90.0, "ml": 10.0}),
            ],
        )
        profile = _profile({"sql": 0.0, "ops": 0.0, "ml": 0.0})

        comparison = _comparator(workspace, profile).compare_results(
            ["r-1", "r-2"], "tpl-team"
        )

        pair = comparison.complementarity[0]
        assert pair.combined_gaps_covered == 2
        assert pair.complementarity_score == pytest.approx(200.0 / 3.0)

    @pytest.mark.parametrize("count", [2, 3, 4, 5])
    def test_pair_count(self, catalog, make_result, count):
        """n candidates always produce n(n-1)/2 pairs."""
        results = [make_result(f"r-{i}", f"u-{i}", {"a": 50.0}) for i in range(count)]
        workspace = catalog(templates=[TEAM_TEMPLATE], results=results)

        comparison = _comparator(workspace).compare_results(
            [r.id for r in results], "tpl-team"
        )

        assert len(comparison.complementarity) == count * (count - 1) // 2

    def test_without_team_context_there_are_no_gaps(self, catalog, make_result):
        """No team profile means no gaps and zero complementarity."""
        workspace = catalog(
            templates=[TEAM_TEMPLATE],
            results=[
                make_result("r-1", "u-1", {"a": 90.0}),
                make_result("r-2", "u-2", {"a": 10.0}),
            ],
        )

        comparison = _comparator(workspace, None).compare_results(["r-1", "r-2"], "tpl-team")

        assert comparison.gap_coverage == []
        assert comparison.team_context_available is False
        assert comparison.team_size == 0
        assert comparison.complementarity[0].complementarity_score == 0.0
        competency = comparison.competency_comparison[0]
        assert competency.best_candidate_id == "r-1"
        assert competency.is_team_gap is False

    def test_empty_team_profile_is_not_team_context(self, catalog, make_result):
        """A profile without saturation data does not count as team context."""
        workspace = catalog(
            templates=[TEAM_TEMPLATE],
            results=[
                make_result("r-1", "u-1", {"a": 90.0}),
                make_result("r-2", "u-2", {"a": 10.0}),
            ],
        )

        comparison = _comparator(workspace, _profile({}, members=0)).compare_results(
            ["r-1", "r-2"], "tpl-team"
        )

        assert comparison.team_context_available is False
        assert comparison.team_id == "team-1"
        assert comparison.gap_coverage == []

    def test_to_dict(self, catalog, make_result):
        """Comparisons serialize to plain dictionaries."""
        workspace = catalog(
            templates=[TEAM_TEMPLATE],
            results=[
                make_result("r-1", "u-1", {"a": 90.0}),
                make_result("r-2", "u-2", {"a": 10.0}),
            ],
        )

        payload = _comparator(workspace).compare_results(["r-1", "r-2"], "tpl-team").to_dict()

        assert payload["template_id"] == "tpl-team"
        assert len(payload["candidates"]) == 2
        assert payload["complementarity"][0]["total_gaps"] == 0
