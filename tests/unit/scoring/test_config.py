"""Tests for scoring configuration."""

import pytest


class TestScoringConfig:
    """Test ScoringConfig settings."""

    def test_scoring_config_has_defaults(self):
        """ScoringConfig should load with the documented defaults."""
        from talentfit.scoring.config import ScoringConfig

        config = ScoringConfig(_env_file=None)  # type: ignore[call-arg]

        assert config.onet_boost == 1.2
        assert config.esco_boost == 1.15
        assert config.big_five_boost == 1.1
        assert config.max_weight_multiplier == 3.0

        assert config.job_fit_base_threshold == 0.5
        assert config.job_fit_strictness_max_adjustment == 0.3
        assert config.default_strictness_level == 50
        assert config.min_questions_per_competency == 3

        assert config.confidence_margin_scale == 0.15
        assert config.confidence_weight_margin == 0.5
        assert config.confidence_weight_evidence == 0.3
        assert config.confidence_weight_coverage == 0.2
        assert config.confidence_high_threshold == 0.7
        assert config.confidence_medium_threshold == 0.4

        assert config.saturation_threshold == 0.75
        assert config.diversity_threshold == 0.5
        assert config.diversity_bonus == 1.1
        assert config.saturation_penalty == 0.9
        assert config.sigmoid_steepness == 10.0
        assert config.personality_weight == 0.1
        assert config.pass_threshold == 0.6
        assert config.min_diversity_ratio == 0.3
        assert config.small_team_threshold == 5
        assert config.small_team_adjustment == 0.1
        assert config.min_pass_threshold == 0.3

        assert config.skill_gap_threshold == 0.3
        assert config.team_fit_gap_proficiency == 3.0

        assert config.gap_coverage_threshold == 50.0
        assert config.min_candidates == 2
        assert config.max_candidates == 5

    def test_scoring_config_reads_from_environment_variables(self, monkeypatch):
        """ScoringConfig should read SCORING_* environment variables."""
        from talentfit.scoring.config import ScoringConfig

        monkeypatch.setenv("SCORING_ONET_BOOST", "1.5")
        monkeypatch.setenv("SCORING_PASS_THRESHOLD", "0.7")
        monkeypatch.setenv("SCORING_MAX_CANDIDATES", "4")

        config = ScoringConfig(_env_file=None)  # type: ignore[call-arg]

        assert config.onet_boost == 1.5
        assert config.pass_threshold == 0.7
        assert config.max_candidates == 4


class TestScoringConfigValidation:
    """Test ScoringConfig validators."""

    def test_confidence_weights_must_sum_to_one(self):
        """Confidence weights that do not sum to 1.0 should be rejected."""
        from pydantic import ValidationError

        from talentfit.scoring.config import ScoringConfig

        with pytest.raises(ValidationError, match="sum to 1.0"):
            ScoringConfig(
                _env_file=None,  # type: ignore[call-arg]
                confidence_weight_margin=0.6,
                confidence_weight_evidence=0.3,
                confidence_weight_coverage=0.2,
            )

    def test_boost_below_one_rejected(self):
        """Taxonomy boosts may only increase a weight."""
        from pydantic import ValidationError

        from talentfit.scoring.config import ScoringConfig

        with pytest.raises(ValidationError):
            ScoringConfig(_env_file=None, onet_boost=0.9)  # type: ignore[call-arg]

    def test_medium_threshold_above_high_rejected(self):
        """MEDIUM confidence threshold must not exceed HIGH."""
        from pydantic import ValidationError

        from talentfit.scoring.config import ScoringConfig

        with pytest.raises(ValidationError, match="confidence_medium_threshold"):
            ScoringConfig(
                _env_file=None,  # type: ignore[call-arg]
                confidence_medium_threshold=0.8,
                confidence_high_threshold=0.7,
            )

    def test_min_candidates_above_max_rejected(self):
        """min_candidates must not exceed max_candidates."""
        from pydantic import ValidationError

        from talentfit.scoring.config import ScoringConfig

        with pytest.raises(ValidationError, match="min_candidates"):
            ScoringConfig(
                _env_file=None,  # type: ignore[call-arg]
                min_candidates=4,
                max_candidates=3,
            )


class TestScoringConfigSingleton:
    """Test the scoring config singleton helpers."""

    def test_get_scoring_config_is_cached(self):
        """get_scoring_config should return one instance until reset."""
        from talentfit.scoring.config import get_scoring_config, reset_scoring_config

        reset_scoring_config()
        try:
            first = get_scoring_config()
            assert get_scoring_config() is first
        finally:
            reset_scoring_config()
