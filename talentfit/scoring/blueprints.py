"""Goal-specific template blueprints and their field resolution.

A template's blueprint is either a typed structure (``JobFitBlueprint`` or
``TeamFitBlueprint``) or a ``LegacyBlueprint`` wrapping an untyped
camelCase key/value map written by older tooling. Every field is read
through one ``resolve_*`` function that tries the typed form, then the
legacy map, then the documented default. Resolution never raises.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

LEGACY_ONET_SOC_CODE = "onetSocCode"
LEGACY_STRICTNESS_LEVEL = "strictnessLevel"
LEGACY_TEAM_ID = "teamId"
LEGACY_SATURATION_THRESHOLD = "saturationThreshold"
LEGACY_TARGET_ROLE = "targetRole"
LEGACY_ROLE_WEIGHTS = "roleCompetencyWeights"


class JobFitBlueprint(BaseModel):
    """Typed blueprint for job-fit templates."""

    strategy: Literal["JOB_FIT"] = "JOB_FIT"
    onet_soc_code: str | None = Field(
        default=None, description="O*NET SOC code used for benchmark lookup"
    )
    strictness_level: int | None = Field(
        default=None, description="Strictness 0-100; higher raises the pass threshold"
    )


class TeamFitBlueprint(BaseModel):
    """Typed blueprint for team-fit templates."""

    strategy: Literal["TEAM_FIT"] = "TEAM_FIT"
    team_id: str | None = Field(default=None, description="Team providing context")
    saturation_threshold: float | None = Field(
        default=None, description="Team saturation at or above which a competency is saturated"
    )
    target_role: str | None = Field(default=None, description="Role being hired for")
    role_competency_weights: dict[str, float] = Field(
        default_factory=dict,
        description="Per-competency weights keyed by competency id or name",
    )


class LegacyBlueprint(BaseModel):
    """Untyped key/value blueprint kept for templates saved by older tooling."""

    strategy: Literal["LEGACY"] = "LEGACY"
    values: dict[str, Any] = Field(default_factory=dict)


Blueprint = JobFitBlueprint | TeamFitBlueprint | LegacyBlueprint


def coerce_blueprint(raw: Any) -> Blueprint | None:
    """Turn a raw blueprint value into one of the blueprint variants.

    Dicts tagged ``JOB_FIT``/``TEAM_FIT`` become typed blueprints, dicts
    tagged ``LEGACY`` unwrap their ``values``, and any other mapping is
    treated as a legacy key/value map. A tagged dict that fails typed
    validation degrades to a legacy map so defaults apply.
    """
    if raw is None:
        return None
    if isinstance(raw, JobFitBlueprint | TeamFitBlueprint | LegacyBlueprint):
        return raw
    if not isinstance(raw, dict):
        logger.warning("Ignoring blueprint of unsupported type %s", type(raw).__name__)
        return None

    strategy = raw.get("strategy")
    try:
        if strategy == "JOB_FIT":
            return JobFitBlueprint.model_validate(raw)
        if strategy == "TEAM_FIT":
            return TeamFitBlueprint.model_validate(raw)
    except ValidationError as e:
        logger.warning(
            "Blueprint tagged %s failed validation, using defaults: %s",
            strategy,
            e.error_count(),
        )
        return LegacyBlueprint(values=dict(raw))

    if strategy == "LEGACY" and isinstance(raw.get("values"), dict):
        return LegacyBlueprint(values=dict(raw["values"]))
    return LegacyBlueprint(values=dict(raw))


def _legacy_value(blueprint: Blueprint | None, key: str) -> Any:
    if isinstance(blueprint, LegacyBlueprint):
        return blueprint.values.get(key)
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _clamp_strictness(value: float) -> int:
    return max(0, min(100, int(value)))


def resolve_onet_soc_code(blueprint: Blueprint | None) -> str | None:
    """O*NET SOC code from the blueprint, or None."""
    if isinstance(blueprint, JobFitBlueprint):
        code = blueprint.onet_soc_code
    else:
        code = _legacy_value(blueprint, LEGACY_ONET_SOC_CODE)
    if isinstance(code, str) and code.strip():
        return code.strip()
    return None


def resolve_strictness_level(blueprint: Blueprint | None, default: int = 50) -> int:
    """Strictness level clamped to 0-100, or ``default``."""
    if isinstance(blueprint, JobFitBlueprint) and blueprint.strictness_level is not None:
        return _clamp_strictness(blueprint.strictness_level)

    value = _legacy_value(blueprint, LEGACY_STRICTNESS_LEVEL)
    if _is_number(value):
        return _clamp_strictness(value)
    return default


def resolve_team_id(blueprint: Blueprint | None) -> str | None:
    """Team id from the blueprint, or None."""
    if isinstance(blueprint, TeamFitBlueprint):
        team_id = blueprint.team_id
    else:
        team_id = _legacy_value(blueprint, LEGACY_TEAM_ID)
        if team_id is not None and not (isinstance(team_id, str) and team_id.strip()):
            logger.warning("Invalid team id in legacy blueprint: %r", team_id)
            return None
    if team_id and team_id.strip():
        return team_id.strip()
    return None


def resolve_saturation_threshold(
    blueprint: Blueprint | None, default: float = 0.75
) -> float:
    """Saturation threshold in [0, 1], or ``default``."""
    if isinstance(blueprint, TeamFitBlueprint):
        value: Any = blueprint.saturation_threshold
    else:
        value = _legacy_value(blueprint, LEGACY_SATURATION_THRESHOLD)
    if _is_number(value) and 0.0 <= value <= 1.0:
        return float(value)
    return default


def resolve_target_role(blueprint: Blueprint | None) -> str | None:
    """Target role from the blueprint, or None."""
    if isinstance(blueprint, TeamFitBlueprint):
        role = blueprint.target_role
    else:
        role = _legacy_value(blueprint, LEGACY_TARGET_ROLE)
    if isinstance(role, str) and role.strip():
        return role.strip()
    return None


def resolve_role_weights(blueprint: Blueprint | None) -> dict[str, float]:
    """Positive per-competency role weights; empty when none are configured."""
    if isinstance(blueprint, TeamFitBlueprint):
        raw: Any = blueprint.role_competency_weights
    else:
        raw = _legacy_value(blueprint, LEGACY_ROLE_WEIGHTS)
    if not isinstance(raw, dict):
        return {}

    weights: dict[str, float] = {}
    for key, value in raw.items():
        if _is_number(value) and value > 0:
            weights[str(key)] = float(value)
        else:
            logger.debug("Skipping non-positive role weight %s=%r", key, value)
    return weights
