"""In-memory workspace loaded from a YAML or JSON file.

A workspace holds everything needed to score sessions, build team
profiles and compare candidates locally: competencies, indicators,
questions, templates, sessions with their answers, teams, persisted
results and occupation benchmarks. ``Workspace`` implements every lookup
interface in ``talentfit.lookup.protocols``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from talentfit.lookup.resolvers import CachedCompetencyResolver, CachedIndicatorResolver
from talentfit.scoring.config import ScoringConfig, get_scoring_config
from talentfit.scoring.models import (
    Answer,
    AssessmentResult,
    BenchmarkProfile,
    Competency,
    Indicator,
    Question,
    ResultStatus,
    Session,
    Template,
)
from talentfit.scoring.service import ScoringService
from talentfit.team.aggregation import TeamProfileAggregator
from talentfit.team.models import Team, TeamMember, TeamProfile
from talentfit.team.service import TeamService

logger = logging.getLogger(__name__)


class AnswerRecord(BaseModel):
    """Answer as stored in a workspace file (question referenced by id)."""

    id: str
    question_id: str | None = None
    likert_value: int | None = None
    score: float | None = None
    skipped: bool = False


class SessionRecord(BaseModel):
    """Session as stored in a workspace file (template referenced by id)."""

    id: str
    user_id: str
    template_id: str
    display_name: str | None = None
    answers: list[AnswerRecord] = Field(default_factory=list)


class WorkspaceDocument(BaseModel):
    """Schema of a workspace file."""

    competencies: list[Competency] = Field(default_factory=list)
    indicators: list[Indicator] = Field(default_factory=list)
    questions: list[Question] = Field(default_factory=list)
    templates: list[Template] = Field(default_factory=list)
    sessions: list[SessionRecord] = Field(default_factory=list)
    teams: list[Team] = Field(default_factory=list)
    results: list[AssessmentResult] = Field(default_factory=list)
    benchmarks: list[BenchmarkProfile] = Field(default_factory=list)


class Workspace:
    """In-memory store implementing the scoring engine's lookup interfaces."""

    def __init__(
        self,
        document: WorkspaceDocument | None = None,
        config: ScoringConfig | None = None,
    ) -> None:
        document = document or WorkspaceDocument()
        self.config = config or get_scoring_config()
        self.competencies = {c.id: c for c in document.competencies}
        self.indicators = {i.id: i for i in document.indicators}
        self.questions = {q.id: q for q in document.questions}
        self.templates = {t.id: t for t in document.templates}
        self.sessions = {s.id: s for s in document.sessions}
        self.teams = {t.id: t for t in document.teams}
        self.results = {r.id: r for r in document.results}
        self.benchmarks = {b.code: b for b in document.benchmarks}

        self.competency_resolver = CachedCompetencyResolver(self)
        self.indicator_resolver = CachedIndicatorResolver(self)
        self.team_service = TeamService(
            TeamProfileAggregator(
                team_directory=self,
                result_repository=self,
                competency_resolver=self.competency_resolver,
                config=self.config,
            ),
            config=self.config,
        )

    # Resolvers

    def resolve_competencies(self, ids: Iterable[str]) -> dict[str, Competency]:
        return {cid: self.competencies[cid] for cid in ids if cid in self.competencies}

    def resolve_indicators(self, ids: Iterable[str]) -> dict[str, Indicator]:
        return {iid: self.indicators[iid] for iid in ids if iid in self.indicators}

    def get_benchmark_profile(self, code: str) -> BenchmarkProfile | None:
        return self.benchmarks.get(code)

    def get_team_profile(self, team_id: str) -> TeamProfile | None:
        return self.team_service.get_team_profile(team_id)

    # Directories and repositories

    def get_team(self, team_id: str) -> Team | None:
        return self.teams.get(team_id)

    def list_active_members(self, team_id: str) -> list[TeamMember]:
        team = self.teams.get(team_id)
        return team.active_members if team else []

    def get_template(self, template_id: str) -> Template | None:
        return self.templates.get(template_id)

    def find_results(self, ids: Iterable[str]) -> dict[str, AssessmentResult]:
        return {rid: self.results[rid] for rid in ids if rid in self.results}

    def find_completed_results_for_user(self, user_id: str) -> list[AssessmentResult]:
        completed = [
            r
            for r in self.results.values()
            if r.user_id == user_id and r.status == ResultStatus.COMPLETED
        ]
        return sorted(
            completed,
            key=lambda r: r.completed_at.timestamp() if r.completed_at else 0.0,
            reverse=True,
        )

    def add_result(self, result: AssessmentResult) -> None:
        """Store a result and drop cached team profiles it may affect."""
        self.results[result.id] = result
        for team in self.teams.values():
            if any(m.user_id == result.user_id for m in team.members):
                self.team_service.invalidate_team_cache(team.id)

    # Sessions

    def get_session(self, session_id: str) -> Session:
        """Session with its template attached.

        Raises:
            KeyError: If the session or its template is unknown.
        """
        record = self.sessions.get(session_id)
        if record is None:
            raise KeyError(f"Session not found: {session_id}")
        template = self.templates.get(record.template_id)
        if template is None:
            raise KeyError(
                f"Template {record.template_id} for session {session_id} not found"
            )
        return Session(
            id=record.id,
            user_id=record.user_id,
            template=template,
            display_name=record.display_name,
        )

    def answers_for(self, session_id: str) -> list[Answer]:
        """Session answers with their questions embedded where known."""
        record = self.sessions.get(session_id)
        if record is None:
            raise KeyError(f"Session not found: {session_id}")
        answers: list[Answer] = []
        for item in record.answers:
            question = self.questions.get(item.question_id) if item.question_id else None
            if item.question_id and question is None:
                logger.warning(
                    "Answer %s references unknown question %s", item.id, item.question_id
                )
            answers.append(
                Answer(
                    id=item.id,
                    question=question,
                    likert_value=item.likert_value,
                    score=item.score,
                    skipped=item.skipped,
                )
            )
        return answers

    def scoring_service(self) -> ScoringService:
        """Scoring service wired to this workspace's lookups."""
        return ScoringService.from_providers(
            competency_resolver=self.competency_resolver,
            indicator_resolver=self.indicator_resolver,
            benchmark_provider=self,
            team_profile_provider=self.team_service,
            config=self.config,
        )


class WorkspaceLoader:
    """Loads and validates workspace files."""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self.config = config or get_scoring_config()

    def load(self, path: Path | str) -> Workspace:
        """Load a workspace from YAML or JSON.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not valid YAML/JSON or not a mapping.
            pydantic.ValidationError: If the content does not match the schema.
        """
        workspace_path = Path(path)
        if not workspace_path.exists():
            raise FileNotFoundError(f"Workspace not found: {workspace_path}")

        suffix = workspace_path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            data = self._load_yaml(workspace_path)
        elif suffix == ".json":
            data = self._load_json(workspace_path)
        else:
            data = self._load_unknown(workspace_path)

        try:
            document = WorkspaceDocument.model_validate(data)
        except ValidationError:
            logger.error("Workspace %s failed validation", workspace_path)
            raise

        logger.info(
            "Loaded workspace %s: %d competencies, %d sessions, %d teams, %d results",
            workspace_path,
            len(document.competencies),
            len(document.sessions),
            len(document.teams),
            len(document.results),
        )
        return Workspace(document, config=self.config)

    def _load_yaml(self, path: Path) -> dict:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML workspace: {path}") from e
        return self._require_mapping(data, path)

    def _load_json(self, path: Path) -> dict:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON workspace: {path}") from e
        return self._require_mapping(data, path)

    def _load_unknown(self, path: Path) -> dict:
        """Auto-detect the format when the file extension is unknown."""
        raw = path.read_text(encoding="utf-8")
        if raw.lstrip().startswith("{"):
            try:
                return self._require_mapping(json.loads(raw), path)
            except json.JSONDecodeError:
                pass

        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid workspace format: {path}") from e
        return self._require_mapping(data, path)

    @staticmethod
    def _require_mapping(data: object, path: Path) -> dict:
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Workspace must be a mapping/dict: {path}")
        return data
