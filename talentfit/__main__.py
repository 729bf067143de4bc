"""Main entry point for TalentFit."""

import argparse
import json
import sys
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from talentfit import __version__
from talentfit.config.settings import Settings
from talentfit.utils.logging import RunLogBuffer, configure_logging


def _timestamp_run_id(prefix: str) -> str:
    timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{timestamp}"


def _resolve_run_dir(
    settings: Settings, *, prefix: str, out_run_dir: Path | None
) -> Path:
    if out_run_dir is not None:
        run_dir = out_run_dir
    else:
        run_dir = settings.output_dir / "runs" / _timestamp_run_id(prefix)
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def _write_json(path: Path, payload: object) -> None:
    def _default(value: object):
        to_dict = getattr(value, "to_dict", None)
        if callable(to_dict):
            return to_dict()
        model_dump = getattr(value, "model_dump", None)
        if callable(model_dump):
            return model_dump(mode="json")
        return str(value)

    path.write_text(
        json.dumps(payload, indent=2, default=_default, ensure_ascii=False),
        encoding="utf-8",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="talentfit",
        description="TalentFit: competency-based job-fit and team-fit scoring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m talentfit score --workspace data/workspace.yaml --session s-1
  python -m talentfit team-profile --workspace data/workspace.yaml --team team-1
  python -m talentfit compare --workspace data/workspace.yaml --template t-2 \\
      --results r-1 r-2 r-3
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="commands",
        description="Available commands",
    )

    def _add_common(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--workspace",
            type=Path,
            default=None,
            help="Workspace file (YAML or JSON); defaults to settings",
        )
        sub.add_argument(
            "--out-run-dir",
            type=Path,
            default=None,
            help="Optional output run directory (defaults under artifacts/runs/)",
        )

    score_parser = subparsers.add_parser(
        "score",
        help="Score one session (session answers -> result.json)",
    )
    _add_common(score_parser)
    score_parser.add_argument("--session", required=True, help="Session id to score")
    score_parser.add_argument(
        "--locale",
        choices=["en", "ru"],
        default=None,
        help="Locale for proficiency labels (defaults to settings)",
    )

    team_parser = subparsers.add_parser(
        "team-profile",
        help="Aggregate a team's competency saturation and personality",
    )
    _add_common(team_parser)
    team_parser.add_argument("--team", required=True, help="Team id")

    compare_parser = subparsers.add_parser(
        "compare",
        help="Compare 2-5 team-fit results taken on one template",
    )
    _add_common(compare_parser)
    compare_parser.add_argument("--template", required=True, help="Template id")
    compare_parser.add_argument(
        "--results",
        nargs="+",
        required=True,
        help="Result ids to compare",
    )

    return parser


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    try:
        settings = Settings()
    except ValidationError as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    log_level = parsed.log_level or settings.log_level
    logger = configure_logging(level=log_level)
    logger.debug("TalentFit v%s starting", __version__)

    if parsed.mode is None:
        parser.print_help()
        return 0

    run_log = RunLogBuffer()
    try:
        return _run_command(parsed, settings, run_log)
    finally:
        run_log.close()


def _run_command(
    parsed: argparse.Namespace, settings: Settings, run_log: RunLogBuffer
) -> int:
    from talentfit.lookup.workspace import WorkspaceLoader

    workspace_path = parsed.workspace or settings.default_workspace_path
    try:
        workspace = WorkspaceLoader().load(workspace_path)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading workspace: {e}", file=sys.stderr)
        return 1

    if parsed.mode == "score":
        try:
            session = workspace.get_session(parsed.session)
            answers = workspace.answers_for(parsed.session)
        except KeyError as e:
            print(f"Error: {e.args[0]}", file=sys.stderr)
            return 1

        scoring_service = workspace.scoring_service()
        result = scoring_service.evaluate(session, answers)
        workspace.add_result(result)

        print(scoring_service.format_result(result, locale=parsed.locale or settings.locale))

        run_dir = _resolve_run_dir(
            settings, prefix="score", out_run_dir=parsed.out_run_dir
        )
        _write_json(run_dir / "result.json", result)
        run_log.write_to(run_dir)
        print(f"Wrote: {run_dir / 'result.json'}")
        return 0

    if parsed.mode == "team-profile":
        profile = workspace.get_team_profile(parsed.team)
        if profile is None:
            print(f"Error: team {parsed.team} not found or not active", file=sys.stderr)
            return 1

        print(f"Team: {profile.team_name or profile.team_id} ({profile.team_size} members)")
        for competency_id, saturation in sorted(
            profile.saturation.items(), key=lambda item: item[1]
        ):
            name = profile.competency_names.get(competency_id, competency_id)
            marker = " (gap)" if competency_id in profile.skill_gaps else ""
            print(f"  - {name}: saturation={saturation:.2f}{marker}")
        if profile.personality_traits:
            traits = ", ".join(
                f"{trait}={value:.0f}" for trait, value in profile.personality_traits.items()
            )
            print(f"Personality: {traits}")

        run_dir = _resolve_run_dir(
            settings, prefix="team", out_run_dir=parsed.out_run_dir
        )
        _write_json(run_dir / "team_profile.json", profile)
        run_log.write_to(run_dir)
        print(f"Wrote: {run_dir / 'team_profile.json'}")
        return 0

    if parsed.mode == "compare":
        from talentfit.comparison import CandidateComparator, ComparisonInputError

        comparator = CandidateComparator(
            result_repository=workspace,
            template_repository=workspace,
            team_profile_provider=workspace.team_service,
        )
        try:
            comparison = comparator.compare_results(parsed.results, parsed.template)
        except ComparisonInputError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        print(
            f"Template: {comparison.template_name or comparison.template_id} "
            f"(team={comparison.team_id or '-'}, size={comparison.team_size})"
        )
        for candidate in sorted(comparison.candidates, key=lambda c: c.overall_rank):
            print(
                f"  #{candidate.overall_rank} {candidate.display_name}: "
                f"{candidate.overall_percentage:.1f}% "
                f"{'PASSED' if candidate.passed else 'NOT PASSED'} "
                f"(diversity rank {candidate.diversity_rank}, "
                f"personality rank {candidate.personality_rank})"
            )
        if comparison.gap_coverage:
            print("Team gaps:")
            for gap in comparison.gap_coverage:
                covered = len(gap.candidate_coverage)
                print(f"  - {gap.competency_name}: covered by {covered} candidate(s)")
        for pair in comparison.complementarity:
            print(
                f"  {pair.candidate_a_name} + {pair.candidate_b_name}: "
                f"{pair.combined_gaps_covered}/{pair.total_gaps} gaps "
                f"({pair.complementarity_score:.0f}%)"
            )

        run_dir = _resolve_run_dir(
            settings, prefix="compare", out_run_dir=parsed.out_run_dir
        )
        _write_json(run_dir / "comparison.json", comparison)
        run_log.write_to(run_dir)
        print(f"Wrote: {run_dir / 'comparison.json'}")
        return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
