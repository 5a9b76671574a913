"""Main entry point for the job_filter command line."""

import argparse
import json
import sys
from datetime import UTC, date, datetime
from pathlib import Path

from pydantic import ValidationError

from job_filter import __version__
from job_filter.config.settings import Settings
from job_filter.utils.logging import configure_logging


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError("--as-of must be an ISO date (YYYY-MM-DD)") from e


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


def _json_default(value: object):
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    model_dump = getattr(value, "model_dump", None)
    if callable(model_dump):
        return model_dump(mode="json")
    return str(value)


def _write_json(path: Path, payload: object) -> None:
    path.write_text(
        json.dumps(payload, indent=2, default=_json_default),
        encoding="utf-8",
    )


def _load_records(path: Path, key: str) -> list[dict]:
    """Load a list of records, either top-level or under `key`."""
    from job_filter.utils.files import load_structured_file

    data = load_structured_file(path)
    if isinstance(data, dict):
        data = data.get(key, [])
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of {key}: {path}")
    return [item for item in data if isinstance(item, dict)]


def _load_claims(path: Path):
    from job_filter.ledger.models import Claim

    return [Claim.model_validate(item) for item in _load_records(path, "claims")]


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="job-filter",
        description="job_filter: requirement extraction, claims ledger and fit scoring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m job_filter score jobs/acme.yaml --profile profiles/profile.yaml
  python -m job_filter review data/parsed_claims.json
  python -m job_filter ledger data/claims.json --duplicates
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

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file (overrides LOG_FILE)",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="modes",
        description="Available commands",
    )

    # Score mode
    score_parser = subparsers.add_parser(
        "score",
        help="Score a job posting against a profile and claims",
    )
    score_parser.add_argument(
        "job",
        type=Path,
        help="Path to a job file (YAML/JSON)",
    )
    score_parser.add_argument(
        "--profile",
        type=Path,
        default=None,
        help="Path to profile file (defaults to SCORING_PROFILE_PATH)",
    )
    score_parser.add_argument(
        "--claims",
        type=Path,
        default=None,
        help="Path to claims ledger file (defaults to CLAIMS_PATH when it exists)",
    )
    score_parser.add_argument(
        "--as-of",
        type=_iso_date,
        default=None,
        help="Reference date for open-ended roles (YYYY-MM-DD)",
    )
    score_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )
    score_parser.add_argument(
        "--out-run-dir",
        type=Path,
        default=None,
        help="Directory for score_result.json (defaults to OUTPUT_DIR/runs/...)",
    )

    # Review mode
    review_parser = subparsers.add_parser(
        "review",
        help="Build claim review items from parsed resume claims",
    )
    review_parser.add_argument(
        "parsed_claims",
        type=Path,
        help="Path to parsed claims file (YAML/JSON)",
    )
    review_parser.add_argument(
        "--json",
        action="store_true",
        help="Print review items as JSON",
    )
    review_parser.add_argument(
        "--out-run-dir",
        type=Path,
        default=None,
        help="Directory for review_items.json (defaults to OUTPUT_DIR/runs/...)",
    )

    # Ledger mode
    ledger_parser = subparsers.add_parser(
        "ledger",
        help="Inspect a claims ledger",
    )
    ledger_parser.add_argument(
        "claims",
        type=Path,
        nargs="?",
        default=None,
        help="Path to claims ledger file (defaults to CLAIMS_PATH)",
    )
    view = ledger_parser.add_mutually_exclusive_group()
    view.add_argument(
        "--bundles",
        dest="view",
        action="store_const",
        const="bundles",
        help="Show experience bundles (default)",
    )
    view.add_argument(
        "--queue",
        dest="view",
        action="store_const",
        const="queue",
        help="Show claims awaiting review",
    )
    view.add_argument(
        "--duplicates",
        dest="view",
        action="store_const",
        const="duplicates",
        help="Show duplicate claim groups",
    )
    view.add_argument(
        "--validate",
        dest="view",
        action="store_const",
        const="validate",
        help="Validate every claim against the ledger",
    )

    return parser


def _run_score(parsed: argparse.Namespace, settings: Settings) -> int:
    from job_filter.scoring.profile import ProfileService
    from job_filter.scoring.service import FitScoringService

    profile_service = ProfileService()
    job = profile_service.load_job(parsed.job)
    profile = profile_service.load_profile(parsed.profile)
    for warning in profile_service.validate_profile(profile):
        print(f"Profile warning: {warning}", file=sys.stderr)

    claims_path = parsed.claims
    if claims_path is None and settings.claims_path.exists():
        claims_path = settings.claims_path
    claims = _load_claims(claims_path) if claims_path is not None else []

    scoring_service = FitScoringService()
    result = scoring_service.score_job(job, profile, claims, as_of=parsed.as_of)

    if parsed.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(scoring_service.format_result(result, job))

    run_dir = _resolve_run_dir(settings, prefix="score", out_run_dir=parsed.out_run_dir)
    output_path = run_dir / "score_result.json"
    _write_json(output_path, {"job": job.to_dict(), "result": result.to_dict()})
    print(f"Wrote: {output_path}", file=sys.stderr)
    return 0


def _run_review(parsed: argparse.Namespace, settings: Settings) -> int:
    from job_filter.review import (
        ParsedClaim,
        create_claim_review_items,
        group_claim_review_items,
    )

    parsed_claims = [
        ParsedClaim.model_validate(item) for item in _load_records(parsed.parsed_claims, "claims")
    ]
    items = create_claim_review_items(parsed_claims)

    if parsed.json:
        print(json.dumps([item.to_dict() for item in items], indent=2))
    else:
        for group in group_claim_review_items(items):
            print(f"{group.company} - {group.role} ({group.timeframe})")
            for item in group.items:
                metric = f" [{item.metric_value}{item.metric_unit}]" if item.metric_value else ""
                flags = "" if item.auto_use else " (manual only)"
                print(f"  {item.status:<12} {item.claim_text}{metric}{flags}")

    run_dir = _resolve_run_dir(settings, prefix="review", out_run_dir=parsed.out_run_dir)
    output_path = run_dir / "review_items.json"
    _write_json(output_path, [item.to_dict() for item in items])
    print(f"Wrote: {output_path}", file=sys.stderr)
    return 0


def _run_ledger(parsed: argparse.Namespace, settings: Settings) -> int:
    from job_filter.ledger import (
        ClaimValidationError,
        build_experience_bundles,
        claim_review_queue,
        find_duplicate_claim_groups,
        validate_claim,
    )

    claims_path = parsed.claims or settings.claims_path
    claims = _load_claims(claims_path)
    view = parsed.view or "bundles"

    if view == "queue":
        for claim in claim_review_queue(claims):
            label = claim.text or f"{claim.role} @ {claim.company}"
            print(f"{claim.confidence:.2f} {claim.id} {claim.type}: {label}")
        return 0

    if view == "duplicates":
        for group in find_duplicate_claim_groups(claims):
            print(
                f"{group.size}x {group.type} '{group.label}': keep {group.target_id}, "
                f"merge {', '.join(group.source_ids)}"
            )
        return 0

    if view == "validate":
        failures = 0
        for claim in claims:
            try:
                validate_claim(claim, claims)
            except ClaimValidationError as e:
                failures += 1
                print(f"{claim.id}: {e.code}: {e}")
        print(f"{len(claims) - failures}/{len(claims)} claims valid")
        return 1 if failures else 0

    for bundle in build_experience_bundles(claims):
        print(f"{bundle.label} [{bundle.verification_status}]")
        for line in bundle.responsibilities:
            print(f"  - {line}")
        if bundle.skills:
            print(f"  Skills: {', '.join(bundle.skills)}")
        if bundle.tools:
            print(f"  Tools: {', '.join(bundle.tools)}")
        for outcome in bundle.outcomes:
            metric = f" ({outcome.metric})" if outcome.metric else ""
            print(f"  * {outcome.description}{metric}")
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    # Load settings
    try:
        settings = Settings()
    except ValidationError as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Configure logging
    log_level = parsed.log_level or settings.log_level
    logger = configure_logging(
        level=log_level, log_file=parsed.log_file or settings.log_file
    )

    # If no mode specified, show help
    if parsed.mode is None:
        parser.print_help()
        return 0

    logger.info(f"job_filter v{__version__} running {parsed.mode}")

    handlers = {
        "score": _run_score,
        "review": _run_review,
        "ledger": _run_ledger,
    }
    try:
        return handlers[parsed.mode](parsed, settings)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        logger.error(f"Invalid input for {parsed.mode}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
