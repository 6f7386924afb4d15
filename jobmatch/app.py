import argparse
import json
from pathlib import Path
from typing import Any

from . import __version__
from .cleanup import deactivate_expired_jobs
from .config import ConfigError, Settings, load_env, load_settings
from .dedup import are_likely_duplicates, content_hash, generate_hash
from .ingest import bulk_import
from .logger import configure_logger
from .matching import MatchingEngine
from .models import JobContent, JobRecord, ProfileRecord
from .storage import load_job_records


def _read_json(path_str: str) -> Any:
    path = Path(path_str)
    if not path.exists():
        raise SystemExit(f"Input file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise SystemExit(f"Invalid JSON in {path}: {e}")


def _read_list(path_str: str, what: str) -> list:
    data = _read_json(path_str)
    if not isinstance(data, list):
        raise SystemExit(f"Expected a JSON list of {what} in {path_str}")
    return data


def _records(items: list, path_str: str, build):
    try:
        return [build(item) for item in items]
    except (AttributeError, TypeError, ValueError) as e:
        raise SystemExit(f"Invalid record in {path_str}: {e}")


def _db_path(args: argparse.Namespace, settings: Settings) -> Path:
    return Path(args.db) if args.db else settings.db_path


def cmd_hash(args: argparse.Namespace, settings: Settings) -> None:
    if args.description_file:
        path = Path(args.description_file)
        if not path.exists():
            raise SystemExit(f"Input file not found: {path}")
        description = path.read_text(encoding="utf-8")
    else:
        description = args.description or ""
    print(generate_hash(args.title, args.company, description, settings.description_prefix))


def cmd_check_duplicate(args: argparse.Namespace, settings: Settings) -> None:
    first = _read_json(args.first)
    second = _read_json(args.second)
    if not isinstance(first, dict) or not isinstance(second, dict):
        print("Invalid: both inputs must be JSON objects with title/company/description")
        raise SystemExit(2)
    job1 = JobContent.from_dict(first)
    job2 = JobContent.from_dict(second)
    print(f"Hash 1: {content_hash(job1, settings.description_prefix)}")
    print(f"Hash 2: {content_hash(job2, settings.description_prefix)}")
    duplicate = are_likely_duplicates(
        job1, job2, settings.fuzzy_threshold, settings.description_prefix
    )
    print(f"Duplicate: {'yes' if duplicate else 'no'}")


def cmd_import(args: argparse.Namespace, settings: Settings) -> None:
    rows = _read_list(args.input, "job rows")
    result = bulk_import(rows, _db_path(args, settings), fuzzy=args.fuzzy, settings=settings)
    print(f"Done. total={result.total} inserted={result.inserted} "
          f"deduplicated={result.deduplicated} errors={len(result.errors)}")
    for err in result.errors:
        print(f" - {err}")


def cmd_match(args: argparse.Namespace, settings: Settings) -> None:
    profile_data = _read_json(args.profile)
    if not isinstance(profile_data, dict):
        raise SystemExit(f"Expected a JSON object in {args.profile}")
    (profile,) = _records([profile_data], args.profile, ProfileRecord.from_dict)
    if args.jobs:
        jobs = _records(_read_list(args.jobs, "jobs"), args.jobs, JobRecord.from_dict)
    else:
        jobs = load_job_records(_db_path(args, settings))
    if not jobs:
        print("No jobs to match.")
        return

    engine = MatchingEngine()
    limit = args.limit if args.limit is not None else settings.match_limit
    matches = engine.find_best_matches(profile, jobs, limit=limit)
    output = []
    for job, score in matches:
        entry = job.to_dict()
        entry["match_score"] = round(score, 4)
        if args.explain:
            entry["breakdown"] = engine.explain_match(profile, job).to_dict()
        output.append(entry)
    print(json.dumps(output, indent=2, ensure_ascii=False))


def cmd_candidates(args: argparse.Namespace, settings: Settings) -> None:
    job_data = _read_json(args.job)
    if not isinstance(job_data, dict):
        raise SystemExit(f"Expected a JSON object in {args.job}")
    (job,) = _records([job_data], args.job, JobRecord.from_dict)
    profiles = _records(_read_list(args.profiles, "profiles"), args.profiles, ProfileRecord.from_dict)

    limit = args.limit if args.limit is not None else settings.match_limit
    matches = MatchingEngine().find_best_candidates(job, profiles, limit=limit)
    output = []
    for profile, score in matches:
        entry = profile.to_dict()
        entry["match_score"] = round(score, 4)
        output.append(entry)
    print(json.dumps(output, indent=2, ensure_ascii=False))


def cmd_cleanup(args: argparse.Namespace, settings: Settings) -> None:
    count = deactivate_expired_jobs(_db_path(args, settings))
    print(f"Deactivated {count} expired jobs.")


def cmd_list(args: argparse.Namespace, settings: Settings) -> None:
    db_path = _db_path(args, settings)
    if not db_path.exists():
        print(f"Store not found: {db_path}")
        return
    jobs = load_job_records(db_path, active_only=not args.all)
    if not jobs:
        print("No jobs in store.")
        return
    print(f"Found {len(jobs)} jobs in {db_path}:\n")
    for job in jobs:
        print(f"ID: {job.id}")
        print(f"  Company: {job.company}")
        print(f"  Title: {job.title}")
        print(f"  Location: {job.location or '-'} ({job.location_type.value})")
        print(f"  Skills: {', '.join(job.skills) or '-'}")
        print(f"  Posted: {job.posted_at.isoformat() if job.posted_at else '-'}")
        print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jobmatch", description="Job deduplication and matching")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    hsh = subparsers.add_parser("hash", help="Print the content hash of a posting")
    hsh.add_argument("--title", required=True, help="Job title")
    hsh.add_argument("--company", required=True, help="Company name")
    hsh.add_argument("--description", help="Job description text")
    hsh.add_argument("--description-file", help="Read the description from a file instead")
    hsh.set_defaults(func=cmd_hash)

    dup = subparsers.add_parser("check-duplicate", help="Check whether two posting JSON files are likely duplicates")
    dup.add_argument("--first", required=True, help="Path to first posting JSON")
    dup.add_argument("--second", required=True, help="Path to second posting JSON")
    dup.set_defaults(func=cmd_check_duplicate)

    imp = subparsers.add_parser("import", help="Bulk import a JSON list of postings, skipping duplicates")
    imp.add_argument("--input", required=True, help="Path to JSON list of import rows")
    imp.add_argument("--db", help="Path to SQLite job store (default: JOBMATCH_DB_PATH or data/jobs.db)")
    imp.add_argument("--fuzzy", action="store_true", help="Also skip same-company postings with near-identical titles")
    imp.set_defaults(func=cmd_import)

    mat = subparsers.add_parser("match", help="Rank jobs for a profile")
    mat.add_argument("--profile", required=True, help="Path to profile JSON")
    mat.add_argument("--jobs", help="Path to JSON list of jobs (default: read the job store)")
    mat.add_argument("--db", help="Path to SQLite job store")
    mat.add_argument("--limit", type=int, help="Max results (default: JOBMATCH_MATCH_LIMIT or 20)")
    mat.add_argument("--explain", action="store_true", help="Include the per-factor score breakdown")
    mat.set_defaults(func=cmd_match)

    cand = subparsers.add_parser("candidates", help="Rank profiles for a job")
    cand.add_argument("--job", required=True, help="Path to job JSON")
    cand.add_argument("--profiles", required=True, help="Path to JSON list of profiles")
    cand.add_argument("--limit", type=int, help="Max results (default: JOBMATCH_MATCH_LIMIT or 20)")
    cand.set_defaults(func=cmd_candidates)

    cln = subparsers.add_parser("cleanup", help="Deactivate expired jobs in the store")
    cln.add_argument("--db", help="Path to SQLite job store")
    cln.set_defaults(func=cmd_cleanup)

    lst = subparsers.add_parser("list", help="List stored jobs")
    lst.add_argument("--db", help="Path to SQLite job store")
    lst.add_argument("--all", action="store_true", help="Include inactive jobs")
    lst.set_defaults(func=cmd_list)
    return parser


def main(argv=None):
    # Load .env if present (JOBMATCH_DB_PATH, JOBMATCH_FUZZY_THRESHOLD, etc.)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    try:
        settings = load_settings()
    except ConfigError as e:
        raise SystemExit(f"Configuration error: {e}")
    configure_logger(level=settings.log_level, log_dir=settings.log_dir)

    if hasattr(args, "func"):
        args.func(args, settings)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
