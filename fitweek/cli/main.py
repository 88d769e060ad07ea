"""
Command-line interface to the weekly plan, points and progress services.

Every command works for one user, identified by the opaque id the
authentication provider hands out. The storage backend is chosen from the
central config; when it is not configured the CLI says so and exits.
"""
import argparse
import json
import sys
from datetime import date
from pathlib import Path

import psycopg
import requests

from fitweek.config import settings
from fitweek.core import diet, profile as profile_service, progress, workout_log
from fitweek.core.dashboard import build_summary
from fitweek.core.exercises import GOALS, exercise_names
from fitweek.core.level import level_from_total_points
from fitweek.core.validation import ValidationError
from fitweek.core.week_service import ensure_current_week, load_current_week
from fitweek.data_access.backend import build_backend
from fitweek.infra import log_utils

# Failures reported to the user instead of a traceback
REPORTED_ERRORS = (ValidationError, LookupError, OSError, psycopg.Error, requests.RequestException)


def _parse_date(value: str) -> date:
    return date.fromisoformat(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fitweek", description="Weekly workout and diet tracker.")
    parser.add_argument("--date", type=_parse_date, default=None, help="Act as if today were YYYY-MM-DD.")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("level", help="Show the level for a point total.")
    p.add_argument("points", type=float)

    for name, help_text in (
        ("ensure-week", "Create this week's plan if needed and print it."),
        ("summary", "Show this week's progress summary."),
        ("complete-day", "Complete today's workout."),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--user", required=True)

    p = sub.add_parser("toggle-item", help="Tick or untick one of today's exercises.")
    p.add_argument("--user", required=True)
    p.add_argument("item", type=int, help="1-based exercise position.")

    p = sub.add_parser("replace-item", help="Swap one of today's exercises for a library one.")
    p.add_argument("--user", required=True)
    p.add_argument("item", type=int, help="1-based exercise position.")
    p.add_argument("exercise", choices=exercise_names())

    p = sub.add_parser("add-item", help="Add a custom exercise to today's workout.")
    p.add_argument("--user", required=True)
    p.add_argument("name")
    p.add_argument("--link", default="")

    p = sub.add_parser("toggle-diet", help="Tick or untick a day on the diet checklist.")
    p.add_argument("--user", required=True)
    p.add_argument("day", type=int, help="1-based day of the week (1 = Monday).")

    p = sub.add_parser("measure", help="Record today's body measurements.")
    p.add_argument("--user", required=True)
    p.add_argument("weight", help=progress.METRIC_LABELS["weightKg"])
    for field in progress.OPTIONAL_FIELDS:
        p.add_argument(f"--{field}", dest=field, default=None, help=progress.METRIC_LABELS[field])

    p = sub.add_parser("onboard", help="Answer the onboarding questionnaire.")
    p.add_argument("--user", required=True)
    p.add_argument("--age", required=True)
    p.add_argument("--height", dest="heightCm", required=True)
    p.add_argument("--weight", dest="weightKg", required=True)
    p.add_argument("--goal", choices=GOALS, required=True)
    p.add_argument("--workouts", dest="workoutsPerWeek", type=int, required=True)
    p.add_argument("--muscle-group", dest="muscleGroups", action="append", default=[])
    p.add_argument("--level", required=True)
    p.add_argument("--playlist", dest="youtubePlaylistUrl", default="")

    p = sub.add_parser("settings", help="Update goal, weight and playlist.")
    p.add_argument("--user", required=True)
    p.add_argument("--goal", choices=GOALS, required=True)
    p.add_argument("--weight", required=True)
    p.add_argument("--playlist", default="")

    p = sub.add_parser("upload-diet", help="Upload a diet PDF.")
    p.add_argument("--user", required=True)
    p.add_argument("pdf", type=Path)

    return parser


def run(args: argparse.Namespace):
    """Execute one parsed command and return a JSON-serialisable result."""
    if args.command == "level":
        return level_from_total_points(args.points)._asdict()

    backend = build_backend(settings)
    if not backend.configured:
        raise SystemExit(f"Storage backend '{settings.STORE_BACKEND}' is not configured.")
    dal = backend.dal
    today = args.date

    if args.command == "ensure-week":
        return ensure_current_week(dal, args.user, profile_service.get_profile(dal, args.user) or {}, today=today)
    if args.command == "summary":
        return build_summary(
            load_current_week(dal, args.user, today),
            profile_service.get_profile(dal, args.user),
            progress.load_progress_entries(dal, args.user),
        )
    if args.command == "toggle-item":
        return workout_log.toggle_item(dal, args.user, args.item - 1, today=today)
    if args.command == "complete-day":
        return workout_log.complete_day(dal, args.user, today=today)
    if args.command == "replace-item":
        return workout_log.replace_item(dal, args.user, args.item - 1, args.exercise, today=today)
    if args.command == "add-item":
        return workout_log.add_custom_item(dal, args.user, args.name, args.link, today=today)
    if args.command == "toggle-diet":
        return diet.toggle_diet_day(dal, args.user, args.day - 1, today=today)
    if args.command == "measure":
        extras = {field: getattr(args, field) for field in progress.OPTIONAL_FIELDS}
        return progress.record_measurement(dal, args.user, args.weight, extras, today=today)
    if args.command == "onboard":
        answers = {
            key: getattr(args, key)
            for key in ("age", "heightCm", "weightKg", "goal", "workoutsPerWeek", "muscleGroups", "level", "youtubePlaylistUrl")
        }
        return profile_service.complete_onboarding(dal, args.user, answers, today=today)
    if args.command == "settings":
        return profile_service.update_settings(dal, args.user, args.goal, args.weight, args.playlist)
    if args.command == "upload-diet":
        return {"url": diet.upload_diet_pdf(dal, backend.blobs, args.user, args.pdf.read_bytes())}
    raise ValueError(f"Unknown command {args.command}")


def main(argv=None) -> int:
    """Parses CLI arguments, runs the command and prints the result as JSON."""
    args = build_parser().parse_args(argv)
    log_utils.log_message(f"CLI invoked for '{args.command}'.", "INFO")
    try:
        result = run(args)
    except REPORTED_ERRORS as e:
        log_utils.log_message(f"'{args.command}' failed: {e}", "ERROR")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
