"""
Today's workout: ticking exercises off, completing the day, and editing the
list of exercises.

Every edit rewrites the week's `workouts.days` array with a merge write. A
day's `completed` flag is checked against its items only when the user asks
to complete it; later un-ticking an item leaves the flag as stored.
"""

import re
from datetime import date
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

from fitweek.config import settings
from fitweek.core.exercises import CUSTOM_TIPS, IMAGE_LOOP, VIDEO_EMBED, find_exercise, to_workout_item
from fitweek.core.points import award_points
from fitweek.core.validation import ValidationError
from fitweek.core.week_service import current_week_id
from fitweek.data_access.dal import DataAccessLayer
from fitweek.data_access.paths import week_path
from fitweek.infra import log_utils

_YOUTUBE_FALLBACK = re.compile(r"(?:youtu\.be/|v=)([^&/]+)")


def extract_youtube_id(value: str) -> Optional[str]:
    """Pull the video id out of youtu.be, watch?v= or /embed/ style links."""
    parsed = urlparse(value)
    host = parsed.netloc.lower()
    if parsed.scheme and host:
        if "youtu.be" in host:
            return parsed.path.lstrip("/") or None
        if "youtube.com" in host:
            video_ids = parse_qs(parsed.query).get("v")
            if video_ids:
                return video_ids[0]
            parts = [p for p in parsed.path.split("/") if p]
            return parts[-1] if parts else None
        return None
    match = _YOUTUBE_FALLBACK.search(value)
    return match.group(1) if match else None


def build_media_from_link(value: str) -> Optional[Dict[str, str]]:
    """YouTube links become embeds; any other link is shown as an image loop."""
    trimmed = (value or "").strip()
    if not trimmed:
        return None
    video_id = extract_youtube_id(trimmed)
    if video_id:
        return {"type": VIDEO_EMBED, "url": f"https://www.youtube.com/embed/{video_id}"}
    return {"type": IMAGE_LOOP, "url": trimmed}


def _todays_workout(
    dal: DataAccessLayer, user_id: str, today: Optional[date]
) -> Tuple[str, List[Dict[str, Any]], int]:
    """Return (week id, workout days, index of today's day) or raise ValidationError."""
    today = today or date.today()
    wid = current_week_id(today)
    week = dal.get_document(week_path(user_id, wid))
    if not week:
        raise ValidationError("No plan for this week yet.")
    days = week.get("workouts", {}).get("days", [])
    iso_today = today.isoformat()
    index = next((i for i, d in enumerate(days) if d.get("date") == iso_today), -1)
    if index < 0:
        raise ValidationError("There is no workout scheduled for today.")
    return wid, days, index


def _check_item_index(day: Dict[str, Any], item_index: int) -> None:
    if not 0 <= item_index < len(day.get("items", [])):
        raise ValidationError(f"No exercise at position {item_index + 1}.")


def _save_days(dal: DataAccessLayer, user_id: str, wid: str, days: List[Dict[str, Any]]) -> None:
    dal.set_document(week_path(user_id, wid), {"workouts": {"days": days}}, merge=True)


def toggle_item(
    dal: DataAccessLayer, user_id: str, item_index: int, today: Optional[date] = None
) -> Dict[str, Any]:
    """Flip the `done` flag of one of today's exercises and return the day."""
    wid, days, index = _todays_workout(dal, user_id, today)
    day = days[index]
    _check_item_index(day, item_index)
    item = day["items"][item_index]
    item["done"] = not item.get("done", False)
    _save_days(dal, user_id, wid, days)
    return day


def complete_day(dal: DataAccessLayer, user_id: str, today: Optional[date] = None) -> Dict[str, Any]:
    """
    Mark today's workout as completed and award the workout points.

    Every exercise must be done first. Completing an already completed day
    changes nothing and awards nothing.
    """
    wid, days, index = _todays_workout(dal, user_id, today)
    day = days[index]
    if not all(item.get("done") for item in day.get("items", [])):
        raise ValidationError("Tick off every exercise before completing the day.")
    if day.get("completed"):
        return day

    day["completed"] = True
    _save_days(dal, user_id, wid, days)
    level_info = award_points(dal, user_id, wid, settings.WORKOUT_DAY_POINTS)
    log_utils.log_message(f"[workout] {user_id} completed {day['date']} (level {level_info.level})")
    return day


def replace_item(
    dal: DataAccessLayer,
    user_id: str,
    item_index: int,
    exercise_name: str,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """Swap one of today's exercises for a library exercise."""
    exercise = find_exercise(exercise_name)
    if exercise is None:
        raise ValidationError("Pick an exercise from the library.")
    wid, days, index = _todays_workout(dal, user_id, today)
    day = days[index]
    _check_item_index(day, item_index)
    day["items"][item_index] = to_workout_item(exercise, CUSTOM_TIPS)
    _save_days(dal, user_id, wid, days)
    return day


def add_custom_item(
    dal: DataAccessLayer,
    user_id: str,
    name: str,
    link: str = "",
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """Append a user-named exercise, with optional video or image link, to today."""
    name = (name or "").strip()
    if not name:
        raise ValidationError("Give the exercise a name.")
    media = build_media_from_link(link)
    wid, days, index = _todays_workout(dal, user_id, today)
    day = days[index]

    item: Dict[str, Any] = {"name": name, "done": False, "tips": list(CUSTOM_TIPS)}
    if media:
        item["media"] = media
    day.setdefault("items", []).append(item)
    _save_days(dal, user_id, wid, days)
    return day
