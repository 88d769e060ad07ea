"""User profile: creation, onboarding questionnaire and settings."""

import random
from datetime import date
from typing import Any, Dict, Mapping, Optional

from fitweek.core.exercises import GOALS
from fitweek.core.progress import OPTIONAL_FIELDS, record_measurement
from fitweek.core.validation import ValidationError, require_at_least, require_positive
from fitweek.core.week_service import ensure_current_week
from fitweek.data_access.dal import DataAccessLayer
from fitweek.data_access.paths import user_path
from fitweek.infra import log_utils
from fitweek.infra.time_utils import timestamp

MIN_AGE = 12
MIN_HEIGHT_CM = 120
MIN_WEIGHT_KG = 30
MIN_WORKOUTS_PER_WEEK = 2
MAX_WORKOUTS_PER_WEEK = 6


def get_profile(dal: DataAccessLayer, user_id: str) -> Optional[Dict[str, Any]]:
    return dal.get_document(user_path(user_id))


def create_profile(dal: DataAccessLayer, user_id: str, name: str, email: str) -> Dict[str, Any]:
    """Store the bare profile written right after registration."""
    now = timestamp()
    profile = {
        "name": name,
        "email": email,
        "onboardingComplete": False,
        "createdAt": now,
        "updatedAt": now,
    }
    dal.set_document(user_path(user_id), profile, merge=True)
    return profile


def validate_onboarding(answers: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Check the questionnaire answers and return the profile fields to store.

    Raises:
        ValidationError: naming the first answer that is missing or out of range.
    """
    age = require_at_least(answers.get("age"), MIN_AGE, f"Age must be at least {MIN_AGE}.")
    height = require_at_least(
        answers.get("heightCm"), MIN_HEIGHT_CM, f"Height must be at least {MIN_HEIGHT_CM} cm."
    )
    weight = require_at_least(
        answers.get("weightKg"), MIN_WEIGHT_KG, f"Weight must be at least {MIN_WEIGHT_KG} kg."
    )

    goal = answers.get("goal")
    if goal not in GOALS:
        raise ValidationError(f"Goal must be one of: {', '.join(GOALS)}.")

    try:
        workouts = int(answers.get("workoutsPerWeek"))
    except (TypeError, ValueError):
        workouts = 0
    if not MIN_WORKOUTS_PER_WEEK <= workouts <= MAX_WORKOUTS_PER_WEEK:
        raise ValidationError(
            f"Choose between {MIN_WORKOUTS_PER_WEEK} and {MAX_WORKOUTS_PER_WEEK} workouts per week."
        )

    muscle_groups = [g for g in answers.get("muscleGroups") or [] if g]
    if not muscle_groups:
        raise ValidationError("Pick at least one muscle group.")

    level = (answers.get("level") or "").strip()
    if not level:
        raise ValidationError("Tell us your current fitness level.")

    return {
        "age": int(age),
        "heightCm": height,
        "weightKg": weight,
        "goal": goal,
        "workoutsPerWeek": workouts,
        "muscleGroups": muscle_groups,
        "level": level,
        "youtubePlaylistUrl": (answers.get("youtubePlaylistUrl") or "").strip(),
    }


def complete_onboarding(
    dal: DataAccessLayer,
    user_id: str,
    answers: Mapping[str, Any],
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    """
    Save the questionnaire, record today's measurement and set up this week's
    plan. Returns the week plan.
    """
    fields = validate_onboarding(answers)
    fields.update(onboardingComplete=True, updatedAt=timestamp())
    dal.set_document(user_path(user_id), fields, merge=True)

    extras = {key: answers.get(key) for key in OPTIONAL_FIELDS}
    record_measurement(dal, user_id, fields["weightKg"], extras, today=today)
    log_utils.log_message(f"[profile] {user_id} completed onboarding (goal {fields['goal']})")

    return ensure_current_week(dal, user_id, get_profile(dal, user_id) or fields, today=today, rng=rng)


def update_settings(
    dal: DataAccessLayer,
    user_id: str,
    goal: str,
    weight_kg: Any,
    playlist_url: str = "",
) -> Dict[str, Any]:
    """Change goal, weight and playlist. Takes effect from the next generated week."""
    if goal not in GOALS:
        raise ValidationError(f"Goal must be one of: {', '.join(GOALS)}.")
    weight = require_positive(weight_kg, "Enter a valid weight.")

    updates = {
        "goal": goal,
        "weightKg": weight,
        "youtubePlaylistUrl": (playlist_url or "").strip(),
        "updatedAt": timestamp(),
    }
    dal.update_fields(user_path(user_id), updates)
    return updates
