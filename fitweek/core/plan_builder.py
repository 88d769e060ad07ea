"""Weekly workout and diet plan builder."""

import random
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from fitweek.config import settings
from fitweek.core.exercises import DEFAULT_TIPS, EXERCISE_LIBRARY, to_workout_item
from fitweek.core.week import week_dates


def eligible_pool(
    goal: str, count: int, library: Sequence[Dict[str, Any]] = EXERCISE_LIBRARY
) -> List[Dict[str, Any]]:
    """
    Two-tier pool: exercises tagged with `goal` when there are at least `count`
    of them, otherwise the whole library.
    """
    preferred = [ex for ex in library if goal in ex["tags"]]
    if len(preferred) >= count:
        return preferred
    return list(library)


def pick_exercises(
    goal: str,
    count: int,
    rng: Optional[random.Random] = None,
    library: Sequence[Dict[str, Any]] = EXERCISE_LIBRARY,
) -> List[Dict[str, Any]]:
    """Sample up to `count` distinct exercises for `goal`, uniformly at random."""
    rng = rng or random.Random()
    pool = eligible_pool(goal, count, library)
    return rng.sample(pool, min(count, len(pool)))


def generate_weekly_plan(
    goal: Optional[str] = None,
    workouts_per_week: Optional[int] = None,
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
    library: Sequence[Dict[str, Any]] = EXERCISE_LIBRARY,
) -> Dict[str, Dict[str, List[Dict[str, Any]]]]:
    """
    Build the workout and diet checklists for the week containing `today`.

    The first `workouts_per_week` days (Monday first) get
    `settings.EXERCISES_PER_DAY` exercises each; the remaining days are rest
    days with no items. Every day gets a diet entry.
    """
    goal = goal or settings.DEFAULT_GOAL
    if workouts_per_week is None:
        workouts_per_week = settings.DEFAULT_WORKOUTS_PER_WEEK
    try:
        workout_count = max(0, min(int(workouts_per_week), 7))
    except (TypeError, ValueError, OverflowError):
        # unreadable frequency: rest week
        workout_count = 0
    rng = rng or random.Random()

    dates = week_dates(today)

    workout_days = []
    for index, d in enumerate(dates):
        items = []
        if index < workout_count:
            items = [
                to_workout_item(ex, DEFAULT_TIPS)
                for ex in pick_exercises(goal, settings.EXERCISES_PER_DAY, rng, library)
            ]
        workout_days.append({"date": d.isoformat(), "completed": False, "items": items})

    diet_days = [{"date": d.isoformat(), "completed": False} for d in dates]

    return {"workouts": {"days": workout_days}, "diet": {"days": diet_days}}
