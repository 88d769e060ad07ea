"""Keeps each user's current-week plan and weekly stats in step with the calendar."""

import random
from datetime import date
from typing import Any, Dict, Optional

from fitweek.core.plan_builder import generate_weekly_plan
from fitweek.core.week import week_id as compute_week_id
from fitweek.data_access.dal import DataAccessLayer
from fitweek.data_access.paths import user_path, week_path
from fitweek.infra import log_utils
from fitweek.infra.time_utils import timestamp


def current_week_id(today: Optional[date] = None) -> str:
    return compute_week_id(today or date.today())


def load_current_week(
    dal: DataAccessLayer, user_id: str, today: Optional[date] = None
) -> Optional[Dict[str, Any]]:
    """Return this week's stored plan for `user_id`, or None."""
    return dal.get_document(week_path(user_id, current_week_id(today)))


def ensure_current_week(
    dal: DataAccessLayer,
    user_id: str,
    profile: Dict[str, Any],
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    """
    Make sure `user_id` has a plan for the current ISO week and return it.

    The plan is generated from the profile's goal and weekly frequency only
    when none is stored; creation goes through `create_document`, so
    concurrent callers end up with a single plan. Independently, the user's
    `stats.pointsThisWeek` is reset whenever `stats.lastWeekId` is not the
    current week. Store errors propagate to the caller.
    """
    today = today or date.today()
    wid = compute_week_id(today)
    plan_path = week_path(user_id, wid)

    if dal.get_document(plan_path) is None:
        plan = generate_weekly_plan(
            profile.get("goal"), profile.get("workoutsPerWeek"), today=today, rng=rng
        )
        created = dal.create_document(
            plan_path,
            {
                "uid": user_id,
                "weekId": wid,
                "points": 0,
                "workouts": plan["workouts"],
                "diet": plan["diet"],
                "createdAt": timestamp(),
            },
        )
        if created:
            log_utils.log_message(f"[week] Created plan {wid} for {user_id}")

    user_ref = user_path(user_id)
    stats = (dal.get_document(user_ref) or {}).get("stats") or {}
    if stats.get("lastWeekId") != wid:
        dal.set_document(
            user_ref,
            {"stats": {**stats, "lastWeekId": wid, "pointsThisWeek": 0}},
            merge=True,
        )
        log_utils.log_message(f"[week] Rolled {user_id} over to {wid}, weekly points reset")

    return dal.get_document(plan_path)
