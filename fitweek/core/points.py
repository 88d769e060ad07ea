from typing import Any, Dict, Optional

from fitweek.core.level import LevelInfo, level_from_total_points
from fitweek.data_access.dal import DataAccessLayer
from fitweek.data_access.documents import Increment
from fitweek.data_access.paths import user_path, week_path
from fitweek.infra import log_utils


def total_points(profile: Optional[Dict[str, Any]]) -> float:
    return ((profile or {}).get("stats") or {}).get("totalPoints", 0)


def award_points(dal: DataAccessLayer, user_id: str, week_id: str, change: int) -> LevelInfo:
    """
    Add `change` (negative to take back) to the week's points and to the
    user's weekly and lifetime totals, and store the resulting level.
    """
    level_info = level_from_total_points(max(total_points(dal.get_document(user_path(user_id))) + change, 0))

    dal.update_fields(week_path(user_id, week_id), {"points": Increment(change)})
    dal.update_fields(
        user_path(user_id),
        {
            "stats.pointsThisWeek": Increment(change),
            "stats.totalPoints": Increment(change),
            "stats.level": level_info.level,
        },
    )
    log_utils.log_message(f"[points] {user_id} {change:+d} points, level {level_info.level}")
    return level_info
