"""Numbers shown on the home screen for the current week."""

from typing import Any, Dict, List, Optional

from fitweek.core.level import level_from_total_points
from fitweek.core.progress import weight_change


def _percent(done: int, total: int) -> int:
    return round(done / total * 100) if total else 0


def build_summary(
    week: Optional[Dict[str, Any]],
    profile: Optional[Dict[str, Any]],
    entries: List[Dict[str, Any]],
) -> Dict[str, Any]:
    workout_days = (week or {}).get("workouts", {}).get("days", [])
    diet_days = (week or {}).get("diet", {}).get("days", [])
    stats = (profile or {}).get("stats") or {}

    level_info = level_from_total_points(stats.get("totalPoints", 0))
    next_level = level_info.next_level_points or 1

    return {
        "workoutsCompleted": sum(1 for d in workout_days if d.get("completed")),
        "workoutProgress": _percent(sum(1 for d in workout_days if d.get("completed")), len(workout_days)),
        "dietProgress": _percent(sum(1 for d in diet_days if d.get("completed")), len(diet_days)),
        "pointsThisWeek": stats.get("pointsThisWeek", 0),
        "level": level_info.level,
        "levelProgressPercent": min(round(level_info.current_level_progress / next_level * 100), 100),
        "pointsToNextLevel": max(level_info.next_level_points - level_info.current_level_progress, 0),
        "latestWeightKg": entries[-1]["weightKg"] if entries else None,
        "weightChangeKg": weight_change(entries),
    }
