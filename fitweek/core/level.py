"""Points-to-level staircase used for the gamified progress display."""

import math
from typing import NamedTuple

from fitweek.core.validation import ValidationError

BASE_POINTS_PER_LEVEL = 100
POINTS_STEP = 50
LEVELS_PER_STEP = 10


class LevelInfo(NamedTuple):
    level: int
    current_level_progress: float
    next_level_points: int


def points_to_next_level(level: int) -> int:
    """Points needed to go from `level` to `level + 1`; +50 every 10 levels."""
    normalized = max(1, int(level))
    step = (normalized - 1) // LEVELS_PER_STEP
    return BASE_POINTS_PER_LEVEL + step * POINTS_STEP


def level_from_total_points(total_points: float) -> LevelInfo:
    """
    Walk up the staircase from level 1, spending points on each level-up.

    Landing exactly on a threshold counts as reaching the next level, so
    100 points is level 2 with no progress.

    Raises:
        ValidationError: if `total_points` is infinite or NaN.
    """
    if not math.isfinite(total_points):
        raise ValidationError(f"Point total must be a finite number, got {total_points}.")
    remaining = max(0, total_points)
    level = 1
    next_level_points = points_to_next_level(level)

    while remaining >= next_level_points:
        remaining -= next_level_points
        level += 1
        next_level_points = points_to_next_level(level)

    return LevelInfo(level, remaining, next_level_points)
