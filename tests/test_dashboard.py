import pytest

from fitweek.core.dashboard import build_summary


def _week(workouts_done, diet_done):
    return {
        "workouts": {"days": [{"completed": i < workouts_done, "items": []} for i in range(7)]},
        "diet": {"days": [{"completed": i < diet_done} for i in range(7)]},
    }


def test_summary_of_a_week_in_progress():
    profile = {"stats": {"totalPoints": 250, "pointsThisWeek": 15}}
    entries = [{"date": "2024-01-01", "weightKg": 80.0}, {"date": "2024-01-03", "weightKg": 78.5}]

    summary = build_summary(_week(2, 3), profile, entries)

    assert summary == {
        "workoutsCompleted": 2,
        "workoutProgress": 29,
        "dietProgress": 43,
        "pointsThisWeek": 15,
        "level": 3,
        "levelProgressPercent": 50,
        "pointsToNextLevel": 50,
        "latestWeightKg": 78.5,
        "weightChangeKg": -1.5,
    }


@pytest.mark.parametrize(
    "total, level, percent, to_next",
    [
        (0, 1, 0, 100),
        (100, 2, 0, 100),
        (1099, 11, 66, 51),
    ],
)
def test_level_progress(total, level, percent, to_next):
    summary = build_summary(None, {"stats": {"totalPoints": total}}, [])
    assert summary["level"] == level
    assert summary["levelProgressPercent"] == percent
    assert summary["pointsToNextLevel"] == to_next


def test_summary_without_any_data():
    summary = build_summary(None, None, [])
    assert summary["workoutsCompleted"] == 0
    assert summary["workoutProgress"] == 0
    assert summary["dietProgress"] == 0
    assert summary["pointsThisWeek"] == 0
    assert summary["latestWeightKg"] is None
    assert summary["weightChangeKg"] is None
