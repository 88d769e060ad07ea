import json

import pytest

from fitweek.cli.main import main


def test_level_command(capsys):
    assert main(["level", "250"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out == {"level": 3, "current_level_progress": 50.0, "next_level_points": 100}


def test_ensure_week_then_toggle_diet(capsys):
    assert main(["--date", "2024-01-03", "ensure-week", "--user", "u1"]) == 0
    week = json.loads(capsys.readouterr().out)
    assert week["weekId"] == "2024-W01"
    assert sum(1 for d in week["workouts"]["days"] if d["items"]) == 3

    assert main(["--date", "2024-01-03", "toggle-diet", "--user", "u1", "3"]) == 0
    day = json.loads(capsys.readouterr().out)
    assert day == {"date": "2024-01-03", "completed": True}

    assert main(["--date", "2024-01-03", "summary", "--user", "u1"]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["pointsThisWeek"] == 5
    assert summary["dietProgress"] == 14


def test_errors_are_reported(capsys):
    assert main(["--date", "2024-01-03", "complete-day", "--user", "nobody"]) == 1
    assert "No plan for this week yet." in capsys.readouterr().err

    assert main(["measure", "--user", "u1", "-3"]) == 1
    assert "Enter a valid weight." in capsys.readouterr().err


def test_level_rejects_infinite_points(capsys):
    assert main(["level", "inf"]) == 1
    assert "finite" in capsys.readouterr().err


def test_measure_help_names_the_metrics(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["measure", "--help"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "Weight (kg)" in out
    assert "Waist (cm)" in out
