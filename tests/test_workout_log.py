import random
from datetime import date

import pytest

from fitweek.core.exercises import CUSTOM_TIPS, find_exercise
from fitweek.core.validation import ValidationError
from fitweek.core.week_service import ensure_current_week
from fitweek.core.workout_log import (
    add_custom_item,
    build_media_from_link,
    complete_day,
    extract_youtube_id,
    replace_item,
    toggle_item,
)

MONDAY = date(2024, 1, 1)
WEEK = "userWeeks/u1_2024-W01"


@pytest.fixture
def planned(dal):
    ensure_current_week(dal, "u1", {"goal": "conditioning", "workoutsPerWeek": 3}, today=MONDAY, rng=random.Random(2))
    return dal


def _today(dal):
    return dal.get_document(WEEK)["workouts"]["days"][0]


def _tick_all(dal):
    for index in range(len(_today(dal)["items"])):
        toggle_item(dal, "u1", index, today=MONDAY)


def test_toggle_item_flips_done(planned):
    day = toggle_item(planned, "u1", 1, today=MONDAY)
    assert day["items"][1]["done"] is True
    assert _today(planned)["items"][1]["done"] is True
    toggle_item(planned, "u1", 1, today=MONDAY)
    assert _today(planned)["items"][1]["done"] is False


def test_toggle_item_rejects_bad_position(planned):
    with pytest.raises(ValidationError):
        toggle_item(planned, "u1", 5, today=MONDAY)


def test_rest_day_has_nothing_to_toggle(planned):
    with pytest.raises(ValidationError):
        toggle_item(planned, "u1", 0, today=date(2024, 1, 7))


def test_no_plan_for_the_week(planned):
    with pytest.raises(ValidationError, match="No plan"):
        toggle_item(planned, "u1", 0, today=date(2024, 1, 8))


def test_complete_day_requires_every_item_done(planned):
    toggle_item(planned, "u1", 0, today=MONDAY)
    with pytest.raises(ValidationError):
        complete_day(planned, "u1", today=MONDAY)
    assert planned.get_document(WEEK)["points"] == 0
    assert _today(planned)["completed"] is False


def test_complete_day_awards_points_once(planned):
    _tick_all(planned)
    day = complete_day(planned, "u1", today=MONDAY)
    assert day["completed"] is True

    complete_day(planned, "u1", today=MONDAY)

    assert planned.get_document(WEEK)["points"] == 10
    stats = planned.get_document("users/u1")["stats"]
    assert stats["totalPoints"] == 10
    assert stats["pointsThisWeek"] == 10
    assert stats["level"] == 1


def test_complete_day_stores_new_level(planned):
    planned.set_document("users/u1", {"stats": {"totalPoints": 95}}, merge=True)
    _tick_all(planned)
    complete_day(planned, "u1", today=MONDAY)
    stats = planned.get_document("users/u1")["stats"]
    assert stats["totalPoints"] == 105
    assert stats["level"] == 2


def test_unticking_after_completion_keeps_completed(planned):
    _tick_all(planned)
    complete_day(planned, "u1", today=MONDAY)
    toggle_item(planned, "u1", 0, today=MONDAY)
    day = _today(planned)
    assert day["completed"] is True
    assert day["items"][0]["done"] is False


def test_replace_item_with_library_exercise(planned):
    toggle_item(planned, "u1", 2, today=MONDAY)
    day = replace_item(planned, "u1", 2, "Front plank", today=MONDAY)
    item = day["items"][2]
    assert item["name"] == "Front plank"
    assert item["done"] is False
    assert item["tips"] == list(find_exercise("Front plank")["tips"])
    assert _today(planned)["items"][2] == item


def test_replace_item_without_tips_uses_custom_tips(planned):
    day = replace_item(planned, "u1", 0, "Mountain climbers", today=MONDAY)
    assert day["items"][0]["tips"] == CUSTOM_TIPS
    assert "media" not in day["items"][0]


def test_replace_item_unknown_exercise(planned):
    with pytest.raises(ValidationError):
        replace_item(planned, "u1", 0, "Moon walk", today=MONDAY)


def test_add_custom_item(planned):
    day = add_custom_item(planned, "u1", "  Farmer carry ", "https://youtu.be/abc123", today=MONDAY)
    item = day["items"][-1]
    assert len(day["items"]) == 4
    assert item == {
        "name": "Farmer carry",
        "done": False,
        "tips": CUSTOM_TIPS,
        "media": {"type": "video-embed", "url": "https://www.youtube.com/embed/abc123"},
    }
    assert _today(planned)["items"][-1] == item


def test_add_custom_item_requires_name(planned):
    with pytest.raises(ValidationError):
        add_custom_item(planned, "u1", "   ", today=MONDAY)
    assert len(_today(planned)["items"]) == 3


@pytest.mark.parametrize(
    "link, expected",
    [
        ("https://www.youtube.com/watch?v=XYZ&t=10", "XYZ"),
        ("https://www.youtube.com/embed/XYZ", "XYZ"),
        ("https://youtu.be/XYZ", "XYZ"),
        ("youtu.be/XYZ", "XYZ"),
        ("https://vimeo.com/123", None),
    ],
)
def test_extract_youtube_id(link, expected):
    assert extract_youtube_id(link) == expected


def test_build_media_from_link():
    assert build_media_from_link("") is None
    assert build_media_from_link("https://example.com/move.gif") == {
        "type": "image-loop",
        "url": "https://example.com/move.gif",
    }
    assert build_media_from_link(" https://www.youtube.com/watch?v=Q1 ")["url"] == "https://www.youtube.com/embed/Q1"
