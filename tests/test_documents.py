import pytest

from fitweek.data_access.documents import Increment, apply_updates, collection_of, deep_merge, validate_path


def test_deep_merge_merges_nested_maps_and_replaces_lists():
    base = {"stats": {"totalPoints": 20, "lastWeekId": "2024-W01"}, "tags": ["a"]}
    merged = deep_merge(base, {"stats": {"lastWeekId": "2024-W02"}, "tags": ["b"]})
    assert merged == {"stats": {"totalPoints": 20, "lastWeekId": "2024-W02"}, "tags": ["b"]}
    assert base["stats"]["lastWeekId"] == "2024-W01"


def test_deep_merge_resolves_increments():
    assert deep_merge({"points": 5}, {"points": Increment(10)}) == {"points": 15}
    assert deep_merge(None, {"points": Increment(-5)}) == {"points": -5}
    assert deep_merge({}, {"stats": {"points": Increment(3)}}) == {"stats": {"points": 3}}


def test_apply_updates_uses_dotted_paths():
    doc = {"stats": {"totalPoints": 90, "pointsThisWeek": 10}, "name": "Ana"}
    updated = apply_updates(
        doc,
        {"stats.totalPoints": Increment(10), "stats.level": 2, "diet.manual": {"notes": "x"}},
    )
    assert updated == {
        "stats": {"totalPoints": 100, "pointsThisWeek": 10, "level": 2},
        "name": "Ana",
        "diet": {"manual": {"notes": "x"}},
    }
    assert "level" not in doc["stats"]


@pytest.mark.parametrize("path", ["", "users//u1", "users/../etc", "./users/u1", "users/u1/"])
def test_invalid_paths_are_rejected(path):
    with pytest.raises(ValueError):
        validate_path(path)


def test_collection_of():
    assert collection_of("users/u1/measurements/2024-01-01") == "users/u1/measurements"
    with pytest.raises(ValueError):
        collection_of("users")
