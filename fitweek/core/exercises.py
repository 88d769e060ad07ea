"""
Static exercise library used when generating weekly plans.

Each exercise carries the goal tags it suits, optional media and form tips.
Exercises without tips get DEFAULT_TIPS when they are placed in a plan.
"""

from typing import Any, Dict, List, Optional, Tuple

WEIGHT_LOSS = "weight-loss"
HYPERTROPHY = "hypertrophy"
CONDITIONING = "conditioning"
GOALS = (WEIGHT_LOSS, HYPERTROPHY, CONDITIONING)

IMAGE_LOOP = "image-loop"
VIDEO_EMBED = "video-embed"

LOCAL_LOOP_URL = "/gifs/plank.gif"

DEFAULT_TIPS = [
    "Breathe and control the movement",
    "Keep your core engaged",
    "Avoid jerky movements",
]

# Tips attached to exercises the user swaps in or adds by hand
CUSTOM_TIPS = ["Keep your core tight", "Breathe in a controlled way"]


def _media(kind: str, url: str) -> Dict[str, str]:
    return {"type": kind, "url": url}


EXERCISE_LIBRARY: Tuple[Dict[str, Any], ...] = (
    {
        "name": "Bodyweight squat",
        "tags": frozenset({WEIGHT_LOSS, HYPERTROPHY, CONDITIONING}),
        "media": _media(IMAGE_LOOP, LOCAL_LOOP_URL),
        "tips": ("Keep your torso upright", "Drive the floor away through your heels"),
    },
    {
        "name": "Front plank",
        "tags": frozenset({WEIGHT_LOSS, CONDITIONING}),
        "media": _media(IMAGE_LOOP, LOCAL_LOOP_URL),
        "tips": ("Brace your core", "Breathe deeply"),
    },
    {
        "name": "Dumbbell bench press",
        "tags": frozenset({HYPERTROPHY}),
        "media": _media(VIDEO_EMBED, "https://www.youtube.com/embed/vthMCtgVtFw"),
        "tips": ("Keep your lower back on the bench", "Exhale as you press up"),
    },
    {
        "name": "Single-arm row",
        "tags": frozenset({HYPERTROPHY, CONDITIONING}),
        "media": _media(VIDEO_EMBED, "https://www.youtube.com/embed/kBWAon7ItDw"),
        "tips": ("Control the lowering phase", "Don't shrug your shoulder"),
    },
    {
        "name": "Glute bridge",
        "tags": frozenset({WEIGHT_LOSS, HYPERTROPHY}),
        "media": _media(IMAGE_LOOP, LOCAL_LOOP_URL),
        "tips": ("Squeeze your glutes at the top", "Keep your chin slightly tucked"),
    },
    {
        "name": "Jumping jacks",
        "tags": frozenset({WEIGHT_LOSS, CONDITIONING}),
        "media": _media(VIDEO_EMBED, "https://www.youtube.com/embed/c4DAnQ6DtF8"),
        "tips": ("Land softly", "Keep a steady rhythm"),
    },
    {
        "name": "Mountain climbers",
        "tags": frozenset({WEIGHT_LOSS, CONDITIONING}),
        "media": None,
        "tips": (),
    },
)


def find_exercise(name: str) -> Optional[Dict[str, Any]]:
    """Look up a library exercise by its exact name."""
    return next((ex for ex in EXERCISE_LIBRARY if ex["name"] == name), None)


def exercise_names() -> List[str]:
    return [ex["name"] for ex in EXERCISE_LIBRARY]


def to_workout_item(exercise: Dict[str, Any], fallback_tips: List[str]) -> Dict[str, Any]:
    """Materialise a library exercise as a fresh, not-done workout item."""
    item: Dict[str, Any] = {
        "name": exercise["name"],
        "done": False,
        "tips": list(exercise["tips"]) if exercise["tips"] else list(fallback_tips),
    }
    if exercise.get("media"):
        item["media"] = dict(exercise["media"])
    return item
