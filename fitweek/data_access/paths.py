"""
Document keys. The formats here are shared with every other client of the
store and must not change: week plans are keyed `{uid}_{weekId}`.
"""


def user_path(user_id: str) -> str:
    return f"users/{user_id}"


def week_path(user_id: str, week_id: str) -> str:
    return f"userWeeks/{user_id}_{week_id}"


def measurements_collection(user_id: str) -> str:
    return f"users/{user_id}/measurements"


def measurement_path(user_id: str, day: str) -> str:
    return f"{measurements_collection(user_id)}/{day}"


def legacy_progress_collection(user_id: str) -> str:
    return f"users/{user_id}/progress"


def diet_plan_path(user_id: str) -> str:
    return f"users/{user_id}/dietPlan/current"


def diet_pdf_key(user_id: str, timestamp_ms: int) -> str:
    return f"users/{user_id}/diet/current_{timestamp_ms}.pdf"
