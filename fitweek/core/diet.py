"""Diet checklist, structured meal plan, free-form notes and PDF upload."""

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

from fitweek.config import settings
from fitweek.core.points import award_points
from fitweek.core.validation import ValidationError, parse_positive
from fitweek.core.week_service import current_week_id
from fitweek.data_access.blob_store import BlobStore
from fitweek.data_access.dal import DataAccessLayer
from fitweek.data_access.paths import diet_pdf_key, diet_plan_path, user_path, week_path
from fitweek.infra import log_utils
from fitweek.infra.time_utils import timestamp, utc_now

MEAL_NAMES = (
    "Breakfast",
    "Morning snack",
    "Lunch",
    "Afternoon snack",
    "Dinner",
    "Supper",
)


def toggle_diet_day(
    dal: DataAccessLayer, user_id: str, index: int, today: Optional[date] = None
) -> Dict[str, Any]:
    """
    Flip the diet checklist entry at `index` of the current week.
    Ticking awards `settings.DIET_DAY_POINTS`, unticking takes them back.
    """
    wid = current_week_id(today)
    week = dal.get_document(week_path(user_id, wid))
    if not week:
        raise ValidationError("No plan for this week yet.")
    days: List[Dict[str, Any]] = week.get("diet", {}).get("days", [])
    if not 0 <= index < len(days):
        raise ValidationError(f"No diet day at position {index + 1}.")

    day = days[index]
    day["completed"] = not day.get("completed", False)
    change = settings.DIET_DAY_POINTS if day["completed"] else -settings.DIET_DAY_POINTS

    dal.set_document(week_path(user_id, wid), {"diet": {"days": days}}, merge=True)
    award_points(dal, user_id, wid, change)
    return day


def save_diet_plan(
    dal: DataAccessLayer,
    user_id: str,
    meals: Sequence[Dict[str, Any]],
    kcal_per_day: Any = None,
) -> Dict[str, Any]:
    """
    Store the structured meal plan. `meals` lines up with MEAL_NAMES; blank
    text fields are dropped and calorie values are kept only when positive.
    """
    stored_meals = []
    for index, name in enumerate(MEAL_NAMES):
        source = meals[index] if index < len(meals) else {}
        meal: Dict[str, Any] = {"name": name}
        for field in ("time", "itemsText"):
            value = (source.get(field) or "").strip()
            if value:
                meal[field] = value
        kcal = parse_positive(source.get("kcal"))
        if kcal is not None:
            meal["kcal"] = kcal
        stored_meals.append(meal)

    plan = {
        "meals": stored_meals,
        "kcalPerDay": parse_positive(kcal_per_day),
        "updatedAt": timestamp(),
    }
    dal.set_document(diet_plan_path(user_id), plan, merge=True)
    log_utils.log_message(f"[diet] Saved meal plan for {user_id}")
    return plan


def load_diet_plan(dal: DataAccessLayer, user_id: str) -> Dict[str, Any]:
    """Return the six meal slots, filled from the stored plan where present."""
    data = dal.get_document(diet_plan_path(user_id)) or {}
    stored = data.get("meals") if isinstance(data.get("meals"), list) else []
    meals = []
    for index, name in enumerate(MEAL_NAMES):
        source = stored[index] if index < len(stored) else {}
        meals.append(
            {
                "name": name,
                "time": source.get("time", ""),
                "itemsText": source.get("itemsText", ""),
                "kcal": source.get("kcal"),
            }
        )
    return {"meals": meals, "kcalPerDay": data.get("kcalPerDay"), "updatedAt": data.get("updatedAt")}


def save_manual_diet(
    dal: DataAccessLayer, user_id: str, notes: str, meals: Sequence[str]
) -> Dict[str, Any]:
    """Store free-form diet notes and a de-duplicated list of meal names."""
    unique: List[str] = []
    for meal in meals:
        normalized = (meal or "").strip()
        if normalized and normalized not in unique:
            unique.append(normalized)

    manual = {"notes": (notes or "").strip(), "meals": unique, "updatedAt": timestamp()}
    dal.update_fields(user_path(user_id), {"diet.manual": manual})
    return manual


def upload_diet_pdf(
    dal: DataAccessLayer,
    blobs: BlobStore,
    user_id: str,
    payload: bytes,
    now: Optional[datetime] = None,
) -> str:
    """Upload the user's diet PDF and point the profile at it. Returns the URL."""
    if not payload:
        raise ValidationError("Choose a PDF file to upload.")
    now = now or utc_now()
    key = diet_pdf_key(user_id, int(now.timestamp() * 1000))
    url = blobs.upload(key, payload, "application/pdf")
    dal.update_fields(
        user_path(user_id),
        {"diet.currentPdfUrl": url, "diet.updatedAt": timestamp(now)},
    )
    log_utils.log_message(f"[diet] Uploaded diet PDF for {user_id} to {key}")
    return url
