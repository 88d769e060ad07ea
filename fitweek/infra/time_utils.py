from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp stored in `createdAt`/`updatedAt` fields."""
    return (now or utc_now()).astimezone(timezone.utc).isoformat()
