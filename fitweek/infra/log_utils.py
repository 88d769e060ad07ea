from datetime import datetime, timezone

from fitweek.config import settings


def log_message(msg: str, level: str = "INFO") -> None:
    """Append a timestamped message to the fitweek log."""
    log_file = settings.log_path
    log_file.parent.mkdir(parents=True, exist_ok=True)

    with open(log_file, "a", encoding="utf-8") as f:
        f.write(f"[{datetime.now(timezone.utc).isoformat()}] [{level}] {msg}\n")
