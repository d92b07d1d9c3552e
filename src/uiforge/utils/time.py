from __future__ import annotations
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Timezone-aware now, used for every stored timestamp."""
    return datetime.now(timezone.utc)


def isoformat_or_none(value: datetime | None) -> str | None:
    """Serialize a datetime for JSON payloads, passing None through."""
    return value.isoformat() if value else None
