from __future__ import annotations
from datetime import datetime, timezone
from pydantic import BaseModel


def format_day(value: datetime) -> str:
    """Truncate a timestamp to its UTC calendar day (YYYY-MM-DD).

    SQLite hands back naive datetimes; those are already UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).date().isoformat()


class ReportRead(BaseModel):
    id: str
    location: str
    waste_type: str
    amount: str
    created_at: str

    @classmethod
    def from_model(cls, report) -> "ReportRead":
        return cls(
            id=report.id,
            location=report.location,
            waste_type=report.waste_type,
            amount=report.amount,
            created_at=format_day(report.created_at),
        )
