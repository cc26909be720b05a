"""
Schemas for the watering service: HTTP payloads, timestamp coercion and
the per-record outcomes reported by a reminder sweep.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone as dt_timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


EPOCH = datetime(1970, 1, 1, tzinfo=dt_timezone.utc)


class CropAddedData(BaseModel):
    """The planted crop as written by the app into ``user_crops``"""
    model_config = ConfigDict(extra="allow")

    plantedTimestamp: Optional[Any] = None
    cropId: Optional[str] = None
    userId: Optional[str] = None


class CropAddedRequest(BaseModel):
    """Body of POST /onCropAdded. ``cropId`` here is the user_crops document id."""
    cropId: Optional[str] = None
    data: Optional[CropAddedData] = Field(default_factory=CropAddedData)


class CropAddedResponse(BaseModel):
    success: bool = True
    nextWateringTimestamp: Dict[str, int]


def coerce_timestamp(value: Any) -> datetime:
    """Convert a wire timestamp to a UTC-aware datetime.

    Accepts epoch milliseconds, ISO-8601 strings, serialized Firestore
    Timestamps (``{"_seconds", "_nanoseconds"}`` or the unprefixed form)
    and datetimes. Raises ValueError for anything else.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=dt_timezone.utc)
    if isinstance(value, bool):
        raise ValueError("boolean is not a timestamp")
    if isinstance(value, (int, float)):
        return EPOCH + timedelta(milliseconds=value)
    if isinstance(value, str) and value.strip():
        # Accept both Z and +00:00
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        return dt if dt.tzinfo else dt.replace(tzinfo=dt_timezone.utc)
    if isinstance(value, dict):
        seconds = value.get("_seconds", value.get("seconds"))
        nanos = value.get("_nanoseconds", value.get("nanoseconds", 0)) or 0
        if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
            raise ValueError("timestamp object without numeric seconds")
        return EPOCH + timedelta(seconds=seconds, microseconds=int(nanos) // 1000)
    raise ValueError(f"unsupported timestamp: {value!r}")


def serialize_timestamp(dt: datetime) -> Dict[str, int]:
    """Render a datetime the way a Firestore Timestamp serializes to JSON."""
    aware = dt if dt.tzinfo else dt.replace(tzinfo=dt_timezone.utc)
    total_us = (aware - EPOCH) // timedelta(microseconds=1)
    seconds, micros = divmod(total_us, 1_000_000)
    return {"_seconds": seconds, "_nanoseconds": micros * 1000}


def to_millis(dt: datetime) -> int:
    aware = dt if dt.tzinfo else dt.replace(tzinfo=dt_timezone.utc)
    return (aware - EPOCH) // timedelta(milliseconds=1)


class NotificationOutcome(str, Enum):
    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


class RescheduleOutcome(str, Enum):
    RESCHEDULED = "rescheduled"
    SKIPPED = "skipped"
    INVALID_INTERVAL = "invalid_interval"
    FAILED = "failed"


@dataclass
class RecordResult:
    """What happened to one due user_crops record during a sweep"""
    user_crop_id: str
    user_id: Optional[str]
    notification: NotificationOutcome
    reschedule: RescheduleOutcome
    next_watering: Optional[datetime] = None
    error: Optional[str] = None


@dataclass
class SweepReport:
    started_at: datetime
    results: List[RecordResult] = field(default_factory=list)
    aborted: bool = False
    error: Optional[str] = None

    def count(self, outcome: Enum) -> int:
        if isinstance(outcome, NotificationOutcome):
            return sum(1 for r in self.results if r.notification == outcome)
        return sum(1 for r in self.results if r.reschedule == outcome)

    def summary(self) -> Dict[str, Any]:
        return {
            "started_at": self.started_at.isoformat(),
            "due": len(self.results),
            "sent": self.count(NotificationOutcome.SENT),
            "failed": self.count(NotificationOutcome.FAILED),
            "skipped": self.count(NotificationOutcome.SKIPPED),
            "rescheduled": self.count(RescheduleOutcome.RESCHEDULED),
            "aborted": self.aborted,
            "error": self.error,
        }
