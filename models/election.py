# models/election.py

from datetime import datetime, timedelta
from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field

from .enums import ElectionStatus


# -------------------------------------------------
# Election record (as returned by /api/election/status)
# -------------------------------------------------
class ElectionRecord(BaseModel):
    """
    Snapshot of the configured election window.

    Dates are civil `YYYY-MM-DD` strings and times `HH:MM` strings in Ghana
    time (UTC+0). They stay strings here; the clock turns them into instants
    and rejects malformed values at that point.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    title: Optional[str] = None
    is_active: bool = Field(
        False,
        validation_alias=AliasChoices("isActive", "is_active"),
        serialization_alias="isActive",
    )

    date: Optional[str] = None
    start_date: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("startDate", "start_date"),
        serialization_alias="startDate",
    )
    end_date: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("endDate", "end_date"),
        serialization_alias="endDate",
    )
    start_time: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("startTime", "start_time"),
        serialization_alias="startTime",
    )
    end_time: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("endTime", "end_time"),
        serialization_alias="endTime",
    )


# -------------------------------------------------
# Clock result
# -------------------------------------------------
class ElectionClockResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: ElectionStatus
    remaining: Optional[timedelta] = None
    display: str

    @computed_field
    @property
    def remaining_seconds(self) -> Optional[int]:
        if self.remaining is None:
            return None
        return int(self.remaining.total_seconds())


class MonitorSnapshot(BaseModel):
    """Latest countdown state held by the election monitor."""
    model_config = ConfigDict(frozen=True)

    status: Optional[ElectionStatus] = None
    remaining: Optional[timedelta] = None
    display: str
    election: Optional[ElectionRecord] = None
    updated_at: Optional[datetime] = None


class ElectionStatusResponse(BaseModel):
    election: ElectionRecord
    clock: ElectionClockResult
    evaluated_at: str


class ElectionEvaluateRequest(BaseModel):
    election: ElectionRecord
    now: Optional[str] = Field(None, description="ISO-8601 instant; server clock when omitted")
