from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from assignment_desk.core.config import DEFAULT_POINTS, POINTS_MAX, POINTS_MIN


class AssignmentCreate(BaseModel):
    # title / course_id emptiness is checked by the board, not here,
    # so the failure is reported as a notification like the other errors
    title: str = ""
    course_id: str = ""
    description: str = ""
    due_date: Optional[date] = None
    points: int = Field(default=DEFAULT_POINTS, ge=POINTS_MIN, le=POINTS_MAX)

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class AssignmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    course_id: str
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None
    points: int
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None


class EnrichedAssignment(AssignmentRead):
    """An assignment plus the display fields derived on every load."""

    course_title: str
    submissions_count: int = Field(default=0, ge=0)
