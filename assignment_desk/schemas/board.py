from typing import Literal

from pydantic import BaseModel

from assignment_desk.schemas.assignment import EnrichedAssignment
from assignment_desk.schemas.course import CourseRead


class NotificationRead(BaseModel):
    level: Literal["success", "error"]
    message: str


class BoardStats(BaseModel):
    total: int
    active: int
    pending_grading: int
    graded: int


class AssignmentBoardRead(BaseModel):
    courses: list[CourseRead]
    assignments: list[EnrichedAssignment]
    active: list[EnrichedAssignment]
    pending_grading: list[EnrichedAssignment]
    recently_graded: list[EnrichedAssignment]
    stats: BoardStats
    notifications: list[NotificationRead] = []
