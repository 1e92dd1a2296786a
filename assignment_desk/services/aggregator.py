"""
Assignment aggregation pipeline.

    scope -> enrichment -> counting -> sort

Each stage talks to the store one round trip at a time (one per course,
then one per assignment), in order. The derived views at the bottom are
pure filters over the sorted result.
"""
import logging
from datetime import date, datetime, time, timezone
from typing import Iterable, Sequence

from assignment_desk.core.config import TEACHER_ROLE
from assignment_desk.models.course import Course
from assignment_desk.schemas.assignment import AssignmentRead, EnrichedAssignment
from assignment_desk.schemas.user import ActingUser
from assignment_desk.services.store import RemoteStore

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def resolve_course_scope(store: RemoteStore, user: ActingUser) -> list[Course]:
    """Courses visible to ``user``: own courses for teachers, all otherwise."""
    if not user.id:
        return []
    if user.role == TEACHER_ROLE:
        return store.list_courses(instructor_id=user.id)
    return store.list_courses()


def enrich_assignments(
    store: RemoteStore, courses: Iterable[Course]
) -> list[EnrichedAssignment]:
    enriched: list[EnrichedAssignment] = []
    for course in courses:
        for a in store.list_assignments_for_course(course.id):
            base = AssignmentRead.model_validate(a)
            enriched.append(
                EnrichedAssignment(**base.model_dump(), course_title=course.title)
            )
    return enriched


def count_submissions(
    store: RemoteStore, assignments: Iterable[EnrichedAssignment]
) -> list[EnrichedAssignment]:
    # one round trip per assignment; no ordering dependency between them,
    # so this is the stage to batch if it ever gets slow
    return [
        a.model_copy(
            update={"submissions_count": store.count_submissions_for_assignment(a.id)}
        )
        for a in assignments
    ]


def _as_utc(value: datetime | None) -> datetime:
    if value is None:
        return EPOCH
    # SQLite often returns naive datetimes; treat as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def sort_newest_first(assignments: Iterable[EnrichedAssignment]) -> list[EnrichedAssignment]:
    return sorted(assignments, key=lambda a: _as_utc(a.created_at), reverse=True)


def aggregate_assignments(
    store: RemoteStore,
    user: ActingUser,
    courses: Sequence[Course] | None = None,
) -> list[EnrichedAssignment]:
    """
    Run the whole pipeline for ``user``.

    Pass ``courses`` when the scope was already resolved for this load so
    it is not fetched twice. Store failures propagate as StoreError; there
    is no partial result.
    """
    if not user.id:
        return []

    if courses is None:
        courses = resolve_course_scope(store, user)

    enriched = enrich_assignments(store, courses)
    counted = count_submissions(store, enriched)
    result = sort_newest_first(counted)

    logger.debug(
        "Aggregated %d assignments over %d courses for user %s (%s)",
        len(result),
        len(courses),
        user.id,
        user.role,
    )
    return result


def due_cutoff(due: date) -> datetime:
    """A date-only due date counts from midnight UTC of that day."""
    return datetime.combine(due, time.min, tzinfo=timezone.utc)


def active_assignments(
    assignments: Iterable[EnrichedAssignment], now: datetime | None = None
) -> list[EnrichedAssignment]:
    now = _as_utc(now or datetime.now(timezone.utc))
    return [a for a in assignments if a.due_date is None or due_cutoff(a.due_date) >= now]


def pending_grading(assignments: Iterable[EnrichedAssignment]) -> list[EnrichedAssignment]:
    # presence of submissions only: there is no graded state to exclude
    return [a for a in assignments if a.submissions_count > 0]


def recently_graded(assignments: Iterable[EnrichedAssignment]) -> list[EnrichedAssignment]:
    # placeholder view; nothing in the data model records grading
    return []
