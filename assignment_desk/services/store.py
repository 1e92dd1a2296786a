import logging
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from assignment_desk.models.assignment import Assignment
from assignment_desk.models.course import Course
from assignment_desk.models.submission import Submission

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A read or write against the remote store failed."""


class RemoteStore:
    """
    Round-trip level access to the courses / assignments / submissions
    collections.

    Every public method is exactly one exchange with the store and looks
    records up by equality on a single indexed field. Driver errors are
    re-raised as StoreError so callers only deal with one failure type.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_courses(self, instructor_id: str | None = None) -> list[Course]:
        q = self.db.query(Course)
        if instructor_id is not None:
            q = q.filter(Course.instructor_id == instructor_id)
        return self._read("courses", q.all)

    def get_assignment(self, assignment_id: str) -> Assignment | None:
        q = self.db.query(Assignment).filter(Assignment.id == assignment_id)
        return self._read("assignments", q.first)

    def list_assignments_for_course(self, course_id: str) -> list[Assignment]:
        q = self.db.query(Assignment).filter(Assignment.course_id == course_id)
        return self._read("assignments", q.all)

    def count_submissions_for_assignment(self, assignment_id: str) -> int:
        q = self.db.query(func.count(Submission.id)).filter(
            Submission.assignment_id == assignment_id
        )
        return int(self._read("submissions", q.scalar) or 0)

    def add_assignment(self, **fields: Any) -> Assignment:
        a = Assignment(**fields)
        try:
            self.db.add(a)
            self.db.commit()
            self.db.refresh(a)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError("write to assignments failed") from exc
        logger.info("Stored assignment %s in course %s", a.id, a.course_id)
        return a

    def remove_assignment(self, assignment_id: str) -> None:
        try:
            # removing a missing key is not an error for the store
            self.db.query(Assignment).filter(Assignment.id == assignment_id).delete(
                synchronize_session=False
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError("write to assignments failed") from exc
        logger.info("Removed assignment %s", assignment_id)

    def _read(self, collection: str, fetch):
        try:
            return fetch()
        except SQLAlchemyError as exc:
            raise StoreError(f"read from {collection} failed") from exc
