import logging
import threading
from collections import OrderedDict
from datetime import datetime, timezone

from assignment_desk.core.config import BOARD_REGISTRY_MAX
from assignment_desk.schemas.assignment import AssignmentCreate, EnrichedAssignment
from assignment_desk.schemas.board import AssignmentBoardRead, BoardStats
from assignment_desk.schemas.course import CourseRead
from assignment_desk.schemas.user import ActingUser
from assignment_desk.services import aggregator
from assignment_desk.services.notifications import Notifier
from assignment_desk.services.store import RemoteStore, StoreError

logger = logging.getLogger(__name__)


class AssignmentValidationError(Exception):
    pass


class CourseNotInScopeError(Exception):
    pass


class ConfirmationRequiredError(Exception):
    pass


class AssignmentBoard:
    """
    Assignment screen state for one acting user.

    Holds the last successfully loaded course scope and enriched sequence.
    A failed load or write never replaces them, so stale data stays
    visible until the next successful load.

    Messages go to the notifier passed to each call, so concurrent requests
    against the same board never see each other's notifications.
    """

    def __init__(self, user: ActingUser):
        self.user = user
        self.courses: list[CourseRead] = []
        self.assignments: list[EnrichedAssignment] = []
        self.is_loading = False
        self.loaded = False

    def load(self, store: RemoteStore, notifier: Notifier) -> bool:
        self.is_loading = True
        try:
            courses = aggregator.resolve_course_scope(store, self.user)
            assignments = aggregator.aggregate_assignments(store, self.user, courses)
        except StoreError:
            logger.exception("Error fetching assignments for user %s", self.user.id)
            notifier.error("Failed to load assignments.")
            return False
        finally:
            self.is_loading = False

        self.courses = [CourseRead.model_validate(c) for c in courses]
        self.assignments = assignments
        self.loaded = True
        return True

    def create(self, store: RemoteStore, payload: AssignmentCreate, notifier: Notifier) -> bool:
        """
        Store a new assignment, then reload everything.

        Raises AssignmentValidationError / CourseNotInScopeError before any
        write. Returns False when the store write failed.
        """
        title = payload.title.strip()
        course_id = payload.course_id.strip()
        if not title or not course_id:
            notifier.error("Title and course are required")
            raise AssignmentValidationError("Title and course are required")

        try:
            if course_id not in self._scope_ids(store):
                notifier.error("Course not found")
                raise CourseNotInScopeError(course_id)

            store.add_assignment(
                title=payload.title,
                course_id=course_id,
                description=payload.description,
                due_date=payload.due_date,
                points=payload.points,
                created_at=datetime.now(timezone.utc),
                created_by=self.user.id,
            )
        except StoreError:
            logger.exception("Error creating assignment for user %s", self.user.id)
            notifier.error("Failed to create assignment")
            return False

        notifier.success("Assignment created successfully")

        # full refetch rather than inserting locally, like a page reload
        self.load(store, notifier)
        return True

    def delete(
        self,
        store: RemoteStore,
        assignment_id: str,
        notifier: Notifier,
        confirmed: bool = False,
    ) -> bool:
        """
        Remove one assignment and patch the loaded sequence.

        Raises ConfirmationRequiredError without confirmation and
        CourseNotInScopeError when the assignment belongs to a course the
        user cannot see. An unknown id is a no-op removal.
        """
        if not confirmed:
            raise ConfirmationRequiredError(assignment_id)

        # nothing to patch on a board that was never mounted
        if not self.loaded:
            self.load(store, notifier)

        try:
            existing = store.get_assignment(assignment_id)
            if existing is not None and existing.course_id not in self._scope_ids(store):
                notifier.error("Course not found")
                raise CourseNotInScopeError(existing.course_id)

            store.remove_assignment(assignment_id)
        except StoreError:
            logger.exception("Error deleting assignment %s", assignment_id)
            notifier.error("Failed to delete assignment")
            return False

        # patch local state only; submissions of the assignment stay in the store
        self.assignments = [a for a in self.assignments if a.id != assignment_id]
        notifier.success("Assignment deleted successfully")
        return True

    def _scope_ids(self, store: RemoteStore) -> set[str]:
        return {c.id for c in aggregator.resolve_course_scope(store, self.user)}

    @property
    def active(self) -> list[EnrichedAssignment]:
        return aggregator.active_assignments(self.assignments)

    @property
    def pending_grading(self) -> list[EnrichedAssignment]:
        return aggregator.pending_grading(self.assignments)

    @property
    def recently_graded(self) -> list[EnrichedAssignment]:
        return aggregator.recently_graded(self.assignments)

    @property
    def stats(self) -> BoardStats:
        return BoardStats(
            total=len(self.assignments),
            active=len(self.active),
            pending_grading=len(self.pending_grading),
            graded=len(self.recently_graded),
        )

    def snapshot(self, notifier: Notifier) -> AssignmentBoardRead:
        return AssignmentBoardRead(
            courses=self.courses,
            assignments=self.assignments,
            active=self.active,
            pending_grading=self.pending_grading,
            recently_graded=self.recently_graded,
            stats=self.stats,
            notifications=notifier.drain(),
        )


class BoardRegistry:
    """
    One board per acting user id, least recently used first out.

    At most ``max_boards`` boards are held; an evicted user simply gets a
    fresh board that loads on its next request.
    """

    def __init__(self, max_boards: int = BOARD_REGISTRY_MAX):
        self.max_boards = max(1, max_boards)
        self._boards: OrderedDict[str | None, AssignmentBoard] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, user: ActingUser) -> AssignmentBoard:
        with self._lock:
            board = self._boards.get(user.id)
            if board is None:
                board = AssignmentBoard(user)
                self._boards[user.id] = board
                while len(self._boards) > self.max_boards:
                    evicted, _ = self._boards.popitem(last=False)
                    logger.debug("Evicted board of user %s", evicted)
            else:
                self._boards.move_to_end(user.id)
                # role can change between requests; next load picks it up
                board.user = user
            return board

    def __len__(self) -> int:
        with self._lock:
            return len(self._boards)

    def __contains__(self, user_id) -> bool:
        with self._lock:
            return user_id in self._boards

    def clear(self) -> None:
        with self._lock:
            self._boards.clear()


registry = BoardRegistry()
