from fastapi import APIRouter, Depends, HTTPException, Query, status

from assignment_desk.core.current_user import get_current_user
from assignment_desk.core.deps import get_store
from assignment_desk.core.permissions import require_user_id
from assignment_desk.schemas.assignment import AssignmentCreate
from assignment_desk.schemas.board import AssignmentBoardRead
from assignment_desk.schemas.user import ActingUser
from assignment_desk.services.board import (
    AssignmentValidationError,
    ConfirmationRequiredError,
    CourseNotInScopeError,
    registry,
)
from assignment_desk.services.notifications import Notifier
from assignment_desk.services.store import RemoteStore

router = APIRouter()


def _write_failed(notifier: Notifier) -> HTTPException:
    # the board already logged the error and queued the generic message
    messages = [n.message for n in notifier.drain() if n.level == "error"]
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=messages[-1] if messages else "Store unavailable",
    )


@router.get("/board", response_model=AssignmentBoardRead)
def get_board(
    store: RemoteStore = Depends(get_store),
    current_user: ActingUser = Depends(get_current_user),
):
    board = registry.get(current_user)
    notifier = Notifier()
    # a failed load keeps the previous state and reports it as a notification
    board.load(store, notifier)
    return board.snapshot(notifier)


@router.post(
    "",
    response_model=AssignmentBoardRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"description": "Course not found"},
        422: {"description": "Title and course are required"},
        503: {"description": "Failed to create assignment"},
    },
)
def create_assignment(
    payload: AssignmentCreate,
    store: RemoteStore = Depends(get_store),
    current_user: ActingUser = Depends(require_user_id),
):
    board = registry.get(current_user)
    notifier = Notifier()
    try:
        created = board.create(store, payload, notifier)
    except AssignmentValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    except CourseNotInScopeError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")

    if not created:
        raise _write_failed(notifier)
    return board.snapshot(notifier)


@router.delete(
    "/{assignment_id}",
    response_model=AssignmentBoardRead,
    responses={
        400: {"description": "Deletion must be confirmed"},
        404: {"description": "Course not found"},
        503: {"description": "Failed to delete assignment"},
    },
)
def delete_assignment(
    assignment_id: str,
    confirm: bool = Query(False, description="Explicit confirmation of the deletion"),
    store: RemoteStore = Depends(get_store),
    current_user: ActingUser = Depends(require_user_id),
):
    board = registry.get(current_user)
    notifier = Notifier()
    try:
        deleted = board.delete(store, assignment_id, notifier, confirmed=confirm)
    except ConfirmationRequiredError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Deletion must be confirmed",
        )
    except CourseNotInScopeError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")

    if not deleted:
        raise _write_failed(notifier)
    return board.snapshot(notifier)
