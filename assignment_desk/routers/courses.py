import logging

from fastapi import APIRouter, Depends, HTTPException, status

from assignment_desk.core.current_user import get_current_user
from assignment_desk.core.deps import get_store
from assignment_desk.schemas.course import CourseRead
from assignment_desk.schemas.user import ActingUser
from assignment_desk.services.aggregator import resolve_course_scope
from assignment_desk.services.store import RemoteStore, StoreError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[CourseRead],
    responses={503: {"description": "Store unavailable"}},
)
def list_courses(
    store: RemoteStore = Depends(get_store),
    current_user: ActingUser = Depends(get_current_user),
):
    try:
        return resolve_course_scope(store, current_user)
    except StoreError:
        logger.exception("Error fetching courses for user %s", current_user.id)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to load courses",
        )
