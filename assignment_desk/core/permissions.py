from fastapi import Depends, HTTPException, status

from assignment_desk.core.current_user import get_current_user
from assignment_desk.schemas.user import ActingUser


def require_user_id(current_user: ActingUser = Depends(get_current_user)) -> ActingUser:
    if not current_user.id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Acting user id required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user
