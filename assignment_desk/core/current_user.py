import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from assignment_desk.core.security import InvalidTokenError, decode_access_token
from assignment_desk.schemas.user import ActingUser

logger = logging.getLogger(__name__)

# no credentials is not an error: the acting user is simply anonymous
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> ActingUser:
    if credentials is None:
        return ActingUser()

    try:
        payload = decode_access_token(credentials.credentials)
    except InvalidTokenError as exc:
        logger.info("Rejected identity token: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    return ActingUser(
        id=str(user_id) if user_id else None,
        role=payload.get("role"),
    )
