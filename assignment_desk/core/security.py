from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from assignment_desk.core.config import ACCESS_TOKEN_EXPIRE, ALGORITHM, SECRET_KEY


class InvalidTokenError(Exception):
    pass


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """
    Mint an identity token the way the upstream identity provider does.

    Used by tooling and tests; the service itself only verifies tokens.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or ACCESS_TOKEN_EXPIRE)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from exc
