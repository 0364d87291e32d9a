from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from flatmate.core.errors import AuthenticationRequired
from flatmate.core.security import decode_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_optional_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    """Resolve the caller's user id, or ``None`` for anonymous viewers.

    A missing token means anonymous; a token that is present but invalid is
    always rejected rather than silently downgraded.
    """
    if credentials is None:
        return None

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
    )
    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise credentials_exception
    if payload.get("typ") != "access" or not payload.get("sub"):
        raise credentials_exception
    return str(payload["sub"])


def require_user_id(user_id: str | None = Depends(get_optional_user_id)) -> str:
    if user_id is None:
        raise AuthenticationRequired()
    return user_id
