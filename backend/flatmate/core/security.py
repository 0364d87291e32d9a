import secrets
from datetime import datetime, timedelta, timezone

from jose import jwt

from flatmate.core.config import get_settings


def create_access_token(subject: str, expires_delta: timedelta | None = None) -> str:
    """Mint a bearer token whose ``sub`` is the opaque user id.

    Sign-in (OTP or password) happens in the identity provider; this helper is
    what that provider, local tooling and the tests use to hand us an identity.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "typ": "access",
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": now,
        "nbf": now,
        "jti": secrets.token_urlsafe(24),
        "exp": now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    settings = get_settings()
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        issuer=settings.JWT_ISSUER,
    )
