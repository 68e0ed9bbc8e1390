from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from agroguide.core.config import get_settings


def decode_access_token(token: str) -> dict | None:
    """Verify an access token issued by the hosted auth service and return its claims."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
        )
    except JWTError:
        return None
    if not payload.get("sub"):
        return None
    return payload


def create_access_token(subject: str, email: str | None = None, expires_minutes: int = 60) -> str:
    """Mint a token shaped like the hosted auth service's. Used by scripts and tests."""
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode = {
        "sub": subject,
        "email": email,
        "aud": settings.jwt_audience,
        "role": "authenticated",
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.supabase_jwt_secret, algorithm=settings.jwt_algorithm)
