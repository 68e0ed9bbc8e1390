"""Dependencies for authentication and authorization."""
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from agroguide.core.exceptions import AdminRequiredError, AuthRequiredError
from agroguide.core.security import decode_access_token
from agroguide.db.postgres import get_db
from agroguide.db.models.enums import AppRoleEnum
from agroguide.db.models.profile import Profile
from agroguide.services.auth.client import HostedAuthClient
from agroguide.services.auth.service import ProfileService

security = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    """Signed-in user resolved from the hosted auth token plus their profile row"""
    id: str
    email: Optional[str]
    access_token: str
    profile: Optional[Profile] = None

    @property
    def is_admin(self) -> bool:
        return self.profile is not None and self.profile.role == AppRoleEnum.ADMIN


def _invalid_credentials() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid authentication credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def _resolve_user(token: str, db: Session) -> CurrentUser:
    claims = decode_access_token(token)
    if claims is None:
        raise _invalid_credentials()

    user_id = claims["sub"]
    return CurrentUser(
        id=user_id,
        email=claims.get("email"),
        access_token=token,
        profile=ProfileService(db).get_profile(user_id),
    )


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[CurrentUser]:
    """Signed-in user, or None for anonymous callers. Bad tokens are still rejected."""
    if credentials is None:
        return None
    return _resolve_user(credentials.credentials, db)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> CurrentUser:
    """Get the current authenticated user from the bearer token."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _resolve_user(credentials.credentials, db)


def get_current_admin(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Get the current user and verify they are an admin."""
    if not current_user.is_admin:
        raise AdminRequiredError()
    return current_user


def require_feedback_author(
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
) -> CurrentUser:
    """Feedback needs a session; anonymous callers get the sign-in prompt before any write."""
    if current_user is None:
        raise AuthRequiredError()
    return current_user


def get_auth_client() -> HostedAuthClient:
    """Fresh auth client per request so sessions never leak between callers."""
    return HostedAuthClient()
