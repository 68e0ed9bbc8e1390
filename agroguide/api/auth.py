import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from agroguide.core.dependencies import CurrentUser, get_auth_client, get_current_user
from agroguide.db.postgres import get_db
from agroguide.services.auth.client import AuthServiceError, HostedAuthClient
from agroguide.services.auth.schemas import LoginRequest, MeResponse, TokenResponse
from agroguide.services.auth.service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    auth_client: HostedAuthClient = Depends(get_auth_client),
    db: Session = Depends(get_db),
):
    """Sign in through the hosted auth service and report the user's role"""
    try:
        session = auth_client.sign_in_with_password(payload.email, payload.password)
    except AuthServiceError as e:
        logger.info("Sign in failed for %s: %s", payload.email, e.message)
        code = status.HTTP_401_UNAUTHORIZED if e.status_code in (400, 401) else status.HTTP_502_BAD_GATEWAY
        raise HTTPException(status_code=code, detail=e.message)

    role = ProfileService(db).get_user_role(session.user.id)
    return TokenResponse(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_at=session.expires_at,
        user_id=session.user.id,
        role=role.value,
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    current_user: CurrentUser = Depends(get_current_user),
    auth_client: HostedAuthClient = Depends(get_auth_client),
):
    """Revoke the caller's session on the hosted auth service"""
    try:
        auth_client.sign_out(access_token=current_user.access_token)
    except AuthServiceError as e:
        logger.error("Sign out failed for %s: %s", current_user.id, e.message)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Sign out failed: {e.message}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=MeResponse)
def get_current_user_info(current_user: CurrentUser = Depends(get_current_user)):
    """Current user, profile and role.

    The frontend uses this to check the token is still valid and to pick
    the catalog or the admin dashboard.
    """
    return {
        "id": current_user.id,
        "email": current_user.email,
        "profile": current_user.profile,
        "is_admin": current_user.is_admin,
    }
