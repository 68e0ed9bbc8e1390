"""
Client for the hosted auth service, built on supabase-py's auth client.

Sign-in, token refresh and sign-out happen on the hosted service; supabase-py
keeps the current session and notifies subscribers of auth-state changes.
This wrapper converts its sessions into AuthSession and its errors into
AuthServiceError so the rest of the app does not depend on library types.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from supabase import AuthError, ClientOptions, create_client

from agroguide.core.config import get_settings

logger = logging.getLogger(__name__)


class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


class AuthServiceError(Exception):
    """The hosted auth service rejected a call; message is the service's own text"""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class AuthUser:
    id: str
    email: Optional[str] = None

    @classmethod
    def from_supabase(cls, user) -> "AuthUser":
        return cls(id=str(user.id), email=getattr(user, "email", None))


@dataclass
class AuthSession:
    access_token: str
    refresh_token: Optional[str]
    expires_at: Optional[int]
    user: AuthUser

    @classmethod
    def from_supabase(cls, session) -> Optional["AuthSession"]:
        if session is None:
            return None
        return cls(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=session.expires_at,
            user=AuthUser.from_supabase(session.user),
        )


AuthListener = Callable[[str, Optional[AuthSession]], None]


def _service_error(error: AuthError) -> AuthServiceError:
    message = getattr(error, "message", None) or str(error)
    return AuthServiceError(message, getattr(error, "status", None))


class HostedAuthClient:
    """Wraps `create_client(SUPABASE_URL, SUPABASE_ANON_KEY).auth`"""

    def __init__(
        self,
        url: str | None = None,
        anon_key: str | None = None,
        auth=None,
    ) -> None:
        if auth is None:
            settings = get_settings()
            client = create_client(
                url or settings.supabase_url,
                anon_key if anon_key is not None else settings.supabase_anon_key,
                options=ClientOptions(auto_refresh_token=False, persist_session=False),
            )
            auth = client.auth
        self.auth = auth

    def _call(self, method, *args, **kwargs):
        try:
            return method(*args, **kwargs)
        except AuthError as e:
            raise _service_error(e) from e

    # -- listeners -------------------------------------------------------

    def on_auth_state_change(self, callback: AuthListener):
        """Subscribe to auth-state changes; returns an object with `unsubscribe()`.

        A failing callback is logged so sign-in and sign-out still complete.
        """
        def listener(event, session) -> None:
            try:
                callback(str(getattr(event, "value", event)), AuthSession.from_supabase(session))
            except Exception:
                logger.exception("Auth listener failed on %s", event)

        return self.auth.on_auth_state_change(listener)

    # -- requests --------------------------------------------------------

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        response = self._call(self.auth.sign_in_with_password, {"email": email, "password": password})
        session = AuthSession.from_supabase(response.session)
        if session is None:
            raise AuthServiceError("Sign in returned no session")
        logger.info("Signed in as %s", session.user.id)
        return session

    def refresh_session(self) -> AuthSession:
        current = self.get_session()
        if current is None or not current.refresh_token:
            raise AuthServiceError("No session to refresh")
        response = self._call(self.auth.refresh_session, current.refresh_token)
        return AuthSession.from_supabase(response.session)

    def get_session(self) -> Optional[AuthSession]:
        return AuthSession.from_supabase(self._call(self.auth.get_session))

    def get_user(self, access_token: str | None = None) -> AuthUser:
        token = access_token or self._require_token()
        response = self._call(self.auth.get_user, token)
        if response is None or response.user is None:
            raise AuthServiceError("User not found", 404)
        return AuthUser.from_supabase(response.user)

    def sign_out(self, access_token: str | None = None) -> None:
        """Revoke the session on the hosted service and drop it locally.

        The token is revoked through the admin logout call first because
        `auth.sign_out` suppresses revoke failures.
        """
        local = self.get_session()
        token = access_token or (local.access_token if local else None)
        if token is None:
            raise AuthServiceError("Not signed in")

        self._call(self.auth.admin.sign_out, token)
        if local is not None:
            self._call(self.auth.sign_out, {"scope": "local"})

    def _require_token(self) -> str:
        session = self.get_session()
        if session is None:
            raise AuthServiceError("Not signed in")
        return session.access_token
