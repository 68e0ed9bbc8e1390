"""
Session mirror: keeps user, session and profile in step with the hosted auth state.

The mirror subscribes to the auth client's state changes and also reads the
current session once at start, since the listener may not have fired yet.
Both paths can deliver the same session; profile fetches are single-flight per
(user id, access token) so that case costs one fetch.
"""
import logging
import threading
from typing import Any, Callable, Dict, Optional, Tuple

from agroguide.db.models.enums import AppRoleEnum
from agroguide.services.auth.client import (
    AuthServiceError,
    AuthSession,
    AuthUser,
    HostedAuthClient,
)

logger = logging.getLogger(__name__)

ProfileLoader = Callable[[str], Any]


class SessionMirror:
    def __init__(self, auth_client: HostedAuthClient, profile_loader: ProfileLoader) -> None:
        self.auth_client = auth_client
        self.profile_loader = profile_loader

        self._lock = threading.Lock()
        self._user: Optional[AuthUser] = None
        self._session: Optional[AuthSession] = None
        self._profile: Any = None
        self._profile_key: Optional[Tuple[str, str]] = None
        self._inflight: Dict[Tuple[str, str], threading.Event] = {}
        self._loading = True
        self._subscription: Any = None

    # -- state -----------------------------------------------------------

    @property
    def user(self) -> Optional[AuthUser]:
        with self._lock:
            return self._user

    @property
    def session(self) -> Optional[AuthSession]:
        with self._lock:
            return self._session

    @property
    def profile(self) -> Any:
        with self._lock:
            return self._profile

    @property
    def loading(self) -> bool:
        with self._lock:
            return self._loading

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        profile = self.profile
        return profile is not None and getattr(profile, "role", None) == AppRoleEnum.ADMIN

    # -- lifecycle -------------------------------------------------------

    def start(self) -> None:
        if self._subscription is None:
            self._subscription = self.auth_client.on_auth_state_change(self.handle_auth_event)
        self.sync(self.auth_client.get_session())

    def stop(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def handle_auth_event(self, event: str, session: Optional[AuthSession]) -> None:
        logger.debug("Auth event %s", event)
        self.sync(session)

    def sync(self, session: Optional[AuthSession]) -> None:
        """Mirror a session; fetch its profile unless already loaded or in flight"""
        with self._lock:
            self._session = session
            self._user = session.user if session else None

            if session is None:
                self._profile = None
                self._profile_key = None
                self._loading = False
                return

            key = (session.user.id, session.access_token)
            if self._profile_key == key:
                self._loading = False
                return

            waiter = self._inflight.get(key)
            owner = waiter is None
            if owner:
                waiter = threading.Event()
                self._inflight[key] = waiter

        if not owner:
            waiter.wait()
            return

        try:
            profile = self._fetch_profile(session.user.id)
            with self._lock:
                current = self._session
                # A newer session (or sign-out) arrived while fetching
                if current is not None and (current.user.id, current.access_token) == key:
                    self._profile = profile
                    self._profile_key = key
                self._loading = False
        finally:
            with self._lock:
                self._inflight.pop(key, None)
            waiter.set()

    def _fetch_profile(self, user_id: str) -> Any:
        try:
            return self.profile_loader(user_id)
        except Exception as e:
            logger.warning("Profile fetch error for %s: %s", user_id, e)
            return None

    def clear(self) -> None:
        with self._lock:
            self._user = None
            self._session = None
            self._profile = None
            self._profile_key = None

    def sign_out(self) -> Optional[AuthServiceError]:
        """Sign out on the hosted service. Returns the error instead of raising."""
        try:
            self.auth_client.sign_out()
        except AuthServiceError as e:
            logger.error("Sign out failed: %s", e.message)
            return e
        self.clear()
        return None
