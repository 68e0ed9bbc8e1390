import os
import time
import uuid
from types import SimpleNamespace

# Must be set before agroguide is imported: settings and engine read them at import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SUPABASE_URL"] = "http://auth.test"
os.environ["SUPABASE_ANON_KEY"] = "anon-key"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from supabase import AuthApiError

from agroguide.main import app
from agroguide.core.dependencies import get_auth_client
from agroguide.core.rate_limit import feedback_limiter
from agroguide.core.security import create_access_token, decode_access_token
from agroguide.db.postgres import Base, get_db
from agroguide.db.models.enums import AppRoleEnum, PlantCategoryEnum
from agroguide.db.models.plant import Plant
from agroguide.db.models.profile import Profile
from agroguide.services.auth.client import HostedAuthClient
from agroguide.services.plants.filtering import generate_slug


@pytest.fixture()
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture()
def statements(engine):
    """Every SQL statement executed on the test engine, in order."""
    seen = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        seen.append(statement.strip())

    event.listen(engine, "before_cursor_execute", _record)
    yield seen
    event.remove(engine, "before_cursor_execute", _record)


class FakeSupabaseAuth:
    """Stands in for `create_client(...).auth`; same method names and shapes."""

    PASSWORD = "secret123"

    def __init__(self):
        self.users = {}
        self.fail_logout = False
        self.revoked = []
        self.session = None
        self._subscribers = {}
        self.admin = SimpleNamespace(sign_out=self._admin_sign_out)

    def add_user(self, email, user_id=None):
        user_id = user_id or str(uuid.uuid4())
        self.users[email] = user_id
        return user_id

    def _new_session(self, email):
        user_id = self.users[email]
        return SimpleNamespace(
            access_token=create_access_token(user_id, email=email),
            refresh_token=f"refresh-{user_id}",
            expires_in=3600,
            expires_at=int(time.time()) + 3600,
            token_type="bearer",
            user=SimpleNamespace(id=user_id, email=email),
        )

    def _notify(self, event, session):
        for callback in list(self._subscribers.values()):
            callback(event, session)

    def on_auth_state_change(self, callback):
        key = uuid.uuid4()
        self._subscribers[key] = callback
        return SimpleNamespace(id=key, unsubscribe=lambda: self._subscribers.pop(key, None))

    def sign_in_with_password(self, credentials):
        email = credentials.get("email")
        if email not in self.users or credentials.get("password") != self.PASSWORD:
            raise AuthApiError("Invalid login credentials", 400, "invalid_credentials")
        self.session = self._new_session(email)
        self._notify("SIGNED_IN", self.session)
        return SimpleNamespace(user=self.session.user, session=self.session)

    def refresh_session(self, refresh_token=None):
        user_id = (refresh_token or "").removeprefix("refresh-")
        email = next((e for e, uid in self.users.items() if uid == user_id), None)
        if email is None:
            raise AuthApiError("Invalid Refresh Token", 400, "refresh_token_not_found")
        self.session = self._new_session(email)
        self._notify("TOKEN_REFRESHED", self.session)
        return SimpleNamespace(user=self.session.user, session=self.session)

    def get_session(self):
        return self.session

    def get_user(self, jwt=None):
        claims = decode_access_token(jwt or "")
        if claims is None:
            raise AuthApiError("invalid JWT", 401, "bad_jwt")
        return SimpleNamespace(user=SimpleNamespace(id=claims["sub"], email=claims.get("email")))

    def _admin_sign_out(self, jwt, scope="global"):
        if self.fail_logout:
            raise AuthApiError("Session store unavailable", 500, None)
        self.revoked.append(jwt)

    def sign_out(self, options=None):
        # Mirrors the library: revoke errors are swallowed, the local session always goes
        try:
            if self.session is not None:
                self._admin_sign_out(self.session.access_token, (options or {}).get("scope", "global"))
        except AuthApiError:
            pass
        self.session = None
        self._notify("SIGNED_OUT", None)


@pytest.fixture()
def fake_auth():
    return FakeSupabaseAuth()


@pytest.fixture()
def auth_client(fake_auth):
    return HostedAuthClient(auth=fake_auth)


@pytest.fixture()
def client(session_factory, fake_auth):
    """TestClient wired to the test database and the fake auth service."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_auth_client] = lambda: HostedAuthClient(auth=fake_auth)
    feedback_limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()
    feedback_limiter.reset()


def auth_headers(user_id: str, email: str | None = None) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id, email=email)}"}


@pytest.fixture()
def make_profile(db_session):
    def _make(display_name="Test User", role=AppRoleEnum.USER, user_id=None):
        profile = Profile(
            user_id=user_id or str(uuid.uuid4()),
            display_name=display_name,
            role=role,
        )
        db_session.add(profile)
        db_session.commit()
        db_session.refresh(profile)
        return profile
    return _make


@pytest.fixture()
def user(make_profile):
    profile = make_profile(display_name="Plant Lover")
    return {"id": profile.user_id, "headers": auth_headers(profile.user_id, "lover@example.com")}


@pytest.fixture()
def admin(make_profile):
    profile = make_profile(display_name="Head Gardener", role=AppRoleEnum.ADMIN)
    return {"id": profile.user_id, "headers": auth_headers(profile.user_id, "admin@example.com")}


@pytest.fixture()
def make_plant(db_session):
    def _make(common_name, category="home", published=True, **fields):
        fields.setdefault("slug", generate_slug(common_name))
        plant = Plant(
            common_name=common_name,
            category=PlantCategoryEnum(category),
            published=published,
            **fields,
        )
        db_session.add(plant)
        db_session.commit()
        db_session.refresh(plant)
        return plant
    return _make
