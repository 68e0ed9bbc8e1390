from sqlalchemy.orm import Session

from agroguide.db.models.enums import AppRoleEnum
from agroguide.db.models.profile import Profile
from agroguide.db.postgres import SessionLocal
from agroguide.services.auth.schemas import ProfileResponse


class ProfileService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_profile(self, user_id: str) -> Profile | None:
        return self.db.query(Profile).filter(Profile.user_id == user_id).first()

    def get_user_role(self, user_id: str) -> AppRoleEnum:
        """Role of a user; no profile row means a plain user"""
        profile = self.get_profile(user_id)
        return profile.role if profile else AppRoleEnum.USER

    def promote_to_admin(self, *, user_id: str, display_name: str | None = None) -> Profile:
        """Give a user the admin role, creating the profile row when missing."""
        profile = self.get_profile(user_id)
        if profile is None:
            profile = Profile(user_id=user_id, display_name=display_name, role=AppRoleEnum.ADMIN)
            self.db.add(profile)
        else:
            profile.role = AppRoleEnum.ADMIN
            if display_name:
                profile.display_name = display_name
        self.db.commit()
        self.db.refresh(profile)
        return profile


def load_profile(user_id: str) -> ProfileResponse | None:
    """Profile loader for SessionMirror; uses its own short-lived DB session."""
    db = SessionLocal()
    try:
        profile = ProfileService(db).get_profile(user_id)
        return ProfileResponse.model_validate(profile) if profile else None
    finally:
        db.close()
