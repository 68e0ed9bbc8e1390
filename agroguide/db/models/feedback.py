"""
Feedback sent by signed-in users and triaged by admins
"""
from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, DateTime, Text
from sqlalchemy.sql import func
from agroguide.db.postgres import Base
from agroguide.db.models.columns import enum_type, new_uuid, utcnow
from agroguide.db.models.enums import FeedbackCategoryEnum, FeedbackStatusEnum


class Feedback(Base):
    __tablename__ = "feedback"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)

    # Auth user id; profiles are joined on profiles.user_id when listing
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)

    category: Mapped[FeedbackCategoryEnum] = mapped_column(enum_type(FeedbackCategoryEnum), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    # Admin triage; any status can be set from any status
    status: Mapped[FeedbackStatusEnum] = mapped_column(
        enum_type(FeedbackStatusEnum),
        default=FeedbackStatusEnum.NEW,
        nullable=False,
        index=True
    )
    admin_reply: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )
