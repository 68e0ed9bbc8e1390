from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, DateTime, Text
from sqlalchemy.sql import func
from agroguide.db.postgres import Base
from agroguide.db.models.columns import new_uuid, utcnow


class Search(Base):
    """Search log table. Part of the hosted schema; nothing reads or writes it yet."""
    __tablename__ = "searches"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    query: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
