from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from agroguide.db.postgres import Base
from agroguide.db.models.columns import new_uuid, utcnow
from agroguide.db.models.plant import Plant


class Favorite(Base):
    """A user marked a plant as favorite. Existence only."""
    __tablename__ = "favorites"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    plant_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("plants.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "plant_id", name="uq_favorite_user_plant"),
    )

    plant: Mapped[Plant] = relationship(Plant, back_populates="favorites")
