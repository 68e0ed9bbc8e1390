from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, DateTime, Text, Boolean
from sqlalchemy.sql import func
from agroguide.db.postgres import Base
from agroguide.db.models.columns import StringList, enum_type, new_uuid, utcnow
from agroguide.db.models.enums import PlantCategoryEnum

if TYPE_CHECKING:
    from agroguide.db.models.favorite import Favorite


class Plant(Base):
    """Catalog entry with care instructions"""
    __tablename__ = "plants"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    slug: Mapped[str] = mapped_column(String(200), unique=True, index=True, nullable=False)

    common_name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    scientific_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    category: Mapped[PlantCategoryEnum] = mapped_column(enum_type(PlantCategoryEnum), nullable=False, index=True)
    subcategory: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Care attributes
    climate: Mapped[str | None] = mapped_column(Text, nullable=True)
    soil: Mapped[str | None] = mapped_column(Text, nullable=True)
    watering_schedule: Mapped[str | None] = mapped_column(Text, nullable=True)
    sunlight: Mapped[str | None] = mapped_column(Text, nullable=True)
    fertilizer: Mapped[str | None] = mapped_column(Text, nullable=True)
    harvesting: Mapped[str | None] = mapped_column(Text, nullable=True)
    diseases: Mapped[list[str] | None] = mapped_column(StringList, nullable=True)
    remedies: Mapped[list[str] | None] = mapped_column(StringList, nullable=True)

    images: Mapped[list[str] | None] = mapped_column(StringList, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    care_instructions: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Drafts are only visible to admins
    published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )

    # Deleting a plant removes its favorites; SQLite does not enforce the FK cascade
    favorites: Mapped[list["Favorite"]] = relationship(
        "Favorite", back_populates="plant", cascade="all, delete-orphan"
    )
