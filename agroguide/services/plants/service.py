"""
Plant catalog service
"""
import logging
from typing import Optional

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agroguide.core.exceptions import NotFoundError, handle_backend_error
from agroguide.db.models.enums import PlantCategoryEnum
from agroguide.db.models.plant import Plant
from agroguide.services.plants.filtering import generate_slug
from agroguide.services.plants.schemas import PlantCreateRequest, PlantUpdateRequest

logger = logging.getLogger(__name__)


def category_label(category: PlantCategoryEnum | str) -> str:
    return "🌿 Home" if category == PlantCategoryEnum.HOME else "🌾 Agriculture"


def build_plant_card(plant: Plant, is_favorite: bool = False) -> dict:
    """Card projection used by the catalog grid"""
    return {
        "id": plant.id,
        "slug": plant.slug,
        "name": plant.common_name,
        "scientific_name": plant.scientific_name,
        "category": "home" if plant.category == PlantCategoryEnum.HOME else "agriculture",
        "climate": plant.climate,
        "soil": plant.soil,
        "sunlight": plant.sunlight,
        "watering": plant.watering_schedule,
        "image": plant.images[0] if plant.images else None,
        "is_favorite": is_favorite,
    }


def build_admin_plant_item(plant: Plant) -> dict:
    return {
        "id": plant.id,
        "slug": plant.slug,
        "common_name": plant.common_name,
        "category": plant.category,
        "category_label": category_label(plant.category),
        "published": plant.published,
        "badge": "Published" if plant.published else "Draft",
        "created_at": plant.created_at,
    }


class PlantService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list_published(self) -> list[Plant]:
        """Published plants ordered by common name"""
        try:
            return (
                self.db.query(Plant)
                .filter(Plant.published.is_(True))
                .order_by(Plant.common_name)
                .all()
            )
        except SQLAlchemyError as e:
            raise handle_backend_error(e, "Error loading plants")

    def list_all(self) -> list[Plant]:
        """Every plant including drafts, newest first (admin)"""
        try:
            return self.db.query(Plant).order_by(desc(Plant.created_at)).all()
        except SQLAlchemyError as e:
            raise handle_backend_error(e, "Error fetching plants")

    def get(self, plant_id: str, include_drafts: bool = False) -> Plant:
        query = self.db.query(Plant).filter(Plant.id == plant_id)
        if not include_drafts:
            query = query.filter(Plant.published.is_(True))
        plant = query.first()
        if plant is None:
            raise NotFoundError("Plant")
        return plant

    def get_by_slug(self, slug: str, include_drafts: bool = False) -> Plant:
        query = self.db.query(Plant).filter(Plant.slug == slug)
        if not include_drafts:
            query = query.filter(Plant.published.is_(True))
        plant = query.first()
        if plant is None:
            raise NotFoundError("Plant")
        return plant

    def _unique_slug(self, base: str, exclude_id: Optional[str] = None) -> str:
        slug = base
        suffix = 2
        while True:
            query = self.db.query(Plant.id).filter(Plant.slug == slug)
            if exclude_id:
                query = query.filter(Plant.id != exclude_id)
            if query.first() is None:
                return slug
            slug = f"{base}-{suffix}"
            suffix += 1

    def create_plant(self, data: PlantCreateRequest) -> Plant:
        """Add a plant (admin). Slug comes from the common name unless given."""
        values = data.model_dump(exclude={"slug"})
        base_slug = generate_slug(data.slug or data.common_name)
        try:
            plant = Plant(slug=self._unique_slug(base_slug), **values)
            self.db.add(plant)
            self.db.commit()
            self.db.refresh(plant)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_backend_error(e, "Error creating plant")
        logger.info("Plant created: %s (%s)", plant.slug, plant.id)
        return plant

    def update_plant(self, plant_id: str, data: PlantUpdateRequest) -> Plant:
        """Partial update (admin); only fields present in the request are written"""
        plant = self.get(plant_id, include_drafts=True)
        changes = data.model_dump(exclude_unset=True)
        if "slug" in changes:
            changes["slug"] = self._unique_slug(generate_slug(changes["slug"]), exclude_id=plant.id)
        try:
            for field, value in changes.items():
                setattr(plant, field, value)
            self.db.commit()
            self.db.refresh(plant)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_backend_error(e, "Error updating plant")
        return plant

    def set_published(self, plant_id: str, published: bool) -> Plant:
        plant = self.get(plant_id, include_drafts=True)
        try:
            plant.published = published
            self.db.commit()
            self.db.refresh(plant)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_backend_error(e, "Error updating plant")
        logger.info("Plant %s %s", plant.slug, "published" if published else "unpublished")
        return plant

    def delete_plant(self, plant_id: str) -> None:
        plant = self.get(plant_id, include_drafts=True)
        try:
            self.db.delete(plant)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_backend_error(e, "Error deleting plant")
        logger.info("Plant deleted: %s", plant_id)
