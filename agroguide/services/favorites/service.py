"""
Favorites: existence-only link between a user and a plant
"""
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from agroguide.core.exceptions import handle_backend_error
from agroguide.db.models.favorite import Favorite
from agroguide.db.models.plant import Plant
from agroguide.services.plants.service import PlantService


class FavoriteService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def favorite_ids(self, user_id: str) -> set[str]:
        rows = self.db.query(Favorite.plant_id).filter(Favorite.user_id == user_id).all()
        return {plant_id for (plant_id,) in rows}

    def list_favorites(self, user_id: str, include_drafts: bool = False) -> list[Plant]:
        """Favorite plants, most recently added first"""
        query = (
            self.db.query(Favorite)
            .options(joinedload(Favorite.plant))
            .filter(Favorite.user_id == user_id)
            .order_by(desc(Favorite.created_at))
        )
        # Rows left behind by a plant removed outside the ORM have no plant
        plants = [favorite.plant for favorite in query.all() if favorite.plant is not None]
        if not include_drafts:
            plants = [plant for plant in plants if plant.published]
        return plants

    def toggle_favorite(self, user_id: str, plant_id: str, include_drafts: bool = False) -> bool:
        """Add the favorite if absent, remove it if present. Returns the new state.

        Only adding needs a visible plant; a favorite on a since-unpublished
        plant can still be removed.
        """
        existing = self.db.query(Favorite).filter(
            Favorite.user_id == user_id,
            Favorite.plant_id == plant_id
        ).first()
        if existing is None:
            PlantService(self.db).get(plant_id, include_drafts=include_drafts)

        try:
            if existing:
                self.db.delete(existing)
                is_favorite = False
            else:
                self.db.add(Favorite(user_id=user_id, plant_id=plant_id))
                is_favorite = True
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_backend_error(e, "Error updating favorites")
        return is_favorite
