from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from agroguide.core.dependencies import CurrentUser, get_current_user
from agroguide.db.postgres import get_db
from agroguide.services.favorites.service import FavoriteService
from agroguide.services.plants.schemas import PlantCard
from agroguide.services.plants.service import build_plant_card

router = APIRouter(prefix="/favorites", tags=["favorites"])


class FavoriteToggleResponse(BaseModel):
    plant_id: str
    is_favorite: bool


@router.get("", response_model=list[PlantCard])
def list_favorites(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    plants = FavoriteService(db).list_favorites(current_user.id, include_drafts=current_user.is_admin)
    return [build_plant_card(plant, is_favorite=True) for plant in plants]


@router.post("/{plant_id}", response_model=FavoriteToggleResponse)
def toggle_favorite(
    plant_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    is_favorite = FavoriteService(db).toggle_favorite(
        current_user.id, plant_id, include_drafts=current_user.is_admin
    )
    return {"plant_id": plant_id, "is_favorite": is_favorite}
