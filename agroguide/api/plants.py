"""
Plant catalog API endpoints
"""
from typing import Literal, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from agroguide.core.dependencies import CurrentUser, get_optional_user
from agroguide.db.postgres import get_db
from agroguide.services.favorites.service import FavoriteService
from agroguide.services.plants.filtering import EMPTY_RESULT_MESSAGE, build_care_plan, filter_plants
from agroguide.services.plants.schemas import CarePlanResponse, PlantListResponse, PlantResponse
from agroguide.services.plants.service import PlantService, build_plant_card

router = APIRouter(prefix="/plants", tags=["plants"])


@router.get("", response_model=PlantListResponse)
def list_plants(
    mode: Literal["home", "agriculture"] = Query("home"),
    q: str = Query("", max_length=200, description="Matches common or scientific name"),
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """Published plants for the chosen mode, filtered by the search text"""
    plants = filter_plants(PlantService(db).list_published(), mode, q)

    favorite_ids = FavoriteService(db).favorite_ids(current_user.id) if current_user else set()
    cards = [build_plant_card(plant, plant.id in favorite_ids) for plant in plants]

    return {
        "mode": mode,
        "query": q,
        "plants": cards,
        "total": len(cards),
        "empty_message": None if cards else EMPTY_RESULT_MESSAGE,
    }


@router.get("/{slug}", response_model=PlantResponse)
def get_plant(
    slug: str,
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """Plant detail; drafts only for admins"""
    include_drafts = bool(current_user and current_user.is_admin)
    return PlantService(db).get_by_slug(slug, include_drafts=include_drafts)


@router.get("/{slug}/care-plan", response_model=CarePlanResponse)
def get_care_plan(
    slug: str,
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    include_drafts = bool(current_user and current_user.is_admin)
    plant = PlantService(db).get_by_slug(slug, include_drafts=include_drafts)
    return {"plant_id": plant.id, "care_plan": build_care_plan(plant)}
