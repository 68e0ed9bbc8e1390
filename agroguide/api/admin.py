"""Admin routes: dashboard stats and plant management. Admins only."""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from agroguide.core.dependencies import CurrentUser, get_current_admin
from agroguide.db.postgres import get_db
from agroguide.services.admin.service import DashboardService
from agroguide.services.feedback.schemas import DashboardStats
from agroguide.services.plants.schemas import (
    AdminPlantItem,
    PlantCreateRequest,
    PlantPublishRequest,
    PlantResponse,
    PlantUpdateRequest,
)
from agroguide.services.plants.service import PlantService, build_admin_plant_item

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/dashboard")
def admin_dashboard(
    current_admin: CurrentUser = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """Landing data for the admin dashboard."""
    profile = current_admin.profile
    return {
        "message": f"Welcome back, {profile.display_name or 'Admin'}",
        "admin": {
            "id": current_admin.id,
            "email": current_admin.email,
            "display_name": profile.display_name,
        },
        "stats": DashboardService(db).dashboard_stats(),
    }


@router.get("/stats", response_model=DashboardStats)
def get_stats(
    current_admin: CurrentUser = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return DashboardService(db).dashboard_stats()


@router.get("/plants", response_model=list[AdminPlantItem])
def list_all_plants(
    current_admin: CurrentUser = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """Every plant including drafts, newest first."""
    return [build_admin_plant_item(plant) for plant in PlantService(db).list_all()]


@router.post("/plants", response_model=PlantResponse, status_code=status.HTTP_201_CREATED)
def create_plant(
    payload: PlantCreateRequest,
    current_admin: CurrentUser = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return PlantService(db).create_plant(payload)


@router.patch("/plants/{plant_id}", response_model=PlantResponse)
def update_plant(
    plant_id: str,
    payload: PlantUpdateRequest,
    current_admin: CurrentUser = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return PlantService(db).update_plant(plant_id, payload)


@router.put("/plants/{plant_id}/publish", response_model=PlantResponse)
def publish_plant(
    plant_id: str,
    payload: PlantPublishRequest,
    current_admin: CurrentUser = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return PlantService(db).set_published(plant_id, payload.published)


@router.delete("/plants/{plant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_plant(
    plant_id: str,
    current_admin: CurrentUser = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    PlantService(db).delete_plant(plant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
