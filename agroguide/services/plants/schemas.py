"""
Pydantic schemas for the plant catalog
"""
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

from agroguide.db.models.enums import PlantCategoryEnum


class PlantCard(BaseModel):
    """Compact plant entry for the catalog grid"""
    id: str
    slug: str
    name: str
    scientific_name: Optional[str] = None
    category: str  # "home" or "agriculture"
    climate: Optional[str] = None
    soil: Optional[str] = None
    sunlight: Optional[str] = None
    watering: Optional[str] = None
    image: Optional[str] = None
    is_favorite: bool = False


class PlantListResponse(BaseModel):
    mode: Literal["home", "agriculture"]
    query: str
    plants: list[PlantCard]
    total: int
    empty_message: Optional[str] = None


class PlantResponse(BaseModel):
    """Full plant detail"""
    id: str
    slug: str
    common_name: str
    scientific_name: Optional[str] = None
    category: PlantCategoryEnum
    subcategory: Optional[str] = None
    climate: Optional[str] = None
    soil: Optional[str] = None
    watering_schedule: Optional[str] = None
    sunlight: Optional[str] = None
    fertilizer: Optional[str] = None
    diseases: Optional[list[str]] = None
    remedies: Optional[list[str]] = None
    harvesting: Optional[str] = None
    images: Optional[list[str]] = None
    description: Optional[str] = None
    care_instructions: Optional[str] = None
    published: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CarePlanResponse(BaseModel):
    plant_id: str
    care_plan: str


class PlantCreateRequest(BaseModel):
    """Request to add a plant (admin only)"""
    common_name: str = Field(..., min_length=1, max_length=200)
    slug: Optional[str] = Field(None, max_length=200, description="Generated from common_name when omitted")
    scientific_name: Optional[str] = Field(None, max_length=200)
    category: PlantCategoryEnum
    subcategory: Optional[str] = Field(None, max_length=100)
    climate: Optional[str] = None
    soil: Optional[str] = None
    watering_schedule: Optional[str] = None
    sunlight: Optional[str] = None
    fertilizer: Optional[str] = None
    diseases: Optional[list[str]] = None
    remedies: Optional[list[str]] = None
    harvesting: Optional[str] = None
    images: Optional[list[str]] = None
    description: Optional[str] = None
    care_instructions: Optional[str] = None
    published: bool = False


class PlantUpdateRequest(BaseModel):
    """Partial update (admin only); only fields sent are changed"""
    common_name: Optional[str] = Field(None, min_length=1, max_length=200)
    slug: Optional[str] = Field(None, min_length=1, max_length=200)
    scientific_name: Optional[str] = Field(None, max_length=200)
    category: Optional[PlantCategoryEnum] = None
    subcategory: Optional[str] = Field(None, max_length=100)
    climate: Optional[str] = None
    soil: Optional[str] = None
    watering_schedule: Optional[str] = None
    sunlight: Optional[str] = None
    fertilizer: Optional[str] = None
    diseases: Optional[list[str]] = None
    remedies: Optional[list[str]] = None
    harvesting: Optional[str] = None
    images: Optional[list[str]] = None
    description: Optional[str] = None
    care_instructions: Optional[str] = None
    published: Optional[bool] = None

    @field_validator("common_name", "slug", "category", "published")
    @classmethod
    def not_null(cls, value):
        # Omit the field to leave it unchanged; these columns cannot be cleared
        if value is None:
            raise ValueError("cannot be null")
        return value


class PlantPublishRequest(BaseModel):
    published: bool


class AdminPlantItem(BaseModel):
    """Row in the admin plant list"""
    id: str
    slug: str
    common_name: str
    category: PlantCategoryEnum
    category_label: str
    published: bool
    badge: str  # "Published" or "Draft"
    created_at: datetime
