"""Enums shared by the table models. Values match the hosted database's enum labels."""
from enum import Enum


class PlantCategoryEnum(str, Enum):
    HOME = "home"
    AGRI = "agri"


class AppRoleEnum(str, Enum):
    USER = "user"
    ADMIN = "admin"


class FeedbackCategoryEnum(str, Enum):
    GENERAL = "general"
    BUG = "bug"
    FEATURE_REQUEST = "feature_request"
    PLANT_INFO = "plant_info"


class FeedbackStatusEnum(str, Enum):
    NEW = "new"
    IN_REVIEW = "in_review"
    RESOLVED = "resolved"
