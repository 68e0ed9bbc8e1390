"""
Pydantic schemas for feedback
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from agroguide.db.models.enums import FeedbackCategoryEnum, FeedbackStatusEnum


class FeedbackSubmitRequest(BaseModel):
    """Request to submit feedback"""
    category: FeedbackCategoryEnum = Field(..., description="general, bug, feature_request or plant_info")
    message: str = Field(..., min_length=1, description="Free-text feedback")

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message cannot be empty")
        return value


class FeedbackResponse(BaseModel):
    id: str
    user_id: str
    category: FeedbackCategoryEnum
    message: str
    status: FeedbackStatusEnum
    admin_reply: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class FeedbackSubmitResponse(BaseModel):
    """Returned after a successful submission; the form can be cleared"""
    title: str = "Feedback submitted!"
    description: str = "Thank you for your feedback. We'll review it soon."
    feedback: FeedbackResponse


class StatusBadge(BaseModel):
    label: str
    variant: str  # destructive, secondary, default
    icon: Optional[str] = None
    color: Optional[str] = None


class FeedbackAction(BaseModel):
    status: FeedbackStatusEnum
    label: str
    disabled: bool


class AdminFeedbackItem(BaseModel):
    """Row in the admin feedback list"""
    id: str
    user_id: str
    message: str
    category: FeedbackCategoryEnum
    status: FeedbackStatusEnum
    admin_reply: Optional[str] = None
    created_at: datetime
    display_name: str  # "Anonymous" when the submitter has no profile name
    badge: StatusBadge
    actions: list[FeedbackAction]


class DashboardStats(BaseModel):
    total_plants: int
    total_feedback: int
    new_feedback: int
    total_users: int


class AdminFeedbackListResponse(BaseModel):
    feedback: list[AdminFeedbackItem]
    breakdown: dict[str, int]
    empty_message: Optional[str] = None


class AdminFeedbackStatusUpdate(BaseModel):
    """Request to update status (admin only)"""
    status: FeedbackStatusEnum


class AdminFeedbackReplyUpdate(BaseModel):
    """Request to reply to feedback (admin only)"""
    admin_reply: str = Field(..., min_length=1)


class FeedbackStatusUpdateResponse(BaseModel):
    """Status change plus the re-fetched list and stats"""
    title: str = "Feedback updated"
    description: str
    updated: FeedbackResponse
    feedback: list[AdminFeedbackItem]
    breakdown: dict[str, int]
    stats: DashboardStats
