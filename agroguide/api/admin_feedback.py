"""
Admin Feedback Management API endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agroguide.core.dependencies import CurrentUser, get_current_admin
from agroguide.db.postgres import get_db
from agroguide.services.admin.service import DashboardService
from agroguide.services.feedback.service import FeedbackService
from agroguide.services.feedback.schemas import (
    AdminFeedbackListResponse,
    AdminFeedbackReplyUpdate,
    AdminFeedbackStatusUpdate,
    FeedbackResponse,
    FeedbackStatusUpdateResponse,
)

router = APIRouter(prefix="/admin/feedback", tags=["admin-feedback"])


@router.get("", response_model=AdminFeedbackListResponse)
def get_all_feedback(
    current_admin: CurrentUser = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """All feedback, newest first, with status badges and triage actions (admin only)"""
    return DashboardService(db).feedback_overview()


@router.put("/{feedback_id}/status", response_model=FeedbackStatusUpdateResponse)
def update_feedback_status(
    feedback_id: str,
    update_data: AdminFeedbackStatusUpdate,
    current_admin: CurrentUser = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Set the status, then return the refreshed feedback list and stats (admin only)"""
    return DashboardService(db).change_feedback_status(feedback_id, update_data.status)


@router.put("/{feedback_id}/reply", response_model=FeedbackResponse)
def reply_to_feedback(
    feedback_id: str,
    update_data: AdminFeedbackReplyUpdate,
    current_admin: CurrentUser = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Attach an admin reply visible to the submitter (admin only)"""
    return FeedbackService(db).reply(feedback_id, update_data.admin_reply)
