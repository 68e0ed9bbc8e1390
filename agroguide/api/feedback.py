"""
Feedback API endpoints
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from agroguide.core.dependencies import CurrentUser, get_current_user, require_feedback_author
from agroguide.core.rate_limit import feedback_limiter, rate_limit_response
from agroguide.db.postgres import get_db
from agroguide.services.feedback.service import FeedbackService
from agroguide.services.feedback.schemas import (
    FeedbackResponse,
    FeedbackSubmitRequest,
    FeedbackSubmitResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("", response_model=FeedbackSubmitResponse, status_code=status.HTTP_201_CREATED)
def submit_feedback(
    payload: FeedbackSubmitRequest,
    current_user: CurrentUser = Depends(require_feedback_author),
    db: Session = Depends(get_db),
):
    """Submit feedback; requires a signed-in user, a category and a message"""
    # Only authenticated, well-formed submissions count against the limit
    is_allowed, retry_after = feedback_limiter.check_rate_limit(f"user_{current_user.id}")
    if not is_allowed:
        logger.warning("Feedback rate limit hit for %s", current_user.id)
        return rate_limit_response(
            feedback_limiter,
            retry_after,
            "Too many feedback submissions. Please wait.",
        )

    service = FeedbackService(db)
    try:
        feedback = service.submit_feedback(user_id=current_user.id, data=payload)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return {"feedback": feedback}


@router.get("/mine", response_model=list[FeedbackResponse])
def get_my_feedback(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """The caller's own feedback with any admin reply"""
    return FeedbackService(db).list_my_feedback(current_user.id)
