"""
Admin dashboard: headline counts and the feedback triage view
"""
import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agroguide.db.models.enums import FeedbackStatusEnum
from agroguide.db.models.feedback import Feedback
from agroguide.db.models.plant import Plant
from agroguide.db.models.profile import Profile
from agroguide.services.feedback.service import (
    FeedbackService,
    NO_FEEDBACK_MESSAGE,
    available_actions,
    status_badge,
    status_breakdown,
)

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def _count(self, name: str, query) -> int:
        # A failed count shows as 0 on the dashboard
        try:
            return query.scalar() or 0
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Count %s failed: %s", name, e)
            return 0

    def dashboard_stats(self) -> dict:
        """Four independent counts: plants, feedback, new feedback, users"""
        return {
            "total_plants": self._count("plants", self.db.query(func.count(Plant.id))),
            "total_feedback": self._count("feedback", self.db.query(func.count(Feedback.id))),
            "new_feedback": self._count(
                "new_feedback",
                self.db.query(func.count(Feedback.id)).filter(Feedback.status == FeedbackStatusEnum.NEW),
            ),
            "total_users": self._count("profiles", self.db.query(func.count(Profile.id))),
        }

    def feedback_overview(self) -> dict:
        """Feedback rows with badges and actions, plus the per-status breakdown"""
        rows = FeedbackService(self.db).list_feedback()
        items = []
        for feedback, display_name in rows:
            items.append({
                "id": feedback.id,
                "user_id": feedback.user_id,
                "message": feedback.message,
                "category": feedback.category,
                "status": feedback.status,
                "admin_reply": feedback.admin_reply,
                "created_at": feedback.created_at,
                "display_name": display_name or "Anonymous",
                "badge": status_badge(feedback.status),
                "actions": available_actions(feedback.status),
            })

        return {
            "feedback": items,
            "breakdown": status_breakdown(feedback for feedback, _ in rows),
            "empty_message": None if items else NO_FEEDBACK_MESSAGE,
        }

    def change_feedback_status(self, feedback_id: str, new_status: FeedbackStatusEnum) -> dict:
        """One status update, then the list and stats are fetched again"""
        updated = FeedbackService(self.db).update_status(feedback_id, new_status)
        overview = self.feedback_overview()
        return {
            "description": f"Status changed to {new_status.value}",
            "updated": updated,
            "feedback": overview["feedback"],
            "breakdown": overview["breakdown"],
            "stats": self.dashboard_stats(),
        }
