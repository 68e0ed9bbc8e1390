"""
Feedback service: submission by users, triage by admins
"""
import logging
from typing import Iterable

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agroguide.core.config import get_settings
from agroguide.core.exceptions import NotFoundError, handle_backend_error
from agroguide.db.models.columns import utcnow
from agroguide.db.models.enums import FeedbackStatusEnum
from agroguide.db.models.feedback import Feedback
from agroguide.db.models.profile import Profile
from agroguide.services.feedback.schemas import FeedbackSubmitRequest

logger = logging.getLogger(__name__)

NO_FEEDBACK_MESSAGE = "No feedback submissions yet."

_BADGES = {
    FeedbackStatusEnum.NEW: ("destructive", "alert-circle", "red"),
    FeedbackStatusEnum.IN_REVIEW: ("secondary", "clock", "yellow"),
    FeedbackStatusEnum.RESOLVED: ("default", "check-circle", "green"),
}

# Triage buttons shown on every row
_ACTIONS = [
    (FeedbackStatusEnum.IN_REVIEW, "Mark In Review"),
    (FeedbackStatusEnum.RESOLVED, "Resolve"),
]


def status_badge(status: FeedbackStatusEnum | str) -> dict:
    """Badge variant, icon and color for a feedback status"""
    value = status.value if isinstance(status, FeedbackStatusEnum) else str(status)
    try:
        variant, icon, color = _BADGES[FeedbackStatusEnum(value)]
    except ValueError:
        variant, icon, color = "secondary", None, None
    return {
        "label": value.replace("_", " "),
        "variant": variant,
        "icon": icon,
        "color": color,
    }


def available_actions(status: FeedbackStatusEnum) -> list[dict]:
    return [
        {"status": target, "label": label, "disabled": status == target}
        for target, label in _ACTIONS
    ]


def status_breakdown(rows: Iterable) -> dict[str, int]:
    """Count rows per status, every status present"""
    counts = {s.value: 0 for s in FeedbackStatusEnum}
    for row in rows:
        status = row.status.value if isinstance(row.status, FeedbackStatusEnum) else row.status
        if status in counts:
            counts[status] += 1
    return counts


class FeedbackService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def submit_feedback(self, user_id: str, data: FeedbackSubmitRequest) -> Feedback:
        """Insert one feedback row for the signed-in user"""
        settings = get_settings()
        if len(data.message) > settings.feedback_max_length:
            raise ValueError(f"Message must be at most {settings.feedback_max_length} characters")

        try:
            feedback = Feedback(
                user_id=user_id,
                category=data.category,
                message=data.message,
            )
            self.db.add(feedback)
            self.db.commit()
            self.db.refresh(feedback)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_backend_error(e, "Error submitting feedback")

        logger.info("Feedback %s submitted by %s (%s)", feedback.id, user_id, feedback.category.value)
        return feedback

    def list_feedback(self) -> list[tuple[Feedback, str | None]]:
        """All feedback newest first, each with the submitter's display name"""
        try:
            return (
                self.db.query(Feedback, Profile.display_name)
                .outerjoin(Profile, Profile.user_id == Feedback.user_id)
                .order_by(desc(Feedback.created_at))
                .all()
            )
        except SQLAlchemyError as e:
            raise handle_backend_error(e, "Error fetching feedback")

    def list_my_feedback(self, user_id: str) -> list[Feedback]:
        try:
            return (
                self.db.query(Feedback)
                .filter(Feedback.user_id == user_id)
                .order_by(desc(Feedback.created_at))
                .all()
            )
        except SQLAlchemyError as e:
            raise handle_backend_error(e, "Error fetching feedback")

    def _get(self, feedback_id: str) -> Feedback:
        feedback = self.db.query(Feedback).filter(Feedback.id == feedback_id).first()
        if not feedback:
            raise NotFoundError("Feedback")
        return feedback

    def update_status(self, feedback_id: str, new_status: FeedbackStatusEnum) -> Feedback:
        """Set status (admin only). Any status may follow any status; one UPDATE per call."""
        try:
            updated = (
                self.db.query(Feedback)
                .filter(Feedback.id == feedback_id)
                .update({"status": new_status, "updated_at": utcnow()}, synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_backend_error(e, "Error updating feedback")

        if not updated:
            raise NotFoundError("Feedback")

        logger.info("Feedback %s status changed to %s", feedback_id, new_status.value)
        return self._get(feedback_id)

    def reply(self, feedback_id: str, admin_reply: str) -> Feedback:
        feedback = self._get(feedback_id)
        try:
            feedback.admin_reply = admin_reply
            self.db.commit()
            self.db.refresh(feedback)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_backend_error(e, "Error updating feedback")
        return feedback
