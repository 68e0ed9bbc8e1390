"""
Custom exceptions for the application
"""
import logging

from fastapi import HTTPException, status

logger = logging.getLogger(__name__)

FEEDBACK_SIGN_IN_PROMPT = "Please sign in to submit feedback."


class BackendError(HTTPException):
    """The hosted backend rejected or failed a call; carries its raw message"""
    def __init__(self, title: str, message: str):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"{title}: {message}"
        )


class AuthRequiredError(HTTPException):
    """No session: the caller must sign in first"""
    def __init__(self, prompt: str = FEEDBACK_SIGN_IN_PROMPT):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "title": "Authentication required",
                "description": prompt,
            },
            headers={"WWW-Authenticate": "Bearer"},
        )


class AdminRequiredError(HTTPException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions. Admin access required.",
        )


class NotFoundError(HTTPException):
    def __init__(self, what: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{what} not found"
        )


def handle_backend_error(error: Exception, title: str) -> HTTPException:
    """
    Turn a failed backend call into the error surfaced to the user.

    Args:
        error: exception raised by the database driver or the hosted auth service
        title: what was being attempted, e.g. "Error submitting feedback"

    Returns:
        HTTPException carrying the backend's raw message
    """
    message = str(getattr(error, "orig", None) or error)
    logger.error("%s: %s", title, message)
    return BackendError(title, message)
