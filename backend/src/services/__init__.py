"""Services for the feedback intake backend."""

from .feedback_service import FeedbackService
from .helpdesk_service import HelpdeskError, HelpdeskService

__all__ = [
    "FeedbackService",
    "HelpdeskError",
    "HelpdeskService",
]
