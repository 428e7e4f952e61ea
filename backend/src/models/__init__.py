"""Data models for the feedback intake API."""

from .feedback import FeedbackRecord, FeedbackSubmission, FeedbackTopic
from .settings import HelpdeskSettings
from .ticket import TicketContact, TicketRecord

__all__ = [
    "FeedbackRecord",
    "FeedbackSubmission",
    "FeedbackTopic",
    "HelpdeskSettings",
    "TicketContact",
    "TicketRecord",
]
