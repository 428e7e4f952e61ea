"""Feedback data models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FeedbackTopic(str, Enum):
    """Topics a feedback form submission may be filed under."""

    FEATURE_REQUEST = "Feature Request"
    QUALITY_OF_RESPONSE = "Quality of Response"
    ACCURACY_OF_RESPONSE = "Accuracy of response"
    OTHER = "Other"


class FeedbackSubmission(BaseModel):
    """A validated feedback form submission.

    Only built by ``services.feedback_validator.validate_submission`` once
    every field has passed its check, so the fields here are not re-validated.
    """

    model_config = ConfigDict(use_enum_values=True)

    name: str
    email: str
    whatsapp_country_code: str
    whatsapp_number: str
    feedback_topic: FeedbackTopic
    feedback_message: str

    @property
    def phone(self) -> str:
        """Country code and number in the form the helpdesk expects."""
        return f"{self.whatsapp_country_code} {self.whatsapp_number}"


class FeedbackRecord(BaseModel):
    """Response body for an accepted submission.

    Shaped like a freshly inserted record; the helpdesk ticket is the only
    copy that is kept anywhere.
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    name: str
    email: str
    whatsapp_country_code: str
    whatsapp_number: str
    feedback_topic: FeedbackTopic
    feedback_message: str
    status: str = "new"
    response_status: str = "not_replied"
    # Copied verbatim from the helpdesk response
    id: Any = Field(None, description="Helpdesk ticket id")
    created_at: Any = Field(None, alias="createdAt")
    updated_at: Any = Field(None, alias="updatedAt")
    version: int = Field(0, alias="__v")

    @classmethod
    def from_ticket(
        cls, submission: FeedbackSubmission, ticket: dict
    ) -> "FeedbackRecord":
        """Combine a submission with the helpdesk's create-ticket response."""
        return cls(
            **submission.model_dump(),
            id=ticket.get("id"),
            created_at=ticket.get("createdTime"),
            updated_at=ticket.get("modifiedTime"),
        )

    def to_response(self) -> dict:
        """Serialize with the wire field names (``createdAt``, ``__v``)."""
        return self.model_dump(by_alias=True)
