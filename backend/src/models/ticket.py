"""Helpdesk ticket models."""

from pydantic import BaseModel, ConfigDict, Field

from models.feedback import FeedbackSubmission

TICKET_SUBJECT_TEMPLATE = "Feedback from {name}"


class TicketContact(BaseModel):
    """Contact attached to a helpdesk ticket."""

    model_config = ConfigDict(populate_by_name=True)

    last_name: str = Field(..., alias="lastName")
    email: str


class TicketRecord(BaseModel):
    """Body of a helpdesk create-ticket request."""

    model_config = ConfigDict(populate_by_name=True)

    subject: str
    description: str
    department_id: str = Field(..., alias="departmentId")
    contact: TicketContact
    category: str
    phone: str

    @classmethod
    def from_submission(
        cls, submission: FeedbackSubmission, department_id: str
    ) -> "TicketRecord":
        """Build the ticket for a validated submission."""
        return cls(
            subject=TICKET_SUBJECT_TEMPLATE.format(name=submission.name),
            description=submission.feedback_message,
            department_id=department_id,
            contact=TicketContact(
                last_name=submission.name, email=submission.email
            ),
            category=submission.feedback_topic,
            phone=submission.phone,
        )

    def to_payload(self) -> dict:
        """Serialize with the helpdesk API's camelCase field names."""
        return self.model_dump(by_alias=True)
