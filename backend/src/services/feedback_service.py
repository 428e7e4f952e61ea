"""Forwards validated feedback to the helpdesk as a ticket."""

from models.feedback import FeedbackRecord, FeedbackSubmission
from models.ticket import TicketRecord
from services.helpdesk_service import HelpdeskService


class FeedbackService:
    """Service for turning feedback submissions into helpdesk tickets."""

    def __init__(self, helpdesk: HelpdeskService, department_id: str):
        self.helpdesk = helpdesk
        self.department_id = department_id

    def submit(self, submission: FeedbackSubmission) -> FeedbackRecord:
        """Exchange the refresh token, then create the ticket with it.

        No retries: a HelpdeskError from either call propagates unchanged.
        """
        access_token = self.helpdesk.get_access_token()
        ticket = TicketRecord.from_submission(submission, self.department_id)
        created = self.helpdesk.create_ticket(ticket, access_token)
        return FeedbackRecord.from_ticket(submission, created)
