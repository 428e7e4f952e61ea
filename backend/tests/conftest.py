"""Pytest configuration and shared fixtures."""

from unittest.mock import Mock

import pytest
import requests

from models.feedback import FeedbackSubmission
from models.settings import HelpdeskSettings


@pytest.fixture
def valid_payload():
    """A feedback form body that passes every validation rule."""
    return {
        "name": "Asha Verma",
        "email": "asha@example.com",
        "whatsapp_country_code": "+91",
        "whatsapp_number": "9876543210",
        "feedback_topic": "Quality of Response",
        "feedback_message": "The answers have been very helpful this week.",
    }


@pytest.fixture
def sample_submission(valid_payload):
    """A validated submission built from the valid payload."""
    return FeedbackSubmission(**valid_payload)


@pytest.fixture
def helpdesk_settings():
    """Settings pointing at the default Zoho hosts with test credentials."""
    return HelpdeskSettings(
        client_id="client-id",
        client_secret="client-secret",
        refresh_token="refresh-token",
        org_id="60001234",
        department_id="dept-1",
        timeout_seconds=5,
    )


@pytest.fixture
def make_response():
    """Factory for mock requests.Response objects.

    ``raise_for_status`` raises HTTPError for 4xx/5xx like the real thing,
    and ``json`` raises ValueError when no JSON body is given.
    """

    def _make(status_code=200, json_data=None, text=None):
        response = Mock()
        response.status_code = status_code
        response.reason = "Error"
        response.text = text if text is not None else ""
        if json_data is not None:
            response.json.return_value = json_data
        else:
            response.json.side_effect = ValueError("No JSON object could be decoded")

        if status_code >= 400:
            response.raise_for_status.side_effect = requests.exceptions.HTTPError(
                f"{status_code} Error", response=response
            )
        else:
            response.raise_for_status.return_value = None
        return response

    return _make
