"""Tests for the Zoho token and ticket client."""

from unittest.mock import patch

import pytest
import requests

from models.ticket import TicketRecord
from services.helpdesk_service import HelpdeskError, HelpdeskService


@pytest.fixture
def service(helpdesk_settings):
    return HelpdeskService(helpdesk_settings)


@pytest.fixture
def ticket(sample_submission):
    return TicketRecord.from_submission(sample_submission, "dept-1")


class TestGetAccessToken:
    @patch("services.helpdesk_service.requests.post")
    def test_exchanges_refresh_token(self, mock_post, service, make_response):
        mock_post.return_value = make_response(
            json_data={"access_token": "T", "expires_in": 3600}
        )

        assert service.get_access_token() == "T"
        mock_post.assert_called_once_with(
            "https://accounts.zoho.in/oauth/v2/token",
            params={
                "refresh_token": "refresh-token",
                "client_id": "client-id",
                "client_secret": "client-secret",
                "grant_type": "refresh_token",
            },
            timeout=5,
        )

    @patch("services.helpdesk_service.requests.post")
    def test_error_in_ok_response(self, mock_post, service, make_response):
        mock_post.return_value = make_response(json_data={"error": "invalid_code"})

        with pytest.raises(HelpdeskError) as exc_info:
            service.get_access_token()

        assert exc_info.value.status_code is None
        assert exc_info.value.payload == {"error": "invalid_code"}

    @patch("services.helpdesk_service.requests.post")
    def test_http_error_keeps_status_and_body(self, mock_post, service, make_response):
        mock_post.return_value = make_response(
            status_code=401, json_data={"error": "unauthorized"}
        )

        with pytest.raises(HelpdeskError) as exc_info:
            service.get_access_token()

        assert exc_info.value.status_code == 401
        assert exc_info.value.payload == {"error": "unauthorized"}

    @patch("services.helpdesk_service.requests.post")
    def test_http_error_with_text_body(self, mock_post, service, make_response):
        mock_post.return_value = make_response(status_code=502, text="Bad Gateway")

        with pytest.raises(HelpdeskError) as exc_info:
            service.get_access_token()

        assert exc_info.value.status_code == 502
        assert exc_info.value.payload == "Bad Gateway"

    @patch("services.helpdesk_service.requests.post")
    def test_connection_error_is_not_retried(self, mock_post, service):
        mock_post.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(HelpdeskError) as exc_info:
            service.get_access_token()

        assert mock_post.call_count == 1
        assert exc_info.value.status_code is None
        assert exc_info.value.payload == (
            "Request to https://accounts.zoho.in/oauth/v2/token failed: ConnectionError"
        )

    @patch("services.helpdesk_service.requests.post")
    def test_connection_error_hides_query_string(self, mock_post, service):
        mock_post.side_effect = requests.exceptions.ConnectionError(
            "Max retries exceeded with url: /oauth/v2/token"
            "?refresh_token=refresh-token&client_secret=client-secret"
        )

        with pytest.raises(HelpdeskError) as exc_info:
            service.get_access_token()

        assert "client-secret" not in str(exc_info.value)
        assert "refresh-token" not in exc_info.value.payload

    @patch("services.helpdesk_service.requests.post")
    def test_non_json_body(self, mock_post, service, make_response):
        mock_post.return_value = make_response(text="<html>")

        with pytest.raises(HelpdeskError) as exc_info:
            service.get_access_token()

        assert exc_info.value.status_code is None
        assert exc_info.value.payload == "<html>"

    @patch("services.helpdesk_service.requests.post")
    def test_non_object_json(self, mock_post, service, make_response):
        mock_post.return_value = make_response(json_data=["T"])

        with pytest.raises(HelpdeskError):
            service.get_access_token()


class TestCreateTicket:
    @patch("services.helpdesk_service.requests.post")
    def test_posts_ticket_with_token_and_org(
        self, mock_post, service, ticket, make_response
    ):
        mock_post.return_value = make_response(
            json_data={"id": "42", "createdTime": "C", "modifiedTime": "M"}
        )

        created = service.create_ticket(ticket, "T")

        assert created == {"id": "42", "createdTime": "C", "modifiedTime": "M"}
        mock_post.assert_called_once_with(
            "https://desk.zoho.in/api/v1/tickets",
            json=ticket.to_payload(),
            headers={
                "Authorization": "Zoho-oauthtoken T",
                "orgId": "60001234",
                "Content-Type": "application/json",
            },
            timeout=5,
        )

    @patch("services.helpdesk_service.requests.post")
    def test_rate_limited(self, mock_post, service, ticket, make_response):
        mock_post.return_value = make_response(
            status_code=429, json_data={"msg": "rate limited"}
        )

        with pytest.raises(HelpdeskError) as exc_info:
            service.create_ticket(ticket, "T")

        assert exc_info.value.status_code == 429
        assert exc_info.value.payload == {"msg": "rate limited"}

    @patch("services.helpdesk_service.requests.post")
    def test_timeout(self, mock_post, service, ticket):
        mock_post.side_effect = requests.exceptions.Timeout("read timed out")

        with pytest.raises(HelpdeskError) as exc_info:
            service.create_ticket(ticket, "T")

        assert exc_info.value.status_code is None


class TestHelpdeskError:
    def test_payload_defaults_to_message(self):
        error = HelpdeskError("boom")
        assert error.payload == "boom"
        assert error.status_code is None
