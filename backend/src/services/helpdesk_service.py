"""Zoho Desk client: refresh-token exchange and ticket creation."""

import logging
from typing import Any

import requests

from models.settings import HelpdeskSettings
from models.ticket import TicketRecord

logger = logging.getLogger(__name__)


class HelpdeskError(Exception):
    """An outbound call to the token or ticketing service failed.

    ``status_code`` is the upstream HTTP status when there was a response,
    otherwise None. ``payload`` is the upstream error body, or the error
    message when no body is available.
    """

    def __init__(
        self, message: str, status_code: int | None = None, payload: Any = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload if payload is not None else message

    @classmethod
    def from_response(cls, response: requests.Response) -> "HelpdeskError":
        try:
            payload = response.json()
        except ValueError:
            payload = response.text or response.reason
        return cls(
            f"Upstream returned HTTP {response.status_code}",
            status_code=response.status_code,
            payload=payload,
        )


def _post_json(url: str, **kwargs) -> dict[str, Any]:
    """POST once and return the decoded JSON object.

    Raises:
        HelpdeskError: on transport errors, non-2xx responses, or a body
            that is not a JSON object
    """
    try:
        response = requests.post(url, **kwargs)
        response.raise_for_status()
    except requests.exceptions.HTTPError as e:
        raise HelpdeskError.from_response(e.response) from e
    except requests.exceptions.RequestException as e:
        # str(e) echoes the full URL, query string credentials included
        raise HelpdeskError(f"Request to {url} failed: {type(e).__name__}") from e

    try:
        data = response.json()
    except ValueError as e:
        raise HelpdeskError(
            f"Non-JSON response from {url}", payload=response.text
        ) from e
    if not isinstance(data, dict):
        raise HelpdeskError(f"Unexpected response from {url}", payload=data)
    return data


class HelpdeskService:
    """Calls the Zoho Accounts token endpoint and the Zoho Desk tickets API."""

    def __init__(self, settings: HelpdeskSettings):
        self.settings = settings

    def get_access_token(self) -> str:
        """Exchange the configured refresh token for a short-lived access token."""
        data = _post_json(
            self.settings.token_url,
            params={
                "refresh_token": self.settings.refresh_token,
                "client_id": self.settings.client_id,
                "client_secret": self.settings.client_secret,
                "grant_type": "refresh_token",
            },
            timeout=self.settings.timeout_seconds,
        )

        access_token = data.get("access_token")
        if not access_token:
            # Zoho reports bad grants as HTTP 200 with an "error" field
            raise HelpdeskError("Token response has no access_token", payload=data)
        return access_token

    def create_ticket(self, ticket: TicketRecord, access_token: str) -> dict[str, Any]:
        """Create a ticket and return the helpdesk's ticket object."""
        data = _post_json(
            self.settings.tickets_url,
            json=ticket.to_payload(),
            headers={
                "Authorization": f"Zoho-oauthtoken {access_token}",
                "orgId": self.settings.org_id,
                "Content-Type": "application/json",
            },
            timeout=self.settings.timeout_seconds,
        )
        logger.info("Created helpdesk ticket %s", data.get("id"))
        return data
