"""Runtime configuration for the feedback intake API."""

import os

from pydantic import BaseModel, Field

DEFAULT_ACCOUNTS_HOST = "accounts.zoho.in"
DEFAULT_DESK_HOST = "desk.zoho.in"
DEFAULT_TIMEOUT_SECONDS = 10.0


class HelpdeskSettings(BaseModel):
    """Hosts and credentials for the token and ticketing services."""

    accounts_host: str = Field(default=DEFAULT_ACCOUNTS_HOST)
    desk_host: str = Field(default=DEFAULT_DESK_HOST)
    client_id: str = Field(default="", description="OAuth client id")
    client_secret: str = Field(default="", description="OAuth client secret")
    refresh_token: str = Field(default="", description="Long-lived refresh token")
    org_id: str = Field(default="", description="Helpdesk organization id")
    department_id: str = Field(
        default="", description="Department every created ticket is filed under"
    )
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)

    @property
    def token_url(self) -> str:
        return f"https://{self.accounts_host}/oauth/v2/token"

    @property
    def tickets_url(self) -> str:
        return f"https://{self.desk_host}/api/v1/tickets"

    @classmethod
    def from_env(cls) -> "HelpdeskSettings":
        """Build settings from environment variables."""
        return cls(
            accounts_host=os.environ.get("ZOHO_ACCOUNTS_HOST") or DEFAULT_ACCOUNTS_HOST,
            desk_host=os.environ.get("ZOHO_DESK_HOST") or DEFAULT_DESK_HOST,
            client_id=os.environ.get("CLIENT_ID", ""),
            client_secret=os.environ.get("CLIENT_SECRET", ""),
            refresh_token=os.environ.get("REFRESH_TOKEN", ""),
            org_id=os.environ.get("ORG_ID", ""),
            department_id=os.environ.get("ZOHO_DEPARTMENT_ID", ""),
            timeout_seconds=float(
                os.environ.get("HTTP_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
            ),
        )
