"""In-memory SP-API credential store.

Holds the LWA client id, client secret and refresh token plus the regional
base URL. Values live only for the process lifetime; nothing is written to
disk. One store is owned by the ServerContext and shared by every tool.
"""

import logging
import os
from datetime import datetime, timezone
from typing import Dict, Optional

from spapi_mcp.config import NA_BASE_URL

logger = logging.getLogger("spapi.auth.credentials")

CREDENTIAL_FIELDS = ("clientId", "clientSecret", "refreshToken", "baseUrl")
SECRET_FIELDS = ("clientId", "clientSecret", "refreshToken")


def mask_value(value: Optional[str]) -> str:
    """Mask a secret for display: keep the first and last four characters."""
    if not value:
        return "(not set)"
    if len(value) <= 8:
        return "****"
    return value[:4] + "****" + value[-4:]


class CredentialStore:
    """Mutable credential holder. Updates are last-write-wins."""

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        refresh_token: Optional[str] = None,
        base_url: Optional[str] = None,
        default_base_url: str = NA_BASE_URL,
    ):
        self.default_base_url = default_base_url
        self._credentials: Dict[str, Optional[str]] = {
            "clientId": client_id,
            "clientSecret": client_secret,
            "refreshToken": refresh_token,
            "baseUrl": base_url or default_base_url,
        }
        self.configured_at: Optional[datetime] = None
        if self.is_configured():
            self.configured_at = datetime.now(timezone.utc)

    @classmethod
    def from_env(cls, default_base_url: str = NA_BASE_URL) -> "CredentialStore":
        """Seed a store from SP_API_* environment variables."""
        store = cls(
            client_id=os.environ.get("SP_API_CLIENT_ID") or None,
            client_secret=os.environ.get("SP_API_CLIENT_SECRET") or None,
            refresh_token=os.environ.get("SP_API_REFRESH_TOKEN") or None,
            base_url=os.environ.get("SP_API_BASE_URL") or None,
            default_base_url=default_base_url,
        )
        if store.is_configured():
            logger.info("Credentials loaded from environment")
        return store

    def set_credentials(self, **updates: Optional[str]) -> None:
        """Apply non-empty values for any of clientId, clientSecret, refreshToken, baseUrl."""
        for key in CREDENTIAL_FIELDS:
            value = updates.get(key)
            if value:
                self._credentials[key] = value
        self.configured_at = datetime.now(timezone.utc)
        logger.info(
            "Credentials updated: %s",
            ", ".join(k for k in CREDENTIAL_FIELDS if updates.get(k)) or "(none)",
        )

    def get_credentials(self) -> Dict[str, Optional[str]]:
        return dict(self._credentials)

    def is_configured(self) -> bool:
        return all(self._credentials.get(key) for key in SECRET_FIELDS)

    @property
    def base_url(self) -> str:
        return self._credentials.get("baseUrl") or self.default_base_url

    def get_status(self) -> dict:
        return {
            "isConfigured": self.is_configured(),
            "hasClientId": bool(self._credentials.get("clientId")),
            "hasClientSecret": bool(self._credentials.get("clientSecret")),
            "hasRefreshToken": bool(self._credentials.get("refreshToken")),
            "baseUrl": self.base_url,
            "configuredAt": self.configured_at,
        }

    def clear_credentials(self) -> None:
        self._credentials = {
            "clientId": None,
            "clientSecret": None,
            "refreshToken": None,
            "baseUrl": self.default_base_url,
        }
        self.configured_at = None
        logger.info("Credentials cleared")

    def get_masked_credentials(self) -> Dict[str, str]:
        return {
            "clientId": mask_value(self._credentials.get("clientId")),
            "clientSecret": mask_value(self._credentials.get("clientSecret")),
            "refreshToken": mask_value(self._credentials.get("refreshToken")),
            "baseUrl": self._credentials.get("baseUrl") or "(default)",
        }

    def fingerprint(self) -> tuple:
        """Identity of the secret fields; changes whenever a client must be rebuilt."""
        return tuple(self._credentials.get(key) for key in SECRET_FIELDS)
