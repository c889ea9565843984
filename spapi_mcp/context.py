"""Process-lifetime server state.

The server builds one ServerContext and hands it to every tool component.
It owns the configuration, the credential store, and the single SP-API
client whose token cache must survive across tool calls.
"""

import logging
import threading
from typing import Optional

import requests

from spapi_mcp.auth.credential_store import CredentialStore
from spapi_mcp.auth.sp_api_auth import SPAPIAuth
from spapi_mcp.config import default_config
from spapi_mcp.errors import CredentialsNotConfiguredError

logger = logging.getLogger("spapi.context")


class ServerContext:
    """Shared configuration, credentials, and cached API client."""

    def __init__(
        self,
        config: Optional[dict] = None,
        credential_store: Optional[CredentialStore] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config or default_config()
        self.credentials = credential_store or CredentialStore(
            default_base_url=self.config["default_base_url"]
        )
        self._session = session
        self._client: Optional[SPAPIAuth] = None
        self._client_fingerprint: Optional[tuple] = None
        self._lock = threading.Lock()

    @property
    def base_url(self) -> str:
        return self.credentials.base_url

    def get_client(self) -> SPAPIAuth:
        """Return the shared client, rebuilding it if the credentials changed.

        Raises:
            CredentialsNotConfiguredError: The store is not fully configured.
        """
        if not self.credentials.is_configured():
            raise CredentialsNotConfiguredError()

        fingerprint = self.credentials.fingerprint()
        with self._lock:
            if self._client is None or fingerprint != self._client_fingerprint:
                if self._client is not None:
                    logger.info("Credentials changed, discarding cached access token")
                self._client = SPAPIAuth(
                    self.credentials.get_credentials(),
                    config=self.config,
                    session=self._session,
                )
                self._client_fingerprint = fingerprint
            return self._client
