"""Token-cached Selling Partner API client.

Exchanges the long-lived LWA refresh token for a short-lived access token,
caches it, and attaches it to every outbound call as ``x-amz-access-token``.
The cached token is reused until ``expires_in - margin`` seconds after it
was minted; the margin (300s by default) covers clock skew and requests
already in flight.

Refresh is single-flight: the check-and-refresh path runs under a lock, so
concurrent callers that find no valid token trigger one exchange, not one
each.

Usage:
    from spapi_mcp.auth.sp_api_auth import SPAPIAuth
    client = SPAPIAuth(store.get_credentials())
    data = client.make_authenticated_request("GET", url, {"marketplaceIds": "ATVPDKIKX0DER"})
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from spapi_mcp.config import default_config
from spapi_mcp.errors import AuthenticationError, UpstreamAPIError

logger = logging.getLogger("spapi.auth")

BODY_METHODS = ("POST", "PUT", "PATCH")


@dataclass
class CachedAccessToken:
    """Access token plus the epoch second at which it stops being reused."""

    token: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


def _extract_error_description(exc: requests.RequestException) -> Optional[str]:
    response = getattr(exc, "response", None)
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("error_description") or body.get("error")
    return None


def _summarize_api_error(response: requests.Response) -> tuple:
    """Return (message, parsed body) for a non-2xx SP-API response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    message = ""
    if isinstance(body, dict) and body.get("errors"):
        first = body["errors"][0]
        if isinstance(first, dict):
            message = first.get("message") or first.get("code") or ""
            if first.get("details"):
                message = f"{message} ({first['details']})"
    if not message:
        message = (response.text or "")[:500] or response.reason or "request failed"
    return f"SP-API request failed with status {response.status_code}: {message}", body


class SPAPIAuth:
    """Authenticated HTTP client for the Selling Partner API."""

    def __init__(
        self,
        credentials: Dict[str, Optional[str]],
        config: Optional[dict] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config or default_config()
        self.client_id = credentials.get("clientId")
        self.client_secret = credentials.get("clientSecret")
        self.refresh_token = credentials.get("refreshToken")
        self.token_endpoint = self.config["token_endpoint"]
        self.timeout = self.config.get("request_timeout_seconds", 30)
        self.expiry_margin = self.config.get("token_expiry_margin_seconds", 300)
        self.user_agent = self.config["user_agent"]
        self._session = session or requests.Session()
        self._cached_token: Optional[CachedAccessToken] = None
        self._token_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Token cache
    # ------------------------------------------------------------------

    def _refresh_access_token(self) -> CachedAccessToken:
        try:
            response = self._session.post(
                self.token_endpoint,
                data={
                    "grant_type": "refresh_token",
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "refresh_token": self.refresh_token,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
            token = payload["access_token"]
            expires_in = int(payload.get("expires_in", 3600))
        except requests.RequestException as exc:
            description = _extract_error_description(exc) or str(exc)
            logger.error("LWA token refresh failed: %s", description)
            raise AuthenticationError(f"Failed to get access token: {description}") from exc
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("LWA token response malformed: %s", exc)
            raise AuthenticationError(
                "Failed to get access token: malformed token response"
            ) from exc

        lifetime = expires_in - self.expiry_margin
        logger.info("Access token refreshed (reused for %ds)", max(lifetime, 0))
        return CachedAccessToken(token=token, expires_at=time.time() + lifetime)

    def get_access_token(self) -> str:
        """Return a valid access token, refreshing it if none is held or it expired."""
        with self._token_lock:
            cached = self._cached_token
            if cached is not None and cached.is_valid(time.time()):
                return cached.token
            self._cached_token = self._refresh_access_token()
            return self._cached_token.token

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def make_authenticated_request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, str]] = None,
        data: Any = None,
    ) -> Any:
        """Issue an authenticated call and return the decoded JSON body.

        Args:
            method: GET, POST, PUT or PATCH.
            url: Absolute request URL.
            params: Query parameters.
            data: JSON body; only sent for POST/PUT/PATCH.

        Returns:
            Parsed JSON response, or an empty dict for an empty body.

        Raises:
            AuthenticationError: The token exchange failed.
            UpstreamAPIError: The API call failed or timed out.
        """
        method = method.upper()
        access_token = self.get_access_token()

        kwargs: Dict[str, Any] = {
            "method": method,
            "url": url,
            "headers": {
                "x-amz-access-token": access_token,
                "Content-Type": "application/json",
                "User-Agent": self.user_agent,
            },
            "params": params or {},
            "timeout": self.timeout,
        }
        if data is not None and method in BODY_METHODS:
            kwargs["json"] = data

        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(**kwargs)
        except requests.Timeout as exc:
            logger.warning("SP-API request timed out: %s %s", method, url)
            raise UpstreamAPIError(
                f"SP-API request timed out after {self.timeout} seconds"
            ) from exc
        except requests.RequestException as exc:
            logger.warning("SP-API request failed: %s %s: %s", method, url, exc)
            raise UpstreamAPIError(f"SP-API request failed: {exc}") from exc

        if response.status_code >= 400:
            message, body = _summarize_api_error(response)
            logger.error(message)
            raise UpstreamAPIError(message, status_code=response.status_code, details=body)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamAPIError(
                "SP-API returned a non-JSON response",
                status_code=response.status_code,
            ) from exc
