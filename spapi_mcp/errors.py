"""Structured exception hierarchy.

Tool handlers catch ``SPAPIError`` at the tool boundary and report it as an
``isError`` tool result; nothing here is allowed to end the server process.

Usage:
    from spapi_mcp.errors import AuthenticationError

    raise AuthenticationError("Failed to get access token: invalid_grant")
"""

from typing import Any, Iterable, Optional, Sequence, Tuple


class SPAPIError(Exception):
    """Base exception for all server errors.

    Attributes:
        service: Name of the component or upstream that failed (e.g. "lwa").
        retryable: Whether the caller could reasonably retry.
    """

    def __init__(self, message: str, service: str = "", retryable: bool = False):
        super().__init__(message)
        self.service = service
        self.retryable = retryable


class PreconditionError(SPAPIError):
    """A required input or configuration is missing. No network call was made."""

    def __init__(self, message: str, service: str = ""):
        super().__init__(message, service=service, retryable=False)


class CredentialsNotConfiguredError(PreconditionError):
    """Client id, client secret and refresh token are not all set."""

    def __init__(self, message: str = "SP-API credentials are not configured"):
        super().__init__(message, service="credentials")


class MissingParameterError(PreconditionError):
    """None of a group of mutually-required parameters was supplied."""

    def __init__(self, parameters: Sequence[str], message: str = ""):
        self.parameters = tuple(parameters)
        super().__init__(
            message or f"Either {' or '.join(self.parameters)} must be provided",
            service="arguments",
        )


class AuthenticationError(SPAPIError):
    """The refresh-token exchange failed. Never retried automatically."""

    def __init__(self, message: str):
        super().__init__(message, service="lwa", retryable=False)


class UpstreamAPIError(SPAPIError):
    """The Selling Partner API call failed.

    Attributes:
        status_code: HTTP status, or None for transport failures (timeouts,
                     connection errors).
        details: Parsed error body when the API returned one.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Any = None,
    ):
        retryable = status_code is None or status_code == 429 or status_code >= 500
        super().__init__(message, service="sp-api", retryable=retryable)
        self.status_code = status_code
        self.details = details


class UnsupportedMigrationError(SPAPIError):
    """The requested source/target version pair has no migration handler."""

    def __init__(self, source: str, target: str, supported: Iterable[Tuple[str, str]]):
        self.source = source
        self.target = target
        self.supported = list(supported)
        super().__init__(
            f"Unsupported migration path: {source} → {target}",
            service="migration",
            retryable=False,
        )
