"""Shared pytest fixtures for the SP-API developer MCP server tests."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Ensure project root is on sys.path
BASE_DIR = Path(__file__).resolve().parent.parent
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from spapi_mcp.auth.credential_store import CredentialStore  # noqa: E402
from spapi_mcp.config import default_config  # noqa: E402
from spapi_mcp.context import ServerContext  # noqa: E402
from spapi_mcp.migration.migration_data import get_orders_api_migration_data  # noqa: E402

TEST_CLIENT_ID = "amzn1.application-oa2-client.abcdef123456"
TEST_CLIENT_SECRET = "secret-value-0123456789"
TEST_REFRESH_TOKEN = "Atzr|refresh-token-0123456789"


def make_response(status_code=200, json_data=None, content=None):
    """Build a mocked ``requests.Response``."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data if json_data is not None else {}
    if content is None:
        content = b"" if json_data is None else b"{...}"
    response.content = content
    response.text = str(json_data) if json_data is not None else ""
    return response


def make_token_response(token="Atza|access-token", expires_in=3600):
    return make_response(200, {"access_token": token, "token_type": "bearer", "expires_in": expires_in})


@pytest.fixture
def migration_data():
    return get_orders_api_migration_data()


@pytest.fixture
def config():
    return default_config()


@pytest.fixture
def credentials():
    return {
        "clientId": TEST_CLIENT_ID,
        "clientSecret": TEST_CLIENT_SECRET,
        "refreshToken": TEST_REFRESH_TOKEN,
        "baseUrl": "https://sellingpartnerapi-na.amazon.com",
    }


@pytest.fixture
def configured_store():
    return CredentialStore(
        client_id=TEST_CLIENT_ID,
        client_secret=TEST_CLIENT_SECRET,
        refresh_token=TEST_REFRESH_TOKEN,
    )


@pytest.fixture
def empty_store():
    return CredentialStore()


@pytest.fixture
def mock_session():
    """A ``requests.Session`` stand-in that hands out a token then 200 OK."""
    session = MagicMock()
    session.post.return_value = make_token_response()
    session.request.return_value = make_response(200, {"ok": True})
    return session


@pytest.fixture
def context(config, configured_store, mock_session):
    return ServerContext(config=config, credential_store=configured_store, session=mock_session)


@pytest.fixture
def unconfigured_context(config, empty_store, mock_session):
    return ServerContext(config=config, credential_store=empty_store, session=mock_session)
