"""Tests for ServerContext client lifecycle."""

import pytest

from spapi_mcp.context import ServerContext
from spapi_mcp.errors import CredentialsNotConfiguredError


class TestServerContext:

    def test_defaults(self):
        ctx = ServerContext()
        assert ctx.config["request_timeout_seconds"] == 30
        assert ctx.base_url == "https://sellingpartnerapi-na.amazon.com"

    def test_unconfigured_raises(self, unconfigured_context):
        with pytest.raises(CredentialsNotConfiguredError):
            unconfigured_context.get_client()

    def test_client_reused(self, context):
        assert context.get_client() is context.get_client()

    def test_token_cache_survives_calls(self, context, mock_session):
        context.get_client().get_access_token()
        context.get_client().get_access_token()
        assert mock_session.post.call_count == 1

    def test_base_url_change_keeps_client(self, context):
        client = context.get_client()
        context.credentials.set_credentials(baseUrl="https://sellingpartnerapi-eu.amazon.com")
        assert context.get_client() is client
        assert context.base_url == "https://sellingpartnerapi-eu.amazon.com"

    def test_secret_change_rebuilds_client(self, context, mock_session):
        first = context.get_client()
        first.get_access_token()
        context.credentials.set_credentials(refreshToken="Atzr|rotated-token")
        second = context.get_client()
        assert second is not first
        assert second.refresh_token == "Atzr|rotated-token"
        second.get_access_token()
        assert mock_session.post.call_count == 2
