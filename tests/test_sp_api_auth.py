"""Tests for the token-cached SP-API client."""

import threading
from unittest.mock import patch

import pytest
import requests

from spapi_mcp.auth.sp_api_auth import CachedAccessToken, SPAPIAuth
from spapi_mcp.errors import AuthenticationError, UpstreamAPIError
from tests.conftest import make_response, make_token_response

URL = "https://sellingpartnerapi-na.amazon.com/orders/2026-01-01/orders"


@pytest.fixture
def client(credentials, config, mock_session):
    return SPAPIAuth(credentials, config=config, session=mock_session)


class TestCachedAccessToken:

    def test_valid_strictly_before_expiry(self):
        token = CachedAccessToken(token="t", expires_at=1000.0)
        assert token.is_valid(999.999)
        assert not token.is_valid(1000.0)
        assert not token.is_valid(1001.0)


class TestTokenCache:

    def test_first_call_exchanges_once_second_reuses(self, client, mock_session):
        client.make_authenticated_request("GET", URL)
        client.make_authenticated_request("GET", URL)
        assert mock_session.post.call_count == 1
        assert mock_session.request.call_count == 2

    def test_refresh_request_form(self, client, mock_session, credentials, config):
        client.get_access_token()
        args, kwargs = mock_session.post.call_args
        assert args[0] == config["token_endpoint"]
        assert kwargs["data"] == {
            "grant_type": "refresh_token",
            "client_id": credentials["clientId"],
            "client_secret": credentials["clientSecret"],
            "refresh_token": credentials["refreshToken"],
        }
        assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"
        assert kwargs["timeout"] == 30

    @patch("spapi_mcp.auth.sp_api_auth.time")
    def test_expiry_is_lifetime_minus_margin(self, mock_time, client, mock_session):
        mock_time.time.return_value = 1_000.0
        client.get_access_token()
        assert client._cached_token.expires_at == 1_000.0 + 3600 - 300

    @patch("spapi_mcp.auth.sp_api_auth.time")
    def test_reused_until_margin(self, mock_time, client, mock_session):
        mock_time.time.return_value = 0.0
        client.get_access_token()
        mock_time.time.return_value = 3299.0
        client.get_access_token()
        assert mock_session.post.call_count == 1

    @patch("spapi_mcp.auth.sp_api_auth.time")
    def test_refreshed_at_expiry(self, mock_time, client, mock_session):
        mock_time.time.return_value = 0.0
        client.get_access_token()
        mock_session.post.return_value = make_token_response(token="second")
        mock_time.time.return_value = 3300.0
        assert client.get_access_token() == "second"
        assert mock_session.post.call_count == 2

    def test_concurrent_callers_single_refresh(self, client, mock_session):
        barrier = threading.Barrier(5)
        tokens = []

        def worker():
            barrier.wait()
            tokens.append(client.get_access_token())

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert mock_session.post.call_count == 1
        assert len(tokens) == 5


class TestRefreshFailures:

    def test_error_description_embedded(self, client, mock_session):
        failed = make_response(400, {"error": "invalid_grant", "error_description": "The refresh token is invalid"})
        failed.raise_for_status.side_effect = requests.HTTPError("400 Client Error", response=failed)
        mock_session.post.return_value = failed
        with pytest.raises(AuthenticationError, match="Failed to get access token: The refresh token is invalid"):
            client.get_access_token()

    def test_generic_message_without_body(self, client, mock_session):
        mock_session.post.side_effect = requests.ConnectionError("connection refused")
        with pytest.raises(AuthenticationError, match="Failed to get access token: connection refused"):
            client.get_access_token()

    def test_malformed_payload(self, client, mock_session):
        mock_session.post.return_value = make_response(200, {"token_type": "bearer"})
        with pytest.raises(AuthenticationError, match="malformed"):
            client.get_access_token()

    def test_no_retry_and_no_api_call(self, client, mock_session):
        mock_session.post.side_effect = requests.ConnectionError("down")
        with pytest.raises(AuthenticationError):
            client.make_authenticated_request("GET", URL)
        assert mock_session.post.call_count == 1
        mock_session.request.assert_not_called()


class TestAuthenticatedRequest:

    def test_headers_and_timeout(self, client, mock_session, config):
        client.make_authenticated_request("GET", URL, {"marketplaceIds": "ATVPDKIKX0DER"})
        kwargs = mock_session.request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["url"] == URL
        assert kwargs["headers"] == {
            "x-amz-access-token": "Atza|access-token",
            "Content-Type": "application/json",
            "User-Agent": config["user_agent"],
        }
        assert kwargs["params"] == {"marketplaceIds": "ATVPDKIKX0DER"}
        assert kwargs["timeout"] == 30

    @pytest.mark.parametrize("method", ["POST", "PUT", "PATCH"])
    def test_body_sent_for_write_verbs(self, client, mock_session, method):
        client.make_authenticated_request(method, URL, None, {"a": 1})
        assert mock_session.request.call_args.kwargs["json"] == {"a": 1}

    def test_body_not_sent_for_get(self, client, mock_session):
        client.make_authenticated_request("GET", URL, None, {"a": 1})
        assert "json" not in mock_session.request.call_args.kwargs

    def test_no_body_when_data_none(self, client, mock_session):
        client.make_authenticated_request("POST", URL)
        assert "json" not in mock_session.request.call_args.kwargs

    def test_returns_json(self, client, mock_session):
        mock_session.request.return_value = make_response(200, {"orders": []})
        assert client.make_authenticated_request("GET", URL) == {"orders": []}

    def test_empty_body(self, client, mock_session):
        mock_session.request.return_value = make_response(204)
        assert client.make_authenticated_request("PUT", URL, None, {"x": 1}) == {}

    def test_http_error(self, client, mock_session):
        body = {"errors": [{"code": "InvalidInput", "message": "Bad order id"}]}
        mock_session.request.return_value = make_response(400, body)
        with pytest.raises(UpstreamAPIError) as excinfo:
            client.make_authenticated_request("GET", URL)
        assert excinfo.value.status_code == 400
        assert excinfo.value.details == body
        assert "Bad order id" in str(excinfo.value)
        assert not excinfo.value.retryable

    def test_throttled_is_retryable(self, client, mock_session):
        mock_session.request.return_value = make_response(429, {"errors": [{"code": "QuotaExceeded", "message": "slow down"}]})
        with pytest.raises(UpstreamAPIError) as excinfo:
            client.make_authenticated_request("GET", URL)
        assert excinfo.value.retryable

    def test_timeout(self, client, mock_session):
        mock_session.request.side_effect = requests.Timeout("read timed out")
        with pytest.raises(UpstreamAPIError, match="timed out after 30 seconds"):
            client.make_authenticated_request("GET", URL)

    def test_connection_error(self, client, mock_session):
        mock_session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(UpstreamAPIError, match="refused"):
            client.make_authenticated_request("GET", URL)

    def test_default_session(self, credentials, config):
        with patch("spapi_mcp.auth.sp_api_auth.requests.Session") as session_cls:
            SPAPIAuth(credentials, config=config)
        session_cls.assert_called_once_with()
