"""Tests for request utility functions."""

from unittest.mock import MagicMock

from personal_finance.core.request_utils import _is_valid_ip, get_client_ip


class TestIsValidIP:
    """Tests for _is_valid_ip function."""

    def test_valid_addresses(self):
        assert _is_valid_ip("10.0.0.1") is True
        assert _is_valid_ip("::1") is True
        assert _is_valid_ip("2001:db8::1") is True

    def test_invalid_addresses(self):
        assert _is_valid_ip("") is False
        assert _is_valid_ip("not-an-ip") is False
        assert _is_valid_ip("256.1.1.1") is False
        assert _is_valid_ip("192.168.1.1:8080") is False
        assert _is_valid_ip(" 192.168.1.1") is False


class TestGetClientIP:
    """Tests for get_client_ip function."""

    def _create_mock_request(self, x_forwarded_for=None, client_host=None):
        """Create a mock FastAPI request."""
        request = MagicMock()
        headers = {}
        if x_forwarded_for is not None:
            headers["X-Forwarded-For"] = x_forwarded_for
        request.headers = headers

        if client_host is not None:
            request.client = MagicMock()
            request.client.host = client_host
        else:
            request.client = None
        return request

    def test_direct_client(self):
        request = self._create_mock_request(client_host="203.0.113.7")
        assert get_client_ip(request) == "203.0.113.7"

    def test_forwarded_for_from_trusted_proxy(self):
        request = self._create_mock_request(
            x_forwarded_for="10.0.0.1, 172.16.0.1", client_host="127.0.0.1"
        )
        assert get_client_ip(request) == "10.0.0.1"

    def test_forwarded_for_from_untrusted_peer_ignored(self):
        """A client cannot pick its own IP by sending the header."""
        request = self._create_mock_request(
            x_forwarded_for="10.0.0.1", client_host="203.0.113.7"
        )
        assert get_client_ip(request) == "203.0.113.7"

    def test_invalid_forwarded_for_falls_back(self):
        request = self._create_mock_request(x_forwarded_for="garbage", client_host="::1")
        assert get_client_ip(request) == "::1"

    def test_no_client(self):
        request = self._create_mock_request()
        assert get_client_ip(request) is None
