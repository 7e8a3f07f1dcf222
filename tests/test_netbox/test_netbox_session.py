"""
Тесты NetBoxSession: таймаут и повтор при HTTP 429.
"""

from unittest.mock import MagicMock, patch

import requests

from hardware_collector.netbox.client.base import (
    DEFAULT_RETRY_DELAY,
    MAX_RETRIES_429,
    NetBoxSession,
)


def _response(status, headers=None):
    response = MagicMock()
    response.status_code = status
    response.headers = headers or {}
    return response


class TestNetBoxSession:

    @patch("hardware_collector.netbox.client.base.time.sleep")
    @patch.object(requests.Session, "request")
    def test_default_timeout(self, mock_request, mock_sleep):
        mock_request.return_value = _response(200)
        NetBoxSession(timeout=7).request("GET", "http://nb/api/")
        assert mock_request.call_args.kwargs["timeout"] == 7
        mock_sleep.assert_not_called()

    @patch("hardware_collector.netbox.client.base.time.sleep")
    @patch.object(requests.Session, "request")
    def test_explicit_timeout_kept(self, mock_request, mock_sleep):
        mock_request.return_value = _response(200)
        NetBoxSession(timeout=7).request("GET", "http://nb/api/", timeout=2)
        assert mock_request.call_args.kwargs["timeout"] == 2

    @patch("hardware_collector.netbox.client.base.time.sleep")
    @patch.object(requests.Session, "request")
    def test_retry_after_429(self, mock_request, mock_sleep):
        mock_request.side_effect = [_response(429, {"Retry-After": "2"}), _response(200)]

        response = NetBoxSession().request("GET", "http://nb/api/")

        assert response.status_code == 200
        assert mock_request.call_count == 2
        mock_sleep.assert_called_once_with(2)

    @patch("hardware_collector.netbox.client.base.time.sleep")
    @patch.object(requests.Session, "request")
    def test_default_delay(self, mock_request, mock_sleep):
        mock_request.side_effect = [_response(429), _response(200)]
        NetBoxSession().request("GET", "http://nb/api/")
        mock_sleep.assert_called_once_with(DEFAULT_RETRY_DELAY)

    @patch("hardware_collector.netbox.client.base.time.sleep")
    @patch.object(requests.Session, "request")
    def test_gives_up(self, mock_request, mock_sleep):
        mock_request.return_value = _response(429)

        response = NetBoxSession().request("GET", "http://nb/api/")

        assert response.status_code == 429
        assert mock_request.call_count == MAX_RETRIES_429 + 1
        assert mock_sleep.call_count == MAX_RETRIES_429
