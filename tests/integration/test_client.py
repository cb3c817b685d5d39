# =============================================================================
# TELEWIND - ANEMOMETER CLIENT TESTS
# =============================================================================

from unittest.mock import Mock, patch

import pytest
import requests

from collector.client import AnemometerClient
from collector.errors import FetchError, ParseError


def page_response(text):
    response = Mock()
    response.text = text
    response.raise_for_status.return_value = None
    return response


def status_response(status):
    response = Mock()
    response.status_code = status
    response.raise_for_status.side_effect = requests.HTTPError(f"{status}", response=response)
    return response


def make_client(max_retries=3):
    sleeps = []
    client = AnemometerClient("http://example.test/wind", max_retries=max_retries, sleep=sleeps.append)
    return client, sleeps


class TestAnemometerClient:

    @patch("collector.client.requests.get")
    def test_fetch_observations(self, mock_get, anemometer_html):
        mock_get.return_value = page_response(anemometer_html)
        client, sleeps = make_client()

        observations = client.fetch_observations()

        assert len(observations) == 5
        assert mock_get.call_args[0][0] == "http://example.test/wind"
        assert sleeps == []

    @patch("collector.client.requests.get")
    def test_client_error_is_not_retried(self, mock_get):
        mock_get.return_value = status_response(404)
        client, sleeps = make_client()

        with pytest.raises(FetchError):
            client.fetch_html()

        assert mock_get.call_count == 1
        assert sleeps == []

    @patch("collector.client.requests.get")
    def test_server_error_retries_with_backoff(self, mock_get):
        mock_get.return_value = status_response(500)
        client, sleeps = make_client(max_retries=3)

        with pytest.raises(FetchError, match="All 3 attempts failed"):
            client.fetch_html()

        assert mock_get.call_count == 3
        assert sleeps == [1.0, 2.0]

    @patch("collector.client.requests.get")
    def test_recovers_after_connection_error(self, mock_get, anemometer_html):
        mock_get.side_effect = [
            requests.ConnectionError("refused"),
            page_response(anemometer_html),
        ]
        client, sleeps = make_client()

        assert len(client.fetch_observations()) == 5
        assert sleeps == [1.0]

    @patch("collector.client.requests.get")
    def test_broken_page_raises_parse_error(self, mock_get):
        mock_get.return_value = page_response(
            "<table><tr><td>yesterday</td><td>N (0°)</td><td>1.0</td></tr></table>"
        )
        client, _ = make_client()

        with pytest.raises(ParseError):
            client.fetch_observations()
