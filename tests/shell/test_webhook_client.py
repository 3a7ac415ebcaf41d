"""Tests for the chat webhook client.

Uses the `responses` library to mock HTTP requests.
"""

import json

import pytest
import requests
import responses

from src.core.errors import TransportError
from src.shell.webhook_client import WebhookClient


WEBHOOK_URL = "https://chat.example.com/hooks/abc123"


class TestWebhookClientPostText:
    """Tests for WebhookClient.post_text()."""

    @responses.activate
    def test_sends_json_text_payload(self):
        responses.add(responses.POST, WEBHOOK_URL, body="ok", status=200)

        WebhookClient(WEBHOOK_URL).post_text("#### ⚠️ Advice")

        request = responses.calls[0].request
        assert json.loads(request.body) == {"text": "#### ⚠️ Advice"}
        assert request.headers["Content-Type"] == "application/json"

    @responses.activate
    def test_any_2xx_is_success(self):
        responses.add(responses.POST, WEBHOOK_URL, status=204)

        WebhookClient(WEBHOOK_URL).post_text("hello")

    @responses.activate
    def test_non_2xx_raises(self):
        responses.add(responses.POST, WEBHOOK_URL, body="invalid_payload", status=400)

        with pytest.raises(TransportError, match="400"):
            WebhookClient(WEBHOOK_URL).post_text("hello")

    @responses.activate
    def test_timeout_raises(self):
        responses.add(
            responses.POST,
            WEBHOOK_URL,
            body=requests.exceptions.Timeout("timed out"),
        )

        with pytest.raises(TransportError, match="timed out"):
            WebhookClient(WEBHOOK_URL).post_text("hello")

    @responses.activate
    def test_connection_error_raises(self):
        responses.add(
            responses.POST,
            WEBHOOK_URL,
            body=requests.exceptions.ConnectionError("no route to host"),
        )

        with pytest.raises(TransportError, match="no route to host"):
            WebhookClient(WEBHOOK_URL).post_text("hello")
