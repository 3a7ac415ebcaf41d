"""Web Handler - home page and the /nit slash command.

This module provides the HTTP endpoints served alongside the poller.
Part of the imperative shell - handles HTTP I/O. It shares no state with
the alert pipeline.
"""

import hmac
import json
import logging
from pathlib import Path
from typing import Any

from flask import Flask, Request, Response, request

from src.core.config import Config
from src.core.links import substitute_urls

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _read_static(name: str) -> str:
    return (STATIC_DIR / name).read_text(encoding="utf-8")


def _json_response(data: dict[str, Any], status: int = 200) -> Response:
    """Create a pretty-printed JSON response."""
    return Response(
        json.dumps(data, indent=2),
        status=status,
        mimetype="application/json",
    )


def _is_blank(text: str) -> bool:
    return not text.strip()


class SlashCommandHandler:
    """Handles the /nit slash command.

    The command echoes its text back to the channel with Twitter/X and
    Medium links rewritten to friendlier front-ends.
    """

    def __init__(self, token: str | None) -> None:
        """Initialize handler.

        Args:
            token: Expected slash command token; None rejects every request
        """
        self.expected_authorization = f"Token {token}" if token else None

    def verify_token(self, authorization: str) -> bool:
        if self.expected_authorization is None:
            return False
        return hmac.compare_digest(
            authorization.encode("utf-8"),
            self.expected_authorization.encode("utf-8"),
        )

    def handle(self, req: Request) -> tuple[dict[str, Any], int]:
        """Process a slash command request.

        Returns:
            Tuple of (response body, HTTP status code)
        """
        # WSGI servers report a missing Content-Type as ""
        content_type = req.headers.get("Content-Type")
        if not content_type:
            return {"error": "Content-Type header not found"}, 400

        authorization = req.headers.get("Authorization")
        if authorization is None:
            return {"error": "Authorization header not found"}, 400

        if content_type != FORM_CONTENT_TYPE:
            return {"error": "Bad request"}, 400

        if not self.verify_token(authorization):
            return {"error": "Not authorised"}, 401

        text = req.form.get("text")
        if text is None or _is_blank(text):
            return {
                "response_type": "ephemeral",
                "text": "You need to supply some text",
            }, 200

        return {
            "response_type": "in_channel",
            "text": substitute_urls(text),
        }, 200


def create_app(config: Config) -> Flask:
    """Create the Flask app for the home page and slash command.

    Args:
        config: Application configuration

    Returns:
        Configured Flask app
    """
    app = Flask(__name__, static_folder=None)

    home_html = _read_static("home.html").replace("$rev$", config.revision)
    style_css = _read_static("style.css")
    not_found_html = _read_static("not_found.html")
    slash_command = SlashCommandHandler(config.slash_token)

    def not_found() -> Response:
        return Response(not_found_html, status=404, mimetype="text/html")

    @app.get("/")
    def home() -> Response:
        return Response(home_html, mimetype="text/html")

    @app.get("/style.css")
    def style() -> Response:
        return Response(style_css, mimetype="text/css")

    @app.route("/nit", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    def nit() -> Response:
        if request.method != "POST":
            return not_found()
        body, status = slash_command.handle(request)
        return _json_response(body, status)

    @app.errorhandler(404)
    def handle_not_found(error: Exception) -> Response:
        return not_found()

    @app.errorhandler(405)
    def handle_method_not_allowed(error: Exception) -> Response:
        return not_found()

    return app
