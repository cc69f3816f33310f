"""
Flask app serving the feed data to the browser visualization.

Routes:
- GET  /api/gdelt    raw feed JSON: a local file, or a proxied gzipped remote feed
- GET  /api/entries  normalized entries plus stats (falls back to sample data)
- POST /api/redact   redact a snippet on demand
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

from ..core.config import ConfigManager, word_lists
from ..core.http_client import RetryableHTTPClient
from ..core.paths import resolve_data_file
from ..processors.downloader import fetch_gzipped_json
from ..processors.feed_adapter import FeedAdapter
from ..processors.redactor import MODES, Redactor
from ..processors.stats import compute_stats

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def _read_local_data(data_file: str) -> Any:
    path = resolve_data_file(data_file)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def build_app(
    config_manager: ConfigManager,
    http_client: Optional[RetryableHTTPClient] = None,
    feed_adapter: Optional[FeedAdapter] = None,
) -> Flask:
    """Build the Flask application from the ``server``/``feed``/``redaction`` config."""
    server_cfg = config_manager.get_server_config()
    redaction_cfg = config_manager.get_redaction_config()

    static_dir = server_cfg.get("static_dir")
    if static_dir:
        app = Flask(__name__, static_folder=str(resolve_data_file(static_dir)), static_url_path="")
    else:
        app = Flask(__name__, static_folder=None)

    mode = server_cfg.get("mode", "local")
    data_file = server_cfg.get("data_file", "data/sample-data.json")
    remote_url = server_cfg.get("remote_url")
    client = http_client or RetryableHTTPClient.from_config(config_manager.get_feed_config())
    adapter = feed_adapter or FeedAdapter.from_config(config_manager, http_client=client)
    redactor = Redactor(**word_lists(redaction_cfg))
    default_mode = redaction_cfg.get("mode", "soften")

    @app.after_request
    def add_cors_headers(response):
        for header, value in CORS_HEADERS.items():
            response.headers[header] = value
        return response

    @app.get("/api/gdelt")
    def gdelt():
        try:
            if mode == "remote":
                logger.info("Proxying remote feed %s", remote_url)
                data = fetch_gzipped_json(remote_url, client)
            else:
                data = _read_local_data(data_file)
                logger.info("Serving local data from %s", data_file)
        except Exception as e:
            logger.error(f"Error serving data: {e}")
            return jsonify({"error": "Failed to load data", "details": str(e)}), 500
        return jsonify(data)

    @app.get("/api/entries")
    def entries():
        result = adapter.load()
        payload: Dict[str, Any] = result.to_dict()
        payload["stats"] = compute_stats(result.entries).to_dict()
        return jsonify(payload)

    @app.post("/api/redact")
    def redact():
        body = request.get_json(silent=True)
        if body is None:
            body = {}
        if not isinstance(body, dict):
            return jsonify({"error": "Expected a JSON object"}), 400
        text = body.get("text")
        requested_mode = body.get("mode") or default_mode
        if not isinstance(text, str) or not text.strip():
            return jsonify({"error": "Missing 'text'"}), 400
        if requested_mode not in MODES:
            return jsonify({"error": f"Unknown mode '{requested_mode}'"}), 400
        return jsonify({
            "original": text,
            "redacted": redactor.redact(text, requested_mode),
            "highlights": redactor.find_highlights(text),
        })

    return app
