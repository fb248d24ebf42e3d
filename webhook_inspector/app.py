"""
webhook-inspector: browse stored webhook deliveries.

JSON API under /api/webhooks plus an HTML detail page per delivery.
"""

import json
import sys
from datetime import datetime, timezone
from typing import Optional

from flask import Flask, abort, jsonify, render_template, request
from flask_cors import CORS

from . import __version__
from .config import Settings
from .exceptions import ConfigError, StorageError
from .store import WebhookStore

DEFAULT_LIMIT = 20
MAX_LIMIT = 100
MAX_OFFSET = 2**63 - 1


def format_timestamp(value: datetime) -> str:
    """Render like the en-US locale does, e.g. ``3/7/2025, 2:05:09 PM``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return (
        f"{value.month}/{value.day}/{value.year}, "
        f"{hour}:{value.minute:02d}:{value.second:02d} {suffix}"
    )


def pretty_body(body: Optional[str]) -> str:
    if not body:
        return ""
    try:
        return json.dumps(json.loads(body), indent=2)
    except ValueError:
        return body


def _int_arg(name: str, default: int, minimum: int, maximum: Optional[int] = None) -> int:
    raw = request.args.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        abort(400, description=f"{name} must be an integer")
    if value < minimum or (maximum is not None and value > maximum):
        bounds = f"between {minimum} and {maximum}" if maximum is not None else f"at least {minimum}"
        abort(400, description=f"{name} must be {bounds}")
    return value


def create_app(settings: Optional[Settings] = None, store: Optional[WebhookStore] = None) -> Flask:
    if settings is None:
        settings = Settings.from_env()
    if store is None:
        store = WebhookStore(settings.database_url)
        store.create_schema()

    app = Flask(__name__)
    CORS(app)  # Allow cross-origin requests from a separately served UI
    app.jinja_env.filters["locale_datetime"] = format_timestamp

    @app.errorhandler(StorageError)
    def storage_error(e):
        app.logger.error("Storage failure: %s", e)
        return jsonify({"error": str(e)}), 503

    @app.errorhandler(400)
    def bad_request(e):
        return jsonify({"error": e.description}), 400

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Not found"}), 404

    @app.route("/", methods=["GET"])
    def index():
        return jsonify({
            "name": "webhook-inspector",
            "version": __version__,
            "endpoints": {
                "GET /api/webhooks": "List stored webhooks (limit, offset)",
                "GET /api/webhooks/<id>": "Get a stored webhook",
                "DELETE /api/webhooks/<id>": "Delete a stored webhook",
                "DELETE /api/webhooks": "Delete all stored webhooks",
                "GET /webhooks/<id>": "Webhook detail page",
                "GET /healthz": "Health check",
                "GET /readyz": "Readiness check",
            },
        })

    @app.route("/healthz", methods=["GET"])
    def healthz():
        return jsonify({"status": "ok"})

    @app.route("/readyz", methods=["GET"])
    def readyz():
        try:
            store.count()
        except StorageError as e:
            return jsonify({"status": "unavailable", "error": str(e)}), 503
        return jsonify({"status": "ready"})

    @app.route("/api/webhooks", methods=["GET"])
    def list_webhooks():
        limit = _int_arg("limit", DEFAULT_LIMIT, 1, MAX_LIMIT)
        offset = _int_arg("offset", 0, 0, MAX_OFFSET)
        webhooks = store.list(limit=limit, offset=offset)
        return jsonify({
            "count": store.count(),
            "webhooks": [webhook.to_summary() for webhook in webhooks],
        })

    @app.route("/api/webhooks/<webhook_id>", methods=["GET"])
    def get_webhook(webhook_id):
        webhook = store.get(webhook_id)
        if webhook is None:
            return jsonify({"error": "Not found"}), 404
        return jsonify(webhook.to_dict())

    @app.route("/api/webhooks/<webhook_id>", methods=["DELETE"])
    def delete_webhook(webhook_id):
        if not store.delete(webhook_id):
            return jsonify({"error": "Not found"}), 404
        app.logger.info("Deleted webhook %s", webhook_id)
        return jsonify({"deleted": webhook_id})

    @app.route("/api/webhooks", methods=["DELETE"])
    def clear_webhooks():
        return jsonify({"cleared": store.clear()})

    @app.route("/webhooks/<webhook_id>", methods=["GET"])
    def webhook_detail(webhook_id):
        webhook = store.get(webhook_id)
        if webhook is None:
            return render_template("not_found.html", webhook_id=webhook_id), 404
        return render_template(
            "webhook_detail.html",
            webhook=webhook,
            body=pretty_body(webhook.body),
        )

    return app


def main() -> None:
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)
    try:
        app = create_app(settings)
    except StorageError as e:
        print(f"Error opening database: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"webhook-inspector starting on {settings.host}:{settings.port}")
    app.run(host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
