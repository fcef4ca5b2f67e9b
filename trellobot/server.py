"""
Keep-alive web server.

Hosting platforms that only keep web processes alive need something
listening on $PORT while the scheduled jobs run. No pipeline work happens here.
"""

import logging
import os
from datetime import datetime, timezone
from typing import Optional

from flask import Flask, jsonify

from trellobot import __version__
from trellobot.ai import get_provider_info
from trellobot.config import Config

logger = logging.getLogger(__name__)

DEFAULT_PORT = 10000


def create_app(config: Optional[Config] = None) -> Flask:
    """
    Application factory for the keep-alive server.

    Args:
        config: Bot configuration, used only to report configured integrations
    """
    config = config or Config()
    app = Flask(__name__)

    @app.route("/")
    def index():
        return "Automation bot is running. Cron jobs are active."

    @app.route("/api/health")
    def health():
        return jsonify(
            {
                "status": "ok",
                "service": "trellobot",
                "version": __version__,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "integrations": config.configured_integrations(),
                "ai_providers": get_provider_info(config),
            }
        )

    return app


def serve(config: Optional[Config] = None, port: Optional[int] = None) -> None:
    port = port or int(os.environ.get("PORT", DEFAULT_PORT))
    app = create_app(config)
    logger.info(f"Server listening on port {port}")
    app.run(host="0.0.0.0", port=port)
