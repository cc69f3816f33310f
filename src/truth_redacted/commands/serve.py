"""
Serve command implementation.
Runs the Flask app that feeds the browser visualization.
"""

import logging
from typing import Optional

from ..core.command_context import CommandContext
from ..web.app import build_app

logger = logging.getLogger(__name__)


def run(config_path: Optional[str], host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Start the development server (blocking)."""
    ctx = CommandContext(config_path)
    app = build_app(ctx.config_manager, http_client=ctx.http)

    bind_host = host or ctx.get_setting('server', 'host', '127.0.0.1')
    bind_port = int(port or ctx.get_setting('server', 'port', 3000))
    logger.info(f"Server running at http://{bind_host}:{bind_port}")
    try:
        app.run(host=bind_host, port=bind_port)
    finally:
        ctx.http.close()
