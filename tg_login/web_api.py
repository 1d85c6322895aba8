"""HTTP receiver for the Telegram Login Widget.

The widget redirects the browser to the receiver URL with the user's
fields in the query string. Uses aiohttp.
"""

import logging
import time

from aiohttp import web

from .config import Config
from .receiver import receive
from .userinfo import to_dict


logger = logging.getLogger(__name__)

RECEIVER_PATH = "/api/telegram/receiver"


async def handle_receiver(request: web.Request) -> web.Response:
    """GET /api/telegram/receiver — verify widget data, return the user record.

    All failures look the same to the caller.
    """
    config: Config = request.app["config"]
    user_info, _ = receive(request.query, config)
    if user_info is None:
        return web.json_response({"error": "verification failed"}, status=401)
    return web.json_response(to_dict(user_info))


async def handle_health(request: web.Request) -> web.Response:
    """GET /api/health — simple health check, no auth required."""
    return web.json_response({"status": "ok", "time": int(time.time())})


@web.middleware
async def logging_middleware(request: web.Request, handler) -> web.Response:
    """Log all incoming requests, without the query string."""
    start = time.time()
    try:
        response = await handler(request)
        elapsed = (time.time() - start) * 1000
        logger.info("%s %s → %d (%.0fms)", request.method, request.path, response.status, elapsed)
        return response
    except Exception as e:
        elapsed = (time.time() - start) * 1000
        logger.error("%s %s → ERROR: %s (%.0fms)", request.method, request.path, e, elapsed)
        raise


def create_web_app(config: Config) -> web.Application:
    """Create and configure the aiohttp web application."""
    app = web.Application(middlewares=[logging_middleware])
    app["config"] = config

    app.router.add_get("/api/health", handle_health)
    app.router.add_get(RECEIVER_PATH, handle_receiver)

    return app
