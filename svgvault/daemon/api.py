"""HTTP API for the svgvault daemon."""

import asyncio
import json
from functools import partial
from aiohttp import web
from loguru import logger


def create_api_app(daemon) -> web.Application:
    """Create the aiohttp application with routes."""

    @web.middleware
    async def cors_middleware(request, handler):
        response = await handler(request)
        response.headers['Access-Control-Allow-Origin'] = '*'
        response.headers['Access-Control-Allow-Methods'] = 'GET, POST, OPTIONS'
        response.headers['Access-Control-Allow-Headers'] = 'Content-Type'
        return response

    app = web.Application(middlewares=[cors_middleware])
    app['daemon'] = daemon

    app.router.add_post('/vault/index', handle_index)
    app.router.add_post('/vault/search', handle_search)
    app.router.add_get('/status', handle_status)
    app.router.add_get('/health', handle_health)

    return app


async def _read_body(request: web.Request):
    try:
        data = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


def _bad_request(message: str) -> web.Response:
    return web.json_response({'success': False, 'error': message}, status=400)


async def _run_blocking(func, *args):
    """Run filesystem-bound work off the event loop."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(func, *args))


async def handle_index(request: web.Request) -> web.Response:
    """Rebuild the index of a vault root."""
    daemon = request.app['daemon']

    data = await _read_body(request)
    if data is None:
        return _bad_request('request body must be a JSON object')

    root_dir = data.get('rootDir')
    logger.info(f"Index request for {root_dir}")
    result = await _run_blocking(daemon.service.index, root_dir)
    return web.json_response(result)


async def handle_search(request: web.Request) -> web.Response:
    """Query the stored index of a vault root."""
    daemon = request.app['daemon']

    data = await _read_body(request)
    if data is None:
        return _bad_request('request body must be a JSON object')

    result = await _run_blocking(
        daemon.service.search,
        data.get('rootDir'),
        data.get('query', ''),
        data.get('filters'),
    )
    return web.json_response(result)


async def handle_status(request: web.Request) -> web.Response:
    """Daemon status and statistics."""
    return web.json_response(request.app['daemon'].get_status())


async def handle_health(request: web.Request) -> web.Response:
    return web.json_response({'status': 'ok'})
