"""
JSON status service over the read side of ConditionalTokenClient.

Presentation layers query condition state here instead of touching logs
or identifiers themselves.
"""

import asyncio
import logging

from aiohttp import web

from ctf_client import config
from ctf_client.client import ConditionalTokenClient
from ctf_client.errors import (
    ConditionNotFoundError,
    MalformedLogError,
    NetworkUnavailableError,
    UnsupportedNetworkError,
)
from ctf_client.models import ConditionState

logger = logging.getLogger(__name__)

CLIENT_KEY = web.AppKey('client', ConditionalTokenClient)


@web.middleware
async def error_middleware(request: web.Request, handler):
    """Map client errors onto HTTP status codes."""
    try:
        return await handler(request)
    except ConditionNotFoundError as e:
        return web.json_response({'error': str(e)}, status=404)
    except ValueError as e:
        return web.json_response({'error': str(e)}, status=400)
    except MalformedLogError as e:
        logger.error(f"Malformed log for {request.path}: {e}")
        return web.json_response({'error': str(e)}, status=502)
    except (NetworkUnavailableError, UnsupportedNetworkError) as e:
        logger.error(f"Chain unavailable for {request.path}: {e}")
        return web.json_response({'error': str(e)}, status=503)


async def handle_api_status(request: web.Request) -> web.Response:
    """API endpoint for status."""
    client = request.app[CLIENT_KEY]
    return web.json_response({
        'network_id': await client.network_id(),
        'contract_address': client.address,
        'signer_address': client.signer_address,
    })


async def handle_condition(request: web.Request) -> web.Response:
    client = request.app[CLIENT_KEY]
    condition_id = request.match_info['condition_id']

    # One log scan per request; state is derived from the same lookup
    resolved = await client.is_condition_resolved(condition_id)
    try:
        condition_log = (await client.get_condition_id_from_logs(condition_id)).to_dict()
    except ConditionNotFoundError:
        condition_log = None

    if resolved:
        state = ConditionState.RESOLVED
    elif condition_log is not None:
        state = ConditionState.PREPARED
    else:
        state = ConditionState.UNPREPARED

    return web.json_response({
        'condition_id': condition_id,
        'state': state.value,
        'log': condition_log,
    })


async def handle_question_id(request: web.Request) -> web.Response:
    client = request.app[CLIENT_KEY]
    condition_id = request.match_info['condition_id']
    question_id = await client.get_question_id(condition_id)
    return web.json_response({'condition_id': condition_id, 'question_id': question_id})


def create_app(client: ConditionalTokenClient) -> web.Application:
    app = web.Application(middlewares=[error_middleware])
    app[CLIENT_KEY] = client
    app.router.add_get('/api/status', handle_api_status)
    app.router.add_get('/api/conditions/{condition_id}', handle_condition)
    app.router.add_get('/api/conditions/{condition_id}/question', handle_question_id)
    return app


async def serve(client: ConditionalTokenClient, port: int = config.WEB_PORT) -> None:
    app = create_app(client)
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, '0.0.0.0', port)
    await site.start()
    logger.info(f"Conditional tokens status service live at http://localhost:{port} (contract {client.address})")

    try:
        # Keep running
        while True:
            await asyncio.sleep(3600)
    finally:
        await runner.cleanup()
