from aiohttp import web
from social.graze.enslookup.app.config import FailureGaugeAppKey


async def handle_internal_ready(request: web.Request):
    failure_gauge = request.app[FailureGaugeAppKey]
    unhealthy = await failure_gauge.unhealthy_kinds()
    if len(unhealthy) == 0:
        return web.Response(status=200)
    return web.json_response({"failing": [kind.value for kind in unhealthy]}, status=503)


async def handle_internal_alive(request: web.Request):
    return web.Response(status=200)
