import json
import logging
from time import time
from aiohttp import web

from social.graze.enslookup.app.config import (
    FailureGaugeAppKey,
    MetricsClientAppKey,
    NamingProviderAppKey,
    SettingsAppKey,
)
from social.graze.enslookup.app.metrics import record_lookup
from social.graze.enslookup.model.result import (
    ErrorKind,
    LookupKind,
    LookupRequest,
    ResolutionResult,
)
from social.graze.enslookup.present.markdown import render_markdown
from social.graze.enslookup.resolve.ens import lookup, parse_input

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorKind.invalid_address: 400,
    ErrorKind.name_not_found: 404,
    ErrorKind.no_primary_name: 404,
    ErrorKind.resolution_failed: 502,
}


def bad_request(message: str) -> web.HTTPBadRequest:
    return web.HTTPBadRequest(
        body=json.dumps({"error": message}),
        content_type="application/json",
    )


def lookup_response(request: web.Request, result: ResolutionResult) -> web.Response:
    """
    Render a lookup result as JSON, or as markdown when ?format=markdown is given.

    Taxonomy errors map to 400/404/502 so callers can tell bad input, missing records and
    upstream failures apart without parsing the body.
    """
    status = 200 if result.error is None else ERROR_STATUS[result.error]

    if request.query.get("format", "json") == "markdown":
        return web.Response(
            text=render_markdown(result),
            status=status,
            content_type="text/markdown",
        )
    return web.json_response(result.model_dump(mode="json"), status=status)


async def run_lookup(request: web.Request, lookup_request: LookupRequest) -> web.Response:
    provider = request.app[NamingProviderAppKey]
    metrics_client = request.app[MetricsClientAppKey]
    settings = request.app[SettingsAppKey]

    start_time = time()
    result = await lookup(provider, lookup_request)
    record_lookup(metrics_client, settings.statsd_prefix, result, time() - start_time)

    if result.error == ErrorKind.resolution_failed:
        await request.app[FailureGaugeAppKey].record_failure(result.kind)

    return lookup_response(request, result)


async def handle_lookup_name(request: web.Request):
    name = request.query.get("name", "").strip()
    if len(name) == 0:
        raise bad_request("name is required")
    return await run_lookup(request, LookupRequest(kind=LookupKind.forward, value=name))


async def handle_lookup_address(request: web.Request):
    address = request.query.get("address", "").strip()
    if len(address) == 0:
        raise bad_request("address is required")
    return await run_lookup(
        request, LookupRequest(kind=LookupKind.reverse, value=address)
    )


async def handle_lookup(request: web.Request):
    subject = request.query.get("q", "").strip()
    if len(subject) == 0:
        raise bad_request("q is required")
    return await run_lookup(request, parse_input(subject))
