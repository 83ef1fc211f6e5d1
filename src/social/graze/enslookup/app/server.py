import asyncio
import contextlib
import logging
from time import time
from typing import Optional
from aiohttp import web
import aiohttp
import sentry_sdk
from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from social.graze.enslookup.app.config import (
    DecayFailuresTaskAppKey,
    FailureGaugeAppKey,
    MetricsClientAppKey,
    NamingProviderAppKey,
    SessionAppKey,
    Settings,
    SettingsAppKey,
)
from social.graze.enslookup.app.handlers.internal import (
    handle_internal_alive,
    handle_internal_ready,
)
from social.graze.enslookup.app.handlers.lookup import (
    handle_lookup,
    handle_lookup_address,
    handle_lookup_name,
)
from social.graze.enslookup.app.metrics import MetricsClient, create_metrics_client
from social.graze.enslookup.app.tasks import decay_failures_task
from social.graze.enslookup.model.health import FailureGauge
from social.graze.enslookup.resolve.provider import NamingProvider, Web3NamingProvider

logger = logging.getLogger(__name__)


async def background_tasks(app):
    logger.info("Starting up")
    settings: Settings = app[SettingsAppKey]

    trace_config = aiohttp.TraceConfig()

    if settings.debug:

        async def on_request_start(
            session, trace_config_ctx, params: aiohttp.TraceRequestStartParams
        ):
            logging.info("Starting request: %s", params)

        async def on_request_end(session, trace_config_ctx, params):
            logging.info("Ending request: %s", params)

        trace_config.on_request_start.append(on_request_start)
        trace_config.on_request_end.append(on_request_end)

    app[SessionAppKey] = aiohttp.ClientSession(trace_configs=[trace_config])

    if NamingProviderAppKey not in app:
        app[NamingProviderAppKey] = await Web3NamingProvider.connect(
            settings.rpc_url,
            session=app[SessionAppKey],
            timeout=settings.rpc_timeout,
        )

    await app[MetricsClientAppKey].connect()

    logger.info("Startup complete")

    app[DecayFailuresTaskAppKey] = asyncio.create_task(decay_failures_task(app))

    yield

    logger.info("Shutting down background tasks")

    app[DecayFailuresTaskAppKey].cancel()

    with contextlib.suppress(asyncio.exceptions.CancelledError):
        await app[DecayFailuresTaskAppKey]

    await app[SessionAppKey].close()
    await app[MetricsClientAppKey].close()


@web.middleware
async def sentry_middleware(request: web.Request, handler):
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except Exception as e:
        sentry_sdk.capture_exception(e)
        raise e


@web.middleware
async def metrics_middleware(request: web.Request, handler):
    metrics_client = request.app[MetricsClientAppKey]
    prefix = request.app[SettingsAppKey].statsd_prefix
    request_method: str = request.method
    request_path = request.path

    start_time: float = time()
    response_status_code = 0

    try:
        response = await handler(request)
        response_status_code = response.status
        return response
    except web.HTTPException as e:
        response_status_code = e.status
        raise e
    except Exception as e:
        metrics_client.increment(
            f"{prefix}.server.request.exception",
            1,
            tag_dict={
                "exception": type(e).__name__,
                "path": request_path,
                "method": request_method,
            },
        )
        raise e
    finally:
        metrics_client.timer(
            f"{prefix}.server.request.time",
            time() - start_time,
            tag_dict={"path": request_path, "method": request_method},
        )
        metrics_client.increment(
            f"{prefix}.server.request.count",
            1,
            tag_dict={
                "path": request_path,
                "method": request_method,
                "status": response_status_code,
            },
        )


async def start_web_server(
    settings: Optional[Settings] = None,
    provider: Optional[NamingProvider] = None,
    metrics_client: Optional[MetricsClient] = None,
):
    """
    Build the web application.

    The naming provider and metrics client are created from settings unless given, which
    lets tests run the application against a fake provider.
    """

    if settings is None:
        settings = Settings()  # type: ignore
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            send_default_pii=False,
            integrations=[AioHttpIntegration()],
        )
    if metrics_client is None:
        metrics_client = create_metrics_client(
            settings.metrics_backend,
            host=settings.statsd_host,
            port=settings.statsd_port,
            debug=settings.debug,
        )

    app = web.Application(middlewares=[metrics_middleware, sentry_middleware])

    app[SettingsAppKey] = settings
    app[FailureGaugeAppKey] = FailureGauge(threshold=settings.failure_threshold)
    app[MetricsClientAppKey] = metrics_client
    if provider is not None:
        app[NamingProviderAppKey] = provider

    app.add_routes(
        [
            web.get("/api/lookup", handle_lookup),
            web.get("/api/lookup/name", handle_lookup_name),
            web.get("/api/lookup/address", handle_lookup_address),
        ]
    )

    app.add_routes(
        [
            web.get("/internal/alive", handle_internal_alive),
            web.get("/internal/ready", handle_internal_ready),
        ]
    )

    app.cleanup_ctx.append(background_tasks)

    return app
