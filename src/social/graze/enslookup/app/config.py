"""
Configuration Module for the ENS Lookup Service

This module defines the configuration system for the ENS lookup service, using Pydantic for
settings validation and dependency injection through AppKeys.

The Settings class is loaded from environment variables with defaults suitable for local
development. Application components access settings and shared resources (HTTP session,
naming provider, metrics client, failure gauge) through typed AppKeys.

Key configuration areas include:
- Service networking
- The Ethereum JSON-RPC endpoint used for ENS resolution
- Error reporting and metrics
"""

import asyncio
from typing import Final, Optional
import logging
from aiohttp import ClientSession, web
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

from social.graze.enslookup.app.metrics import MetricsClient
from social.graze.enslookup.model.health import FailureGauge
from social.graze.enslookup.resolve.provider import NamingProvider


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings for the ENS lookup service.

    Values are read from environment variables, e.g. RPC_URL=https://... . The RPC endpoint
    can also be set with ETH_RPC_URL.
    """

    debug: bool = False
    """
    Enable debug mode for verbose logging and request tracing.
    Set with DEBUG=true environment variable.
    """

    http_port: int = Field(alias="port", default=5110)
    """
    HTTP port for the service to listen on.
    Set with PORT environment variable.
    """

    rpc_url: str = Field(
        "https://eth.llamarpc.com",
        validation_alias=AliasChoices("rpc_url", "eth_rpc_url"),
    )
    """
    Ethereum mainnet JSON-RPC endpoint used for all ENS lookups.
    Set with RPC_URL or ETH_RPC_URL environment variables.
    """

    rpc_timeout: float = 10.0
    """
    Total timeout in seconds for a single RPC request.
    Set with RPC_TIMEOUT environment variable.
    """

    sentry_dsn: Optional[str] = None
    """
    Sentry DSN for error reporting. Optional, no error reporting if not set.
    Set with SENTRY_DSN environment variable.
    """

    failure_threshold: int = 25
    """
    Number of outstanding failed lookups after which the readiness probe fails.
    Set with FAILURE_THRESHOLD environment variable.
    """

    metrics_backend: str = "none"
    """
    Metrics backend, either "telegraf" or "none".
    Set with METRICS_BACKEND environment variable.
    """

    statsd_host: str = Field(alias="TELEGRAF_HOST", default="telegraf")
    """
    StatsD/Telegraf host for metrics collection.
    Set with TELEGRAF_HOST environment variable.
    """

    statsd_port: int = Field(alias="TELEGRAF_PORT", default=8125)
    """
    StatsD/Telegraf port for metrics collection.
    Set with TELEGRAF_PORT environment variable.
    """

    statsd_prefix: str = "enslookup"
    """
    Prefix for all StatsD metrics from this service.
    Set with STATSD_PREFIX environment variable.
    """

    @field_validator("metrics_backend", mode="before")
    @classmethod
    def normalize_metrics_backend(cls, v) -> str:
        """
        Accept the metrics backend name in any case.

        Raises:
            ValueError: If the backend is not "telegraf" or "none"
        """
        backend = str(v).strip().lower()
        if backend not in ("telegraf", "none"):
            raise ValueError("metrics_backend must be 'telegraf' or 'none'")
        return backend

    @field_validator("rpc_url")
    @classmethod
    def check_rpc_url(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            raise ValueError("rpc_url must be an http(s) URL")
        return v


# Application context keys for dependency injection
SettingsAppKey: Final = web.AppKey("settings", Settings)
"""AppKey for accessing the application settings"""

SessionAppKey: Final = web.AppKey("http_session", ClientSession)
"""AppKey for accessing the shared aiohttp client session"""

NamingProviderAppKey: Final = web.AppKey("naming_provider", NamingProvider)
"""AppKey for accessing the ENS naming provider"""

FailureGaugeAppKey: Final = web.AppKey("failure_gauge", FailureGauge)
"""AppKey for accessing the failed lookup gauge"""

MetricsClientAppKey: Final = web.AppKey("metrics_client", MetricsClient)
"""AppKey for accessing the metrics client"""

DecayFailuresTaskAppKey: Final = web.AppKey("decay_failures_task", asyncio.Task[None])
"""AppKey for the background task that decays the failure gauge"""
