"""
Metrics Abstraction Layer for the ENS Lookup Service

This module provides a small vendor-agnostic metrics interface so that lookup and request
metrics can be sent to Telegraf/StatsD in production and dropped entirely in development
and tests.

Key Components:
- MetricsClient: Abstract interface for all metrics operations
- TelegrafMetricsClient: Wrapper around aio-statsd's TelegrafStatsdClient
- NoOpMetricsClient: No-operation client for disabled metrics
- create_metrics_client: Factory function for backend selection
- record_lookup: Emits the standard metrics for one completed lookup
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, Union

from aio_statsd import TelegrafStatsdClient

from social.graze.enslookup.model.result import ResolutionResult

logger = logging.getLogger(__name__)


class MetricsClient(ABC):
    """
    Abstract metrics client interface.

    Tags are passed as a StatsD-style dictionary and forwarded to the backend unchanged.
    """

    @abstractmethod
    def increment(
        self,
        name: str,
        value: Union[int, float] = 1,
        tag_dict: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Increment a counter metric by the specified value.

        Args:
            name: Metric name (e.g., 'enslookup.lookup.count')
            value: Amount to increment by (default: 1)
            tag_dict: Optional tags for metric dimensions
        """
        pass

    @abstractmethod
    def timer(
        self,
        name: str,
        value: Union[int, float],
        tag_dict: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Record a timing measurement in seconds.

        Args:
            name: Metric name (e.g., 'enslookup.lookup.time')
            value: Duration in seconds
            tag_dict: Optional tags for metric dimensions
        """
        pass

    async def connect(self) -> None:
        """Open any network resources the backend needs."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Flush pending metrics and close network resources."""
        pass


class TelegrafMetricsClient(MetricsClient):
    """
    Metrics client delegating to aio-statsd's TelegrafStatsdClient.
    """

    def __init__(self, telegraf_client: TelegrafStatsdClient):
        self.client = telegraf_client

    def increment(
        self,
        name: str,
        value: Union[int, float] = 1,
        tag_dict: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.client.increment(name, value, tag_dict=tag_dict or {})

    def timer(
        self,
        name: str,
        value: Union[int, float],
        tag_dict: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.client.timer(name, value, tag_dict=tag_dict or {})

    async def connect(self) -> None:
        await self.client.connect()

    async def close(self) -> None:
        try:
            await self.client.close()
        except Exception as e:
            logger.warning(f"Error closing Telegraf client: {e}")


class NoOpMetricsClient(MetricsClient):
    """
    Metrics client that discards everything.
    """

    def increment(
        self,
        name: str,
        value: Union[int, float] = 1,
        tag_dict: Optional[Dict[str, Any]] = None,
    ) -> None:
        pass

    def timer(
        self,
        name: str,
        value: Union[int, float],
        tag_dict: Optional[Dict[str, Any]] = None,
    ) -> None:
        pass

    async def close(self) -> None:
        pass


def create_metrics_client(
    backend: str,
    host: str = "localhost",
    port: int = 8125,
    debug: bool = False,
) -> MetricsClient:
    """
    Create the metrics client for a backend name.

    Args:
        backend: Backend type ('telegraf' or 'none')
        host: Telegraf/StatsD host
        port: Telegraf/StatsD port
        debug: Enable aio-statsd debug logging

    Returns:
        MetricsClient: Configured, not yet connected metrics client

    Raises:
        ValueError: If backend type is invalid
    """
    backend = backend.lower()

    if backend == "telegraf":
        return TelegrafMetricsClient(
            TelegrafStatsdClient(host=host, port=port, debug=debug)
        )

    if backend == "none":
        logger.info("Metrics collection disabled (no-op client)")
        return NoOpMetricsClient()

    raise ValueError(
        f"Invalid metrics backend: {backend}. Supported backends: 'telegraf', 'none'"
    )


def record_lookup(
    metrics_client: MetricsClient,
    prefix: str,
    result: ResolutionResult,
    elapsed: float,
) -> None:
    """
    Emit the count and timing metrics for one completed lookup.

    Lookups are tagged with their direction and outcome, where the outcome is the error kind
    or "ok".
    """
    tags = {
        "kind": result.kind.value,
        "outcome": result.error.value if result.error is not None else "ok",
    }
    metrics_client.increment(f"{prefix}.lookup.count", 1, tag_dict=tags)
    metrics_client.timer(f"{prefix}.lookup.time", elapsed, tag_dict=tags)
    if result.error is None and not result.has_any_record:
        metrics_client.increment(
            f"{prefix}.lookup.empty_profile", 1, tag_dict={"kind": result.kind.value}
        )
