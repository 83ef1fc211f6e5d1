import asyncio
from typing import Dict, List, Optional

from social.graze.enslookup.model.result import LookupKind


class FailureGauge:
    """
    Tracks bursts of failed lookups for the readiness probe.

    Every lookup that ends in ResolutionFailed (the node provider is unreachable or returned garbage) records a
    failure against its lookup kind. A background task decays each count over time. When failures of either kind pile
    up faster than they decay, the service reports itself as not ready so traffic can move to a replica with a
    healthier RPC endpoint.

    Forward and reverse lookups hit different contracts, so they are counted apart: a broken reverse registrar does not
    hide behind healthy forward traffic, and the readiness body names the kind that is failing.

    Names that simply don't resolve are not failures and never touch the gauge.
    """

    def __init__(self, threshold: int = 25, failures: Optional[Dict[LookupKind, int]] = None) -> None:
        self._failures = {kind: 0 for kind in LookupKind}
        self._failures.update(failures or {})
        self._threshold = threshold
        self._lock = asyncio.Lock()

    async def record_failure(self, kind: LookupKind, count: int = 1) -> int:
        async with self._lock:
            self._failures[kind] += int(count)
            return self._failures[kind]

    async def decay(self) -> None:
        async with self._lock:
            for kind, value in self._failures.items():
                if value > 0:
                    self._failures[kind] = value - 1

    async def failures(self, kind: Optional[LookupKind] = None) -> int:
        async with self._lock:
            if kind is None:
                return sum(self._failures.values())
            return self._failures[kind]

    async def unhealthy_kinds(self) -> List[LookupKind]:
        async with self._lock:
            return [kind for kind, value in self._failures.items() if value > self._threshold]

    async def is_healthy(self) -> bool:
        return len(await self.unhealthy_kinds()) == 0
