"""Latest-wins lookup session.

A front end that lets users submit a new lookup while an earlier one is still in
flight must only ever show the newest result. LookupSession numbers each
submission and drops results from submissions that have been superseded.
"""

import logging
from typing import Callable, Optional

from social.graze.enslookup.model.result import LookupRequest, ResolutionResult
from social.graze.enslookup.resolve.ens import lookup
from social.graze.enslookup.resolve.provider import NamingProvider

logger = logging.getLogger(__name__)


class LookupSession:
    """
    Runs lookups for a single view and keeps the result of the latest one.

    Attributes:
        result: Result of the most recent submission that completed while it was
            still the latest, or None before any such submission
    """

    def __init__(
        self,
        provider: NamingProvider,
        on_result: Optional[Callable[[ResolutionResult], None]] = None,
    ) -> None:
        self._provider = provider
        self._on_result = on_result
        self._invocation = 0
        self.result: Optional[ResolutionResult] = None

    @property
    def invocation(self) -> int:
        return self._invocation

    async def submit(self, request: LookupRequest) -> Optional[ResolutionResult]:
        """Run a lookup and apply its result unless a newer lookup was submitted meanwhile.

        Returns:
            The applied result, or None if the result was stale and discarded
        """
        self._invocation += 1
        invocation = self._invocation

        result = await lookup(self._provider, request)

        if invocation != self._invocation:
            logger.debug(
                "Discarding stale result for %r (invocation %d, latest %d)",
                request.value,
                invocation,
                self._invocation,
            )
            return None

        self.result = result
        if self._on_result is not None:
            self._on_result(result)
        return result
