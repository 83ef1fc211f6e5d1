import asyncio
import logging
from typing import NoReturn
from aiohttp import web

from social.graze.enslookup.app.config import FailureGaugeAppKey

logger = logging.getLogger(__name__)

DECAY_INTERVAL = 30


async def decay_failures_task(app: web.Application) -> NoReturn:
    """
    Decay the failure gauge every 30 seconds, forgiving one failed lookup each time.
    """

    logger.info("Starting failure gauge task")

    failure_gauge = app[FailureGaugeAppKey]
    while True:
        await asyncio.sleep(DECAY_INTERVAL)
        await failure_gauge.decay()
