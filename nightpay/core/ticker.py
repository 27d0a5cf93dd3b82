# nightpay/core/ticker.py
"""
Background refresh loop driving auto-finalization while no page is open.
"""

import asyncio
import logging

from nightpay.core.engine import EarningsEngine
from nightpay.core.sentry_config import capture_exception

logger = logging.getLogger(__name__)


async def run_ticker(engine: EarningsEngine, interval_seconds: float) -> None:
    """
    Call engine.tick() every interval_seconds until cancelled.

    A failing tick is logged and reported; the loop keeps running.
    """
    logger.info("Ticker started with interval %.1fs", interval_seconds)
    try:
        while True:
            try:
                engine.tick()
            except Exception as e:
                logger.exception("Tick failed")
                capture_exception(e, context={"ticker": {"interval_seconds": interval_seconds}})
            await asyncio.sleep(interval_seconds)
    except asyncio.CancelledError:
        logger.info("Ticker stopped")
        raise
