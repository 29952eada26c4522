"""
OAuth state cleanup service for removing expired login states.

Provides an async background task that is started and stopped by the
application lifespan.
"""

import asyncio
import logging

from coraserver.services.oauth_state import cleanup_expired_states

logger = logging.getLogger(__name__)

# Default cleanup interval in seconds (5 minutes)
DEFAULT_CLEANUP_INTERVAL_SECONDS = 300


async def run_cleanup_task(
    *,
    interval_seconds: float = DEFAULT_CLEANUP_INTERVAL_SECONDS,
    stop_event: asyncio.Event | None = None,
) -> None:
    """
    Background task that periodically cleans up expired OAuth states.

    This task runs until cancelled or stop_event is set.

    Args:
        interval_seconds: Time between cleanup runs
        stop_event: Optional event to signal task shutdown
    """
    logger.info(
        "OAuth state cleanup task started (interval: %s seconds)",
        interval_seconds,
    )

    while True:
        try:
            if stop_event is not None:
                try:
                    await asyncio.wait_for(
                        stop_event.wait(),
                        timeout=interval_seconds,
                    )
                    logger.info("OAuth state cleanup task stopping (stop event set)")
                    break
                except asyncio.TimeoutError:
                    # Interval elapsed
                    pass
            else:
                await asyncio.sleep(interval_seconds)

            count = cleanup_expired_states()
            if count > 0:
                logger.info("Cleaned up %d expired OAuth states", count)
            else:
                logger.debug("No expired OAuth states to clean up")

        except asyncio.CancelledError:
            logger.info("OAuth state cleanup task cancelled")
            raise
        except Exception:
            logger.exception("Error in OAuth state cleanup task")
            await asyncio.sleep(interval_seconds)

    logger.info("OAuth state cleanup task stopped")
