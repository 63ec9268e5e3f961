import asyncio
import logging
from artune.modules.onboarding import registry

logger = logging.getLogger(__name__)

PRUNE_INTERVAL_SECONDS = 300


async def onboarding_prune_loop():
    """Background task that periodically drops abandoned onboarding wizards"""
    while True:
        try:
            registry.prune()
        except Exception as e:
            logger.error(f"Error pruning onboarding wizards: {str(e)}")

        # Check every 5 minutes
        await asyncio.sleep(PRUNE_INTERVAL_SECONDS)
