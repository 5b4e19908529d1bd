# eduassist_analytics/jobs.py
"""Rollup runs outside the web server (scheduler, command line)."""
import asyncio
import logging
from typing import Optional

from .core.config import Settings, settings as default_settings
from .core.database import build_engine, build_session_factory
from .core.locks import ClassLockManager
from .schemas.rollup_schemas import RollupRequest
from .services.rollup_service import RollupService, RollupSummary

logger = logging.getLogger(__name__)


async def run_standalone_rollup(
    request: RollupRequest,
    cancel_event: Optional[asyncio.Event] = None,
    config: Settings = default_settings,
) -> RollupSummary:
    """Run one rollup on a private engine, disposed when the run ends.

    The web server's engine belongs to its own event loop, so worker
    processes that call ``asyncio.run`` per job need their own pool.
    """
    engine = build_engine(config)
    locks = ClassLockManager.from_settings(config)
    try:
        service = RollupService(build_session_factory(engine), config, locks)
        return await service.run(request, cancel_event=cancel_event)
    finally:
        await locks.disconnect()
        await engine.dispose()
