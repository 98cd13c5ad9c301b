from typing import Any, Awaitable

import structlog

from shared.observability.metrics import ecomm_side_effect_failures_total

logger = structlog.get_logger(__name__)


async def run_side_effect(name: str, awaitable: Awaitable[Any], session=None, **context) -> Any:
    """
    Await a non-critical side effect. A failure is logged and counted but
    never propagated, so the primary operation still succeeds. When a
    database session is passed it is rolled back after a failure so the
    caller can keep using it.
    Returns the awaited result, or None when it failed.
    """
    try:
        return await awaitable
    except Exception as exc:
        logger.warning("side_effect_failed", effect=name, error=str(exc), **context)
        ecomm_side_effect_failures_total.labels(effect=name).inc()
        if session is not None:
            await session.rollback()
        return None
