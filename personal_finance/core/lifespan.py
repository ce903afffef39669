"""Startup and shutdown of the application's background work."""

import asyncio
import logging

from personal_finance.core.config import settings
from personal_finance.core.logging import get_logger, setup_logging
from personal_finance.security import LoginLimiter, SessionManager

_logger = get_logger("lifespan")


def task_done_callback(task: asyncio.Task[None]) -> None:
    """Log unhandled exceptions from background tasks."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        _logger.error(f"Background task {task.get_name()} failed: {exc}")


async def login_limiter_cleanup_loop(limiter: LoginLimiter, interval_seconds: float) -> None:
    """Periodically drop lapsed login counters to bound memory."""
    while True:
        try:
            await asyncio.sleep(interval_seconds)
            removed = limiter.prune()
            if removed > 0:
                _logger.debug(f"Login limiter cleanup: removed {removed} lapsed counters")
        except asyncio.CancelledError:
            break
        except Exception as e:
            _logger.warning(f"Login limiter cleanup error: {e}")


async def startup(
    logger: logging.Logger,
    session_manager: SessionManager,
    login_limiter: LoginLimiter,
) -> list[asyncio.Task]:
    """Configure logging and start background tasks.

    Returns the managed tasks that must be passed to ``shutdown``.
    """
    setup_logging(level=settings.log_level, format_type=settings.log_format)

    await session_manager.start()

    tasks: list[asyncio.Task] = []
    cleanup_task = asyncio.create_task(
        login_limiter_cleanup_loop(login_limiter, settings.login_limiter_cleanup_seconds),
        name="login-limiter-cleanup",
    )
    cleanup_task.add_done_callback(task_done_callback)
    tasks.append(cleanup_task)

    logger.info("Background tasks started")
    return tasks


async def shutdown(
    logger: logging.Logger,
    session_manager: SessionManager,
    tasks: list[asyncio.Task],
) -> None:
    """Cancel managed tasks and stop the session sweeper."""
    for task in tasks:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    await session_manager.stop()
    logger.info("Background tasks stopped")
