# src/todolist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console view on an
asyncio loop. The view is always unmounted and the HTTP client closed on the
way out, so no late response can touch a view that is gone.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        state.controller.unmount()
    except Exception:
        logger.exception("Failed to unmount the view.")

    try:
        close = getattr(state.api, "aclose", None)
        if close is not None:
            await close()
    except Exception:
        logger.debug("HTTP client close failed.", exc_info=True)


async def _run(state) -> None:
    loop = asyncio.get_running_loop()
    main_task = asyncio.current_task()
    assert main_task is not None

    # asyncio.run already turns SIGINT into cancellation; SIGTERM gets the same path.
    try:
        loop.add_signal_handler(signal.SIGTERM, main_task.cancel)
    except (NotImplementedError, RuntimeError):
        # Some platforms may not support SIGTERM, etc.
        pass

    try:
        await run_console_loop(state)
    finally:
        with contextlib.suppress(Exception):
            loop.remove_signal_handler(signal.SIGTERM)
        await _shutdown(state)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (api=%s)...", settings.app_name, settings.api_base_url)

    state = create_initial_state(settings=settings)

    try:
        asyncio.run(_run(state))
    except (KeyboardInterrupt, asyncio.CancelledError):
        logger.info("Interrupted, shutting down...")
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
