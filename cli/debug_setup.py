"""Debug console setup for CLI"""

import logging

from rich.console import Console

import settings
from utils.debug_console import create_debug_console, setup_debug_logger


def setup_debug_console(debug: bool) -> Console:
    """
    Setup console and logging based on debug mode

    Args:
        debug: Whether debug mode is enabled

    Returns:
        Console instance (either regular or debug-enabled)
    """
    if not debug:
        logging.basicConfig(level=getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO))
        return Console()

    debug_logger = setup_debug_logger(settings.DEBUG_LOG_FILE)
    console = create_debug_console(debug_enabled=True, debug_logger=debug_logger)
    debug_logger.debug("[CLI] ===== CLI SESSION STARTED =====")
    debug_logger.debug(f"[CLI] API base: {settings.API_BASE_URL}")
    return console
