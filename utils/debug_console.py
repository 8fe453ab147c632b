"""Debug console that mirrors Rich console output into the debug log.

In debug mode every message shown to the user during login, conversion and
logout is also written, as plain text, to the debug log file next to the
session module logs.
"""

import io
import logging
import re
from typing import Optional
from rich.console import Console as RichConsole


ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')


class DebugCapturingConsole(RichConsole):
    """Rich Console that also logs a plain-text copy of what it prints"""

    def __init__(self, debug_logger: Optional[logging.Logger] = None, *args, **kwargs):
        """
        Initialize the debug capturing console.

        Args:
            debug_logger: Logger instance to write captured output to
            *args, **kwargs: Arguments passed to Rich Console
        """
        super().__init__(*args, **kwargs)
        self.debug_logger = debug_logger
        self._log_prefix = "[CONSOLE] "

    def print(self, *objects, **kwargs):
        super().print(*objects, **kwargs)

        if self.debug_logger and self.debug_logger.isEnabledFor(logging.DEBUG):
            plain_text = self._render_to_plain_text(*objects, **kwargs)
            if plain_text.strip():
                self.debug_logger.debug(f"{self._log_prefix}{plain_text}")

    def _render_to_plain_text(self, *objects, **kwargs) -> str:
        string_buffer = io.StringIO()
        temp_console = RichConsole(
            file=string_buffer,
            force_terminal=False,
            width=self.width,
            legacy_windows=False
        )
        temp_console.print(*objects, **kwargs)
        return ANSI_ESCAPE.sub('', string_buffer.getvalue()).rstrip()


def create_debug_console(debug_enabled: bool = False,
                        debug_logger: Optional[logging.Logger] = None) -> RichConsole:
    """
    Create appropriate console instance based on debug mode.

    Args:
        debug_enabled: Whether debug mode is enabled
        debug_logger: Logger instance for debug output

    Returns:
        DebugCapturingConsole if debug enabled, regular Console otherwise
    """
    if debug_enabled and debug_logger:
        return DebugCapturingConsole(debug_logger=debug_logger)
    return RichConsole()


def setup_debug_logger(log_file: str = "markdown_docx_debug.log") -> logging.Logger:
    """
    Route debug logging for the client into a log file.

    The session and API module loggers propagate to the root logger, which
    gets a file handler at DEBUG level; the returned "debug_console" logger
    writes to the same file for captured console output.

    Args:
        log_file: Path to debug log file

    Returns:
        Logger for captured console output
    """
    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.addHandler(file_handler)

    logger = logging.getLogger("debug_console")
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.addHandler(file_handler)
    logger.propagate = False

    return logger
