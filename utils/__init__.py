"""Shared utilities package for the Markdown to DOCX client"""

from .http import server_message
from .debug_console import (
    DebugCapturingConsole,
    create_debug_console,
    setup_debug_logger,
)

__all__ = [
    "server_message",
    "DebugCapturingConsole",
    "create_debug_console",
    "setup_debug_logger",
]
