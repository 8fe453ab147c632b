"""CLI package for the Markdown to DOCX converter client

This package provides the interactive command-line shell: Google login,
document listing, conversion, ZIP download and logout.
"""

from cli.cli_app import MarkdownConverterCLI
from cli.main import main

__all__ = [
    "MarkdownConverterCLI",
    "main",
]
