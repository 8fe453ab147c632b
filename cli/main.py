"""CLI entry point and argument parsing"""

import argparse
import sys

from rich.console import Console

from cli.cli_app import MarkdownConverterCLI


console = Console()


def main():
    """Entry point for the CLI"""
    parser = argparse.ArgumentParser(description="Markdown to DOCX converter client")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument("--logout", action="store_true", help="Clear stored credentials and exit")
    parser.add_argument("--status", action="store_true", help="Show session status and exit")

    args = parser.parse_args()

    try:
        cli = MarkdownConverterCLI(debug=args.debug)

        if args.logout:
            cli.logout()
            sys.exit(0)

        if args.status:
            cli.show_status()
            sys.exit(0)

        cli.run()

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        console.print("Goodbye!")
    except Exception as e:
        console.print(f"\n[red]Fatal error:[/red] {e}")
        if args.debug:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
