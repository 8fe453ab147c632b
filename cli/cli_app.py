"""Main CLI application class for the Markdown to DOCX client"""

import asyncio
from pathlib import Path
from typing import List, Optional

from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

import settings
from converter_api import ConversionResult, ConverterAPIClient, ConverterAPIError, GoogleDoc
from google_oauth import (
    AuthError,
    AuthorizationExchange,
    BrowserNavigator,
    CallbackServer,
    CookieCredentialStore,
    SessionGate,
    SessionState,
)
from cli.debug_setup import setup_debug_console
from cli.status_display import get_auth_status, show_session_status


class MarkdownConverterCLI:
    """Interactive shell: login, fetch docs, convert, download, logout"""

    def __init__(self, debug: bool = False):
        self.debug = debug
        self.console = setup_debug_console(debug)

        if debug:
            self.console.print(
                f"[yellow]Debug mode enabled - verbose logging will be written to {settings.DEBUG_LOG_FILE}[/yellow]"
            )

        self.store = CookieCredentialStore()
        self.session = SessionState(self.store)
        self.navigator = BrowserNavigator(self.console)
        self.api = ConverterAPIClient()
        self.gate = SessionGate(
            store=self.store,
            state=self.session,
            api=self.api,
            navigator=self.navigator,
            home_route=settings.HOME_ROUTE,
        )

        self.docs: List[GoogleDoc] = []
        self.conversion_result: Optional[ConversionResult] = None

        self.loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)

    def clear_screen(self):
        """Clear the terminal screen"""
        self.console.clear()

    def display_header(self):
        """Display application header"""
        self.console.print("\n")
        self.console.print(Panel.fit(
            "[bold cyan]Markdown to DOCX[/bold cyan]\n"
            "[dim]Convert Markdown documents in Google Drive to Word files[/dim]",
            border_style="cyan"
        ))

    def display_status(self):
        """Display authentication status and current results"""
        status, detail = get_auth_status(self.session)
        style = {"VALID": "green", "EXPIRED": "yellow"}.get(status, "red")

        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column(style="cyan", width=20)
        table.add_column()
        table.add_row("Google Auth:", f"[{style}]{status}[/{style}] ({detail})")
        if self.docs:
            table.add_row("Documents:", str(len(self.docs)))
        if self.conversion_result:
            table.add_row("Converted:", f"{self.conversion_result.total_files} file(s)")

        self.console.print(table)
        self.console.print()

    def display_menu(self, authenticated: bool) -> List[str]:
        """Display the menu for the current session state

        Returns:
            The option numbers that can be chosen
        """
        self.console.print("[bold]Main Menu:[/bold]")
        self.console.print()

        if not authenticated:
            self.console.print("  [cyan]1[/cyan]. Login with Google")
            self.console.print("  [cyan]2[/cyan]. Show Session Status")
            self.console.print("  [cyan]3[/cyan]. Exit")
            self.console.print()
            return ["1", "2", "3"]

        self.console.print("  [cyan]1[/cyan]. Fetch Docs")
        if self.docs:
            self.console.print("  [cyan]2[/cyan]. Convert Docs")
        else:
            self.console.print("  [dim]2. Convert Docs (fetch docs first)[/dim]")
        if self.conversion_result:
            self.console.print("  [cyan]3[/cyan]. Download Converted Files (ZIP)")
        else:
            self.console.print("  [dim]3. Download Converted Files (convert first)[/dim]")
        self.console.print("  [cyan]4[/cyan]. Show Session Status")
        self.console.print("  [cyan]5[/cyan]. Logout")
        self.console.print("  [cyan]6[/cyan]. Exit")
        self.console.print()
        return ["1", "2", "3", "4", "5", "6"]

    async def login(self) -> bool:
        """Run the Google login: open the browser and wait for the redirect"""
        self.console.print("\n[bold cyan]Google Authentication[/bold cyan]\n")

        server = CallbackServer(exchanger=AuthorizationExchange(), store=self.store)
        self.console.print("Starting OAuth callback server...")
        await server.start()
        try:
            try:
                await self.gate.login()
            except AuthError as e:
                self.console.print(f"[red]✗ {e.message}[/red]")
                return False

            self.console.print("Waiting for authentication...")
            if not await server.wait_for_login(timeout=settings.LOGIN_TIMEOUT):
                reason = server.last_error or "Timed out waiting for the Google redirect"
                self.console.print(f"[red]✗ {reason}[/red]")
                return False
        finally:
            await server.stop()

        self.docs = []
        self.conversion_result = None
        self.console.print("\n[bold green]✓ Authentication successful![/bold green]")
        return True

    async def fetch_docs(self):
        """Fetch the Markdown documents and list them"""
        self.console.print("Fetching...")
        try:
            self.docs = await self.gate.list_documents()
        except (AuthError, ConverterAPIError) as e:
            self.console.print(f"[red]✗ {e.message}[/red]")
            return

        if not self.docs:
            self.console.print("[yellow]No Markdown documents found[/yellow]")
            return

        table = Table(title="Markdown Documents")
        table.add_column("Name")
        table.add_column("ID", style="dim")
        for doc in self.docs:
            table.add_row(doc.name, doc.id)
        self.console.print(table)

    async def convert_docs(self):
        """Convert the documents and show per-file results"""
        self.console.print("Converting...")
        self.conversion_result = None
        try:
            result = await self.gate.convert_documents()
        except (AuthError, ConverterAPIError) as e:
            self.console.print(f"[red]✗ {e.message}[/red]")
            return

        self.conversion_result = result
        table = Table(title=f"Conversion Results ({result.total_files} files)")
        table.add_column("Document")
        table.add_column("Result")
        for item in result.converted_files:
            if item.converted:
                table.add_row(item.original_file_name, f"[green]Converted ({item.converted_file_name})[/green]")
            else:
                table.add_row(item.original_file_name, f"[red]Failed: {item.error}[/red]")
        self.console.print(table)

    async def download_zip(self, target: Optional[Path] = None):
        """Download the archive of converted files to disk"""
        target = Path(target or settings.DOWNLOAD_FILENAME)
        try:
            archive = await self.gate.download_archive(self.conversion_result)
        except (AuthError, ConverterAPIError) as e:
            self.console.print(f"[red]✗ {e.message}[/red]")
            return

        target.write_bytes(archive)
        self.console.print(f"[green]✓ Saved {len(archive)} bytes to {target}[/green]")

    def show_status(self):
        show_session_status(self.session, self.store, self.console)

    def logout(self):
        """Clear the session and start over"""
        self.gate.logout()
        self.docs = []
        self.conversion_result = None
        self.console.print("[green]✓ Logged out[/green]")

    def run(self):
        """Main CLI loop"""
        while True:
            self.clear_screen()
            self.display_header()
            self.display_status()
            authenticated = self.gate.is_authenticated()
            choices = self.display_menu(authenticated)

            choice = Prompt.ask("Select option", choices=choices)

            if not authenticated:
                if choice == "1":
                    self.loop.run_until_complete(self.login())
                elif choice == "2":
                    self.show_status()
                else:
                    self.console.print("\n[cyan]Goodbye![/cyan]\n")
                    break
            elif choice == "1":
                self.loop.run_until_complete(self.fetch_docs())
            elif choice == "2":
                self.loop.run_until_complete(self.convert_docs())
            elif choice == "3":
                self.loop.run_until_complete(self.download_zip())
            elif choice == "4":
                self.show_status()
            elif choice == "5":
                if Confirm.ask("Logout?"):
                    self.logout()
            else:
                self.console.print("\n[cyan]Goodbye![/cyan]\n")
                break

            input("\nPress Enter to continue...")
