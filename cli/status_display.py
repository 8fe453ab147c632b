"""Status display functionality for CLI"""

from rich.table import Table

from google_oauth import CookieCredentialStore, SessionState


def show_session_status(session: SessionState, store: CookieCredentialStore, console):
    """
    Display detailed session status

    Args:
        session: SessionState instance
        store: Credential store, for the jar location
        console: Rich console for output
    """
    status = session.get_status()

    table = Table(title="Session Status Details")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Has Tokens", "Yes" if status["has_tokens"] else "No")
    table.add_row("Is Expired", "Yes" if status["is_expired"] else "No")

    if status["expires_at"]:
        table.add_row("Expires At", status["expires_at"])
        table.add_row("Time Until Expiry", status["time_until_expiry"])
        table.add_row("Refresh Token", "Stored" if status["has_refresh_token"] else "None")

    if status["user"]:
        table.add_row("User", status["user"])

    table.add_row("Credential File", str(store.cookie_file))

    console.print(table)


def get_auth_status(session: SessionState) -> tuple[str, str]:
    """
    Get authentication status and expiry info

    Args:
        session: SessionState instance

    Returns:
        Tuple of (status, detail_message)
    """
    status = session.get_status()

    if not status["has_tokens"]:
        return "NO AUTH", "Not signed in"

    if status["is_expired"]:
        return "EXPIRED", f"Expired {status['time_until_expiry']}"

    detail = f"Expires in {status['time_until_expiry']}"
    if status["user"]:
        detail = f"{status['user']}, {detail.lower()}"
    return "VALID", detail
