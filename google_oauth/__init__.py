"""Google OAuth session lifecycle for the Markdown to DOCX client

Receives the authorization code from the redirect, exchanges it through the
converter backend, persists the resulting credentials and gates the
protected API calls on session validity.
"""

from .models import CredentialBundle, CookieOptions, View
from .errors import (
    AuthError,
    InputError,
    CodeReplayError,
    NetworkError,
    ExchangeTimeoutError,
    ProtocolError,
    LoginError,
    NotAuthenticatedError,
    StorageUnavailable,
)
from .credential_store import CredentialStore, CookieCredentialStore
from .session_state import SessionState
from .token_exchange import AuthorizationExchange
from .navigation import Navigator, RecordingNavigator, BrowserNavigator
from .callback import CallbackController, CallbackState, extract_code
from .callback_server import CallbackServer
from .gate import SessionGate

__all__ = [
    "CredentialBundle",
    "CookieOptions",
    "View",
    "AuthError",
    "InputError",
    "CodeReplayError",
    "NetworkError",
    "ExchangeTimeoutError",
    "ProtocolError",
    "LoginError",
    "NotAuthenticatedError",
    "StorageUnavailable",
    "CredentialStore",
    "CookieCredentialStore",
    "SessionState",
    "AuthorizationExchange",
    "Navigator",
    "RecordingNavigator",
    "BrowserNavigator",
    "CallbackController",
    "CallbackState",
    "extract_code",
    "CallbackServer",
    "SessionGate",
]
