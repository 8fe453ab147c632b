"""Landing-page logic for the OAuth redirect

One ``CallbackController`` is created per arrival on the callback route. It
walks ``EXTRACTING -> EXCHANGING -> PERSISTING -> REDIRECTING`` or ends in
``FAILED``, and it never outlives its view: once ``unmount()`` is called, a
late exchange result is dropped without writing credentials or navigating.
"""

import enum
import logging
from typing import Optional
from urllib.parse import parse_qs, urlparse

from .constants import GENERIC_AUTH_FAILURE, NO_CODE_MESSAGE
from .credential_store import CredentialStore
from .errors import AuthError
from .models import CookieOptions, View
from .navigation import Navigator
from .token_exchange import AuthorizationExchange


logger = logging.getLogger(__name__)


class CallbackState(enum.Enum):
    EXTRACTING = "extracting"
    EXCHANGING = "exchanging"
    PERSISTING = "persisting"
    REDIRECTING = "redirecting"
    FAILED = "failed"


TERMINAL_STATES = frozenset({CallbackState.REDIRECTING, CallbackState.FAILED})


def extract_code(url: str) -> Optional[str]:
    """Get the ``code`` query parameter from a redirect URL"""
    values = parse_qs(urlparse(url).query).get("code")
    if not values or not values[0]:
        return None
    return values[0]


class CallbackController:
    """Exchange, persist and navigate for a single redirect arrival"""

    def __init__(
        self,
        url: str,
        exchanger: AuthorizationExchange,
        store: CredentialStore,
        navigator: Navigator,
        cookie_options: Optional[CookieOptions] = None,
        home_route: str = "/",
    ):
        """Mount the controller for one redirect

        Args:
            url: Full URL the provider redirected to
            exchanger: Performs the code-for-token exchange
            store: Receives the credentials on success
            navigator: Receives the redirect to ``home_route``
            cookie_options: Entry attributes (default: derived from settings)
            home_route: Route to land on after a successful login
        """
        if cookie_options is None:
            import settings
            cookie_options = CookieOptions.for_environment(
                settings.APP_ENV,
                same_site=settings.COOKIE_SAME_SITE,
                expires_days=settings.COOKIE_EXPIRES_DAYS,
            )

        self.url = url
        self.exchanger = exchanger
        self.store = store
        self.navigator = navigator
        self.cookie_options = cookie_options
        self.home_route = home_route

        self.state = CallbackState.EXTRACTING
        self.error: Optional[str] = None
        self.mounted = True
        self._started = False

    @property
    def done(self) -> bool:
        return self.state in TERMINAL_STATES

    def unmount(self) -> None:
        """Tear the view down; any pending completion becomes invisible"""
        if self.mounted and not self.done:
            logger.debug(f"Callback view torn down while {self.state.value}")
        self.mounted = False

    def _transition(self, state: CallbackState) -> bool:
        if not self.mounted:
            logger.debug(f"Suppressed transition to {state.value} after teardown")
            return False
        logger.debug(f"Callback {self.state.value} -> {state.value}")
        self.state = state
        return True

    def _fail(self, message: str) -> None:
        if self._transition(CallbackState.FAILED):
            self.error = message

    async def run(self) -> CallbackState:
        """Drive the state machine to a terminal state

        Runs at most once per mount; later calls return the current state.
        Failures are turned into the error view, nothing is raised.

        Returns:
            The state the controller ended in
        """
        if self._started:
            return self.state
        self._started = True

        code = extract_code(self.url)
        if not code:
            logger.warning("Callback reached without an authorization code")
            self._fail(NO_CODE_MESSAGE)
            return self.state

        if not self._transition(CallbackState.EXCHANGING):
            return self.state

        try:
            bundle = await self.exchanger.exchange(code)
        except AuthError as e:
            if self.mounted:
                logger.error(f"Authentication error: {e.message}")
            self._fail(e.message)
            return self.state
        except Exception as e:
            logger.exception(f"Unexpected error during code exchange: {e}")
            self._fail(GENERIC_AUTH_FAILURE)
            return self.state

        if not self._transition(CallbackState.PERSISTING):
            logger.info("Discarding exchange result for a torn-down callback view")
            return self.state

        try:
            self.store.write(bundle, self.cookie_options)
            self._transition(CallbackState.REDIRECTING)
            self.navigator.push(self.home_route)
            self.navigator.refresh()
        except Exception as e:
            logger.exception(f"Failed to complete login after code exchange: {e}")
            self._fail(GENERIC_AUTH_FAILURE)
            return self.state

        logger.info("Login complete, redirecting home")
        return self.state

    def render(self) -> View:
        """The view for the current state: processing or error"""
        if self.state is CallbackState.FAILED:
            return View(
                kind="error",
                title="Authentication Error",
                message=self.error or GENERIC_AUTH_FAILURE,
                actions={"Return to Home": self.home_route},
            )
        return View(
            kind="processing",
            title="Processing Authentication",
            message="Please wait while we complete the login process...",
        )
