"""
Local landing page for the Google OAuth redirect
"""
import asyncio
import html
import logging
from typing import Optional

from aiohttp import web

from .callback import TERMINAL_STATES, CallbackController, CallbackState
from .credential_store import CredentialStore
from .models import CookieOptions, View
from .navigation import RecordingNavigator
from .session_state import SessionState
from .token_exchange import AuthorizationExchange


logger = logging.getLogger(__name__)


def render_page(view: View, status: int = 200) -> web.Response:
    """Render a landing-page view as a small HTML document"""
    actions = "".join(
        f'<p><a href="{html.escape(route)}">{html.escape(label)}</a></p>'
        for label, route in view.actions.items()
    )
    return web.Response(
        text=f"""
        <html>
            <body>
                <h2>{html.escape(view.title)}</h2>
                <p>{html.escape(view.message)}</p>
                {actions}
            </body>
        </html>
        """,
        content_type="text/html",
        status=status,
    )


class CallbackServer:
    """Local HTTP server that receives the redirect from the backend"""

    def __init__(
        self,
        exchanger: AuthorizationExchange,
        store: CredentialStore,
        host: Optional[str] = None,
        port: Optional[int] = None,
        callback_path: Optional[str] = None,
        home_route: Optional[str] = None,
        cookie_options: Optional[CookieOptions] = None,
    ):
        import settings

        self.exchanger = exchanger
        self.store = store
        self.session = SessionState(store)
        self.host = host or settings.CALLBACK_HOST
        self.port = port if port is not None else settings.CALLBACK_PORT
        self.callback_path = callback_path or settings.CALLBACK_PATH
        self.home_route = home_route or settings.HOME_ROUTE
        self.cookie_options = cookie_options

        self.last_state: Optional[CallbackState] = None
        self.last_error: Optional[str] = None
        self.runner: Optional[web.AppRunner] = None
        self._event = asyncio.Event()

        self.app = web.Application()
        self.app.router.add_get(self.callback_path, self._handle_callback)
        self.app.router.add_get(self.home_route, self._handle_home)

    async def _handle_callback(self, request: web.Request) -> web.Response:
        """Run one callback controller for this redirect arrival"""
        navigator = RecordingNavigator()
        controller = CallbackController(
            str(request.url),
            exchanger=self.exchanger,
            store=self.store,
            navigator=navigator,
            cookie_options=self.cookie_options,
            home_route=self.home_route,
        )

        # The runner cancels handlers on client disconnect; the exchange is
        # shielded and keeps running, but the unmounted controller drops its result.
        task = asyncio.ensure_future(controller.run())
        try:
            state = await asyncio.shield(task)
        finally:
            controller.unmount()

        self.last_state = state
        self.last_error = controller.error
        if state in TERMINAL_STATES:
            self._event.set()
        if state is CallbackState.REDIRECTING:
            raise web.HTTPFound(navigator.location or self.home_route)

        return render_page(controller.render(), status=400)

    async def _handle_home(self, request: web.Request) -> web.Response:
        if self.session.is_authenticated():
            view = View(
                kind="home",
                title="Login Complete",
                message="You are signed in. You can close this window and return to the terminal.",
            )
        else:
            view = View(kind="home", title="Markdown to DOCX", message="You are not signed in.")
        return render_page(view)

    async def start(self) -> None:
        """Start the landing page server"""
        self.runner = web.AppRunner(self.app, handler_cancellation=True)
        await self.runner.setup()

        site = web.TCPSite(self.runner, host=self.host, port=self.port)
        await site.start()
        logger.info(f"OAuth callback server listening on http://{self.host}:{self.port}{self.callback_path}")

    async def wait_for_login(self, timeout: float = 300) -> bool:
        """
        Wait for a redirect to reach a terminal state.

        Args:
            timeout: Maximum time to wait in seconds

        Returns:
            True if the callback stored a session; False on timeout or as soon
            as a callback fails (see ``last_error``)
        """
        try:
            await asyncio.wait_for(self._event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(f"OAuth callback timeout after {timeout} seconds")
            return False
        return self.last_state is CallbackState.REDIRECTING

    async def stop(self) -> None:
        """Stop the landing page server"""
        if self.runner:
            await self.runner.cleanup()
            self.runner = None
