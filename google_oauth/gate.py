"""Application shell access to the session: login, logout and guarded actions"""

import logging
from typing import Dict, List, Optional

from converter_api import ConversionResult, ConverterAPIClient, ConverterAPIError, GoogleDoc
from .constants import LOGIN_FAILURE_MESSAGE
from .credential_store import CredentialStore
from .errors import LoginError, NotAuthenticatedError
from .navigation import Navigator
from .session_state import SessionState


logger = logging.getLogger(__name__)


class SessionGate:
    """Decides which actions are available and runs them with the stored credential

    Protected actions check ``SessionState.is_authenticated()`` first and fail
    locally, without a request, when there is no valid session. The backend
    still enforces authentication on its side.
    """

    def __init__(
        self,
        store: CredentialStore,
        state: SessionState,
        api: ConverterAPIClient,
        navigator: Navigator,
        home_route: str = "/",
    ):
        self.store = store
        self.state = state
        self.api = api
        self.navigator = navigator
        self.home_route = home_route

    def is_authenticated(self) -> bool:
        return self.state.is_authenticated()

    async def login(self) -> str:
        """Fetch the Google authorization URL and navigate to it

        Returns:
            The authorization URL that was opened

        Raises:
            LoginError: If the backend could not provide a URL
        """
        try:
            auth_url = await self.api.initiate_login()
        except ConverterAPIError as e:
            raise LoginError(LOGIN_FAILURE_MESSAGE) from e
        logger.info("Redirecting to Google for authorization")
        self.navigator.open_external(auth_url)
        return auth_url

    def logout(self) -> None:
        """Clear all stored credentials and return home"""
        self.store.clear()
        logger.info("Logged out")
        self.navigator.push(self.home_route)

    def _require_token(self) -> str:
        if not self.state.is_authenticated():
            logger.debug("Blocked protected action without a valid session")
            raise NotAuthenticatedError()
        bundle = self.store.read()
        if bundle is None:
            raise NotAuthenticatedError()
        return bundle.access_token

    def bearer_headers(self) -> Dict[str, str]:
        """Authorization header for the stored access token

        Raises:
            NotAuthenticatedError: If there is no valid session
        """
        return {"Authorization": f"Bearer {self._require_token()}"}

    async def list_documents(self) -> List[GoogleDoc]:
        token = self._require_token()
        return await self.api.list_documents(token)

    async def convert_documents(self) -> ConversionResult:
        token = self._require_token()
        return await self.api.convert_documents(token)

    async def download_archive(self, result: Optional[ConversionResult]) -> bytes:
        """Download the ZIP produced by a conversion run

        Args:
            result: The conversion result that advertised the archive

        Raises:
            NotAuthenticatedError: If there is no valid session
            ConverterAPIError: If no archive is available or the download fails
        """
        token = self._require_token()
        if result is None or not result.zip_download_link:
            raise ConverterAPIError("No download link available")
        return await self.api.download_archive(token)
