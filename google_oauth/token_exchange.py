"""Authorization code exchange against the converter backend"""

import logging
from collections import OrderedDict
from typing import Any, Callable, Optional

import httpx

from utils.http import server_message
from .constants import (
    DEFAULT_EXCHANGE_TIMEOUT,
    DEFAULT_TOKEN_TTL_MS,
    EXCHANGE_PATH,
    GENERIC_AUTH_FAILURE,
    MAX_REMEMBERED_CODES,
    NO_CODE_MESSAGE,
)
from .errors import (
    CodeReplayError,
    ExchangeTimeoutError,
    InputError,
    NetworkError,
    ProtocolError,
)
from .models import CredentialBundle, now_ms


logger = logging.getLogger(__name__)


class AuthorizationExchange:
    """Trades a single-use authorization code for a credential bundle

    The backend holds the client secret and talks to Google; this side only
    posts the code and normalizes the reply. Exchanges are never retried: a
    code the provider has seen once is dead, so every failure is terminal
    for that code.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        ttl_ms: Optional[int] = None,
        clock: Callable[[], int] = now_ms,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the exchanger

        Args:
            base_url: Backend base URL (default: settings.API_BASE_URL)
            timeout: Request timeout in seconds (default: settings.EXCHANGE_TIMEOUT)
            ttl_ms: Session lifetime added to the completion time (default: settings.TOKEN_TTL_MS)
            clock: Source of the current time in epoch milliseconds
            transport: Optional httpx transport, used to stub the backend
        """
        import settings

        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.EXCHANGE_TIMEOUT or DEFAULT_EXCHANGE_TIMEOUT
        if ttl_ms is None:
            ttl_ms = settings.TOKEN_TTL_MS
        self.ttl_ms = DEFAULT_TOKEN_TTL_MS if ttl_ms is None else ttl_ms
        self._clock = clock
        self._transport = transport
        # Bounded; the oldest codes are forgotten first
        self._attempted: "OrderedDict[str, None]" = OrderedDict()

    def _remember(self, code: str) -> None:
        self._attempted[code] = None
        while len(self._attempted) > MAX_REMEMBERED_CODES:
            self._attempted.popitem(last=False)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{EXCHANGE_PATH}"

    async def exchange(self, code: str) -> CredentialBundle:
        """Exchange an authorization code for credentials

        Args:
            code: Authorization code taken from the redirect URL

        Returns:
            CredentialBundle with expires_at = completion time + TTL

        Raises:
            InputError: If the code is empty
            CodeReplayError: If this code was already presented
            ExchangeTimeoutError: If the backend did not answer in time
            NetworkError: On transport failure or a non-2xx response
            ProtocolError: If a 2xx body lacks an access token
        """
        if not code:
            raise InputError(NO_CODE_MESSAGE)
        if code in self._attempted:
            logger.error("Refusing to exchange an authorization code twice")
            raise CodeReplayError("This login link has already been used. Please log in again.")
        self._remember(code)

        logger.info(f"Exchanging authorization code at {self.endpoint}")

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self.endpoint,
                    json={"code": code},
                    headers={"Content-Type": "application/json"},
                    timeout=self.timeout,
                )
        except httpx.TimeoutException as e:
            logger.error(f"Code exchange timed out after {self.timeout} seconds: {e}")
            raise ExchangeTimeoutError(GENERIC_AUTH_FAILURE) from e
        except httpx.RequestError as e:
            logger.error(f"Code exchange request failed: {e}")
            raise NetworkError(GENERIC_AUTH_FAILURE) from e

        logger.debug(f"Code exchange response status: {response.status_code}")

        if not response.is_success:
            message = server_message(response) or GENERIC_AUTH_FAILURE
            logger.error(f"Code exchange rejected with status {response.status_code}: {message}")
            raise NetworkError(message, status_code=response.status_code)

        return self._to_bundle(response)

    def _to_bundle(self, response: httpx.Response) -> CredentialBundle:
        try:
            payload: Any = response.json()
        except ValueError as e:
            logger.error(f"Failed to parse code exchange response: {e}")
            raise ProtocolError(GENERIC_AUTH_FAILURE) from e

        if not isinstance(payload, dict):
            logger.error("Code exchange response is not a JSON object")
            raise ProtocolError(GENERIC_AUTH_FAILURE)

        access_token = payload.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            logger.error("Code exchange response missing access_token")
            raise ProtocolError(GENERIC_AUTH_FAILURE)

        refresh_token = payload.get("refresh_token") or None
        user = payload.get("user")

        logger.info("Successfully exchanged authorization code for tokens")
        return CredentialBundle(
            access_token=access_token,
            expires_at=self._clock() + self.ttl_ms,
            refresh_token=refresh_token,
            user_info=user,
        )
