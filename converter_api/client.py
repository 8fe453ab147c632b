"""HTTP client for the converter backend

Thin request/response wrapper: every call maps a failure onto
``ConverterAPIError`` with the server's ``error`` field when it sent one.
"""

import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from utils.http import server_message
from .models import ConversionResult, GoogleDoc


logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/google"


class ConverterAPIError(Exception):
    """A converter API call failed"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ConverterAPIClient:
    """Client for login initiation and the protected conversion endpoints"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        import settings

        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT
        self._transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        fallback: str,
        access_token: Optional[str] = None,
    ) -> httpx.Response:
        headers = {}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.request(
                    method,
                    f"{self.base_url}{path}",
                    headers=headers,
                    timeout=self.timeout,
                )
        except httpx.RequestError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ConverterAPIError(fallback) from e

        if not response.is_success:
            message = server_message(response, field="error") or fallback
            logger.error(f"{method} {path} returned {response.status_code}: {message}")
            raise ConverterAPIError(message, status_code=response.status_code)

        return response

    async def initiate_login(self) -> str:
        """Ask the backend for the Google authorization URL

        Raises:
            ConverterAPIError: If the backend call fails or returns no URL
        """
        fallback = "Failed to initiate login"
        response = await self._request("GET", LOGIN_PATH, fallback)
        try:
            auth_url = response.json().get("authUrl")
        except (ValueError, AttributeError) as e:
            raise ConverterAPIError(fallback) from e

        if not isinstance(auth_url, str) or not auth_url:
            logger.error("Login initiation response missing authUrl")
            raise ConverterAPIError(fallback)
        return auth_url

    async def list_documents(self, access_token: str) -> List[GoogleDoc]:
        """List the Markdown documents in the user's Drive"""
        fallback = "Failed to fetch documents"
        response = await self._request("GET", "/api/docs", fallback, access_token)
        try:
            return [GoogleDoc.model_validate(doc) for doc in response.json()]
        except (ValueError, TypeError, ValidationError) as e:
            logger.error(f"Unexpected document list payload: {e}")
            raise ConverterAPIError(fallback) from e

    async def convert_documents(self, access_token: str) -> ConversionResult:
        """Convert every listed document to DOCX"""
        fallback = "Conversion failed"
        response = await self._request("POST", "/api/convert", fallback, access_token)
        try:
            return ConversionResult.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Unexpected conversion payload: {e}")
            raise ConverterAPIError(fallback) from e

    async def download_archive(self, access_token: str) -> bytes:
        """Download the ZIP of converted files"""
        response = await self._request("GET", "/api/download-zip", "Download failed", access_token)
        return response.content
