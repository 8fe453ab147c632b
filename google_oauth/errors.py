"""Error taxonomy for the Google OAuth session"""

from typing import Optional

from .constants import GENERIC_AUTH_FAILURE, NOT_AUTHENTICATED_MESSAGE


class AuthError(Exception):
    """Authentication failure carrying a user-displayable message"""

    def __init__(self, message: str = GENERIC_AUTH_FAILURE):
        super().__init__(message)
        self.message = message


class InputError(AuthError):
    """The callback arrived without a usable authorization code"""


class CodeReplayError(InputError):
    """An authorization code was presented for a second exchange"""


class NetworkError(AuthError):
    """The exchange request failed or was rejected by the backend"""

    def __init__(self, message: str = GENERIC_AUTH_FAILURE, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ExchangeTimeoutError(NetworkError):
    """The exchange request did not complete in time"""


class ProtocolError(AuthError):
    """The backend answered 2xx with an unusable body"""


class LoginError(AuthError):
    """The login URL could not be obtained from the backend"""


class NotAuthenticatedError(AuthError):
    """A protected action was attempted without a valid session"""

    def __init__(self, message: str = NOT_AUTHENTICATED_MESSAGE):
        super().__init__(message)


class StorageUnavailable(Exception):
    """The credential storage medium does not exist in this environment"""
