"""
Google OAuth session constants
"""

# Backend endpoint (relative to API_BASE_URL)
EXCHANGE_PATH = "/auth/google/callback"

# Persisted entry names
ACCESS_TOKEN_KEY = "googleAccessToken"
REFRESH_TOKEN_KEY = "googleRefreshToken"
USER_INFO_KEY = "userInfo"
TOKEN_EXPIRY_KEY = "tokenExpiry"

# Write order; the expiry entry goes last so a token is never valid without it
ENTRY_KEYS = (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_INFO_KEY, TOKEN_EXPIRY_KEY)

DEFAULT_TOKEN_TTL_MS = 3600000
DEFAULT_EXCHANGE_TIMEOUT = 10.0

# Authorization codes remembered per exchanger to refuse replays
MAX_REMEMBERED_CODES = 256

# User-facing messages
NO_CODE_MESSAGE = "No authorization code found"
GENERIC_AUTH_FAILURE = "Authentication failed. Please try again."
LOGIN_FAILURE_MESSAGE = "Failed to initiate login"
NOT_AUTHENTICATED_MESSAGE = "Not authenticated"
