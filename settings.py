from config.loader import get_config_loader

config = get_config_loader()

# Backend that runs the Google leg of the OAuth flow and the conversion API
API_BASE_URL = config.get("API_BASE_URL", "https://markdown-to-docx.onrender.com")

# Timeouts in seconds
# The code exchange is bounded tightly: a stuck exchange burns a single-use code
EXCHANGE_TIMEOUT = config.get("EXCHANGE_TIMEOUT", 10.0)
API_TIMEOUT = config.get("API_TIMEOUT", 30.0)

# Session lifetime computed client-side after a successful exchange (milliseconds)
TOKEN_TTL_MS = config.get("TOKEN_TTL_MS", 3600000)

# Persisted entry attributes
COOKIE_EXPIRES_DAYS = config.get("COOKIE_EXPIRES_DAYS", 7)
COOKIE_SAME_SITE = config.get("COOKIE_SAME_SITE", "lax")
APP_ENV = config.get("APP_ENV", "development")

# Credential storage
CREDENTIALS_FILE = config.get("CREDENTIALS_FILE", "~/.markdown-docx/cookies.json")

# Local redirect landing page
CALLBACK_HOST = config.get("CALLBACK_HOST", "localhost")
CALLBACK_PORT = config.get("CALLBACK_PORT", 3000)
CALLBACK_PATH = config.get("CALLBACK_PATH", "/oauth/callback")
HOME_ROUTE = "/"
LOGIN_TIMEOUT = config.get("LOGIN_TIMEOUT", 300)

LOG_LEVEL = config.get("LOG_LEVEL", "info")
DEBUG_LOG_FILE = config.get("DEBUG_LOG_FILE", "markdown_docx_debug.log")

DOWNLOAD_FILENAME = config.get("DOWNLOAD_FILENAME", "converted_markdown_files.zip")
