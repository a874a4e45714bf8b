"""
Global constants for the rbexport CLI.
"""

# API constants
DEFAULT_API_BASE_URL = "https://api.rebrandly.com/v1"
DEFAULT_PAGE_SIZE = 25
WORKSPACE_LIST_LIMIT = 100
REQUEST_TIMEOUT = 30.0

# Retry constants
MAX_ATTEMPTS = 3
RETRY_BASE_DELAY = 0.5  # seconds, multiplied by the attempt number

# Credential placeholder shipped in sample configs
API_KEY_PLACEHOLDER = "<<apiKey>>"

# Output defaults
DEFAULT_OUTPUT_BASE = "rebrandly-links.csv"
CSV_FIELDNAMES = ("id", "createdAt", "shortUrl", "domain", "slashtag", "destination")
WRITE_HIGH_WATER_MARK = 64 * 1024  # characters buffered before draining the sink

# Environment variables
ENV_API_KEY = "REBRANDLY_API_KEY"
ENV_WORKSPACES = "REBRANDLY_WORKSPACES"
ENV_EXPORT_BASE = "REBRANDLY_EXPORT_BASE"
ENV_MAX_PAGE_SIZE = "REBRANDLY_MAX_PAGE_SIZE"
ENV_API_BASE_URL = "REBRANDLY_API_BASE_URL"
ENV_LOG_LEVEL = "RBEXPORT_LOG_LEVEL"

# HTTP Headers
DEFAULT_HEADERS = {
    "Content-Type": "application/json",
}

# Logging constants
LOG_APP_NAME = "rbexport"
LOG_FILE_NAME = "rbexport"
LOG_RETENTION_DAYS = 7
LOG_LINES_TO_SHOW = 20

# Sensitive data keys for sanitization
SENSITIVE_KEYS = (
    "apikey", "api_key", "x-api-key", "password", "token", "secret",
    "authorization", "bearer", "session", "cookie"
)
