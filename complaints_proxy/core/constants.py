"""
EEU Complaints Proxy - System-wide constants.

Every fixed string or number the routes depend on lives here so the wire
contract with the frontend can be read in one place.
"""

# ---------------------------------------------------------------------------
# Upstream (Google Apps Script)
# ---------------------------------------------------------------------------

DEFAULT_GAS_URL: str = (
    "https://script.google.com/macros/s/"
    "AKfycbwWoZtW-PbJv0wCB6VQquETpPpbenpFjRlhioqJ1jR0_5ES689-S_X126R9IVNoBDe0/exec"
)
DEFAULT_GAS_TIMEOUT_SECONDS: float = 30.0

# Raw upstream text quoted back in error bodies is cut to this length.
UPSTREAM_EXCERPT_CHARS: int = 200

# /health only reveals the head of the GAS URL.
GAS_URL_PREVIEW_CHARS: int = 50

# GAS renders script failures as an HTML page titled with this word
# ("error" in Amharic).
GAS_HTML_DOCTYPE: str = "<!DOCTYPE html>"
GAS_HTML_ERROR_MARKER: str = "ስህተት"

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 3001
GZIP_MINIMUM_SIZE: int = 1024

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://localhost:5174",
    "http://localhost:3000",
    "https://localhost:5173",
    "https://localhost:5174",
    "https://localhost:3000",
)
CORS_METHODS = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
CORS_HEADERS = (
    "Content-Type",
    "Authorization",
    "x-api-key",
    "x-client-version",
    "Cache-Control",
    "cache-control",
)

# ---------------------------------------------------------------------------
# Error bodies
# ---------------------------------------------------------------------------

ERR_ROUTE_NOT_FOUND: str = "Route not found in proxy server"
ERR_INVALID_GAS_RESPONSE: str = "Invalid response from GAS"
ERR_INVALID_AUTH_RESPONSE: str = "Invalid response from authentication server"
ERR_AUTH_SERVER: str = "Authentication server error"
ERR_AUTH_SERVER_DETAILS: str = "GAS script returned an error page instead of JSON response"
ERR_MISSING_CREDENTIALS: str = "Email and password are required"
ERR_DOWNLOAD_FAILED: str = "Download failed"
ERR_INTERNAL: str = "Internal proxy error"

# ---------------------------------------------------------------------------
# Attachment download defaults
# ---------------------------------------------------------------------------

DEFAULT_DOWNLOAD_CONTENT_TYPE: str = "application/octet-stream"
DEFAULT_DOWNLOAD_DISPOSITION: str = 'attachment; filename="download"'

# Routes ending in this are file downloads and are never gzipped.
DOWNLOAD_PATH_SUFFIX: str = "/download"
