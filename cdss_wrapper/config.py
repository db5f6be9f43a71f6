"""Configuration constants for the CDSS API client"""

# Production base URL
PRODUCTION_BASE_URL = "https://dwr.state.co.us/Rest/GET/api/v2"

# Default timeout in seconds
DEFAULT_TIMEOUT = 30

DEFAULT_USER_AGENT = "cdss-wrapper/0.1.0"

# Telemetry parameter used when none is given
DEFAULT_PARAMETER = "DISCHRG"

# Largest page the CDSS services will return
PAGE_SIZE = 50_000

# Radius (miles) applied to spatial searches without an explicit radius
DEFAULT_RADIUS = 20

RESPONSE_FORMAT = "json"
DATE_FORMAT_DIRECTIVE = "spaceSepToSeconds"
