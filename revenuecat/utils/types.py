from typing import Any

# Type aliases for better clarity
QueryParams = dict[str, Any]
PathParams = dict[str, str]
Headers = dict[str, str]

# Constants
USER_AGENT = "revenuecat-python/0.1.0"
DEFAULT_BASE_URL = "https://api.revenuecat.com"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 2
DEFAULT_MAX_PAGES = 1000  # Guard against a cursor chain that never ends
