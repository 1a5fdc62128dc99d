# src/compat_scraper/constants.py

# Default User Agent if the vendor profile does not set one.
# Vendor sites reject obvious bot agents, so this mimics a desktop browser.
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)

# HTTP Headers
COMMON_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate", # requests handles this automatically
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}

DEFAULT_TIMEOUT_SECONDS = 60
DEFAULT_SETTLE_DELAY_SECONDS = 5

# Canonical record fields
FIELD_MODEL = "Model"
FIELD_VERSION = "MinFirmwareVersion"
CANONICAL_FIELDS = (FIELD_MODEL, FIELD_VERSION)

# Synthesized key for a cell without a usable header label, 1-indexed.
POSITIONAL_KEY_TEMPLATE = "Column{}"

# Positional fallback used when no header alias supplied a field.
DEFAULT_POSITIONAL_FALLBACK = {
    FIELD_MODEL: POSITIONAL_KEY_TEMPLATE.format(1),
    FIELD_VERSION: POSITIONAL_KEY_TEMPLATE.format(2),
}

# LastUpdated format: UTC, second precision, trailing Z
SNAPSHOT_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Fetch strategy names as used in vendor profiles
STRATEGY_HTTP = "http"
STRATEGY_BROWSER = "browser"
