"""Configuration constants for the Cocoro cloud API."""

API_BASE_URL = "https://hms.cloudlabs.sharp.co.jp/hems/pfApi/ta"

# The login call and the control endpoint identify the client by this URL
# with the app key appended.
TERMINAL_APP_ID_PREFIX = "https://db.cloudlabs.sharp.co.jp/clpf/key/"

SERVICE_NAME = "iClub"

USER_AGENT = (
    "smartlink_v200i Mozilla/5.0 (iPad; CPU OS 14_3 like Mac OS X) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Mobile/15E148"
)

DEFAULT_TIMEOUT = 30  # seconds

# Environment variables consulted when credentials are not passed explicitly
ENV_APP_SECRET = "COCORO_APP_SECRET"
ENV_APP_KEY = "COCORO_APP_KEY"
