"""Configuration constants for streamr-chains library."""

# Process environment variable selecting the deployment environment
ENVIRONMENT_VARIABLE = "NODE_ENV"

# Values accepted by load_from_process_environment()
RECOGNIZED_ENVIRONMENTS = ("production", "development")

# Embedded document used when no environment is given
DEFAULT_DOCUMENT = "chains"

# Suffix of per-network RPC override variables, e.g. POLYGON_RPC_URL
RPC_URL_ENV_SUFFIX = "_RPC_URL"

ADDRESS_LENGTH = 42
ADDRESS_PREFIX = "0x"

# Maps field names from the older config.json format to current names
LEGACY_TO_CANONICAL = {
    "id": "chainId",
    "blockExplorer": "blockExplorerUrl",
}

# URL scheme -> RPC protocol value, used when an endpoint omits "protocol"
SCHEME_TO_PROTOCOL = {
    "http": "http",
    "https": "http",
    "ws": "websocket",
    "wss": "websocket",
}

# Amounts below this are read as whole tokens rather than wei
TOKEN_AMOUNT_WEI_THRESHOLD = 10**10
WEI_DECIMALS = 18
