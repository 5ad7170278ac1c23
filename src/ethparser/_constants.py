"""Internal constants shared across the library."""

DEFAULT_RPC_URL = "https://cloudflare-eth.com"
USER_AGENT = "ethparser/0.1"
JSONRPC_VERSION = "2.0"

METHOD_BLOCK_NUMBER = "eth_blockNumber"
METHOD_GET_BLOCK_BY_NUMBER = "eth_getBlockByNumber"
