"""Configuration constants for dapp-deploy."""

# JSON-RPC endpoint defaults (a local dev node)
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8545

# Layout produced by "dapp build"
DEFAULT_INPUT_DIR = "./out"
DEFAULT_OUTPUT_DIR = "./out"
BIN_EXTENSION = "bin"
ABI_EXTENSION = "abi"
REGISTRY_EXTENSION = "deployed"

# Substituted with the contract name in an output pattern
CONTRACT_PLACEHOLDER = "{{contract}}"

# Seconds between receipt lookups while waiting for a creation transaction
RECEIPT_POLL_INTERVAL = 1.0

# Environment variables that seed CLI defaults
HOST_ENV = "DAPP_DEPLOY_HOST"
PORT_ENV = "DAPP_DEPLOY_PORT"
ACCOUNT_ENV = "DAPP_DEPLOY_ACCOUNT"
