"""Configuration constants for pharbit-deployments."""

CONTRACT_NAME = "PharmaTracker"

# Alias record name, rewritten on every run regardless of network
LOCAL_ALIAS = "local"

DEFAULT_SOLC_VERSION = "0.8.19"

# Consumer directories (relative to the project root) that receive the compiled artifact
DEFAULT_CONSUMER_DIRS = (
    "frontend/src/contracts",
    "backend/contracts",
)

# Network configuration based on ethereum-lists/chains
NETWORK_CONFIG = {
    "localhost": {
        "chain_id": 31337,
        "chain_name": "Hardhat Local",
        "default_rpc_url": "http://127.0.0.1:8545",
    },
    "sepolia": {
        "chain_id": 11155111,
        "chain_name": "Sepolia",
        "default_rpc_url": "https://rpc.sepolia.org",
    },
    "amoy": {
        "chain_id": 80002,
        "chain_name": "Polygon Amoy",
        "default_rpc_url": "https://rpc-amoy.polygon.technology",
    },
}

DEFAULT_NETWORK = "localhost"
