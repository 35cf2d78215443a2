"""Raw JSON-RPC helpers used to check a node before deployment."""

from typing import Any, List, Optional

import requests

from .constants import NETWORK_CONFIG
from .exceptions import RpcError


def rpc_request(rpc_url: str, method: str, params: Optional[List[Any]] = None) -> Any:
    """
    Send a single JSON-RPC request and return its ``result``.

    Args:
        rpc_url: RPC endpoint URL
        method: JSON-RPC method name
        params: Method parameters

    Returns:
        The decoded ``result`` field

    Raises:
        RpcError: On HTTP errors, RPC errors, malformed responses or network errors
    """
    try:
        response = requests.post(
            rpc_url,
            json={
                "jsonrpc": "2.0",
                "method": method,
                "params": params or [],
                "id": 1,
            },
            timeout=30,
        )
    except requests.RequestException as e:
        raise RpcError(f"Network error during RPC call to {rpc_url}: {e}") from e

    if response.status_code != 200:
        raise RpcError(f"RPC request failed with status {response.status_code}")

    try:
        result = response.json()
    except ValueError as e:
        raise RpcError(f"RPC response from {rpc_url} is not JSON") from e

    if "error" in result:
        raise RpcError(f"RPC error: {result['error']}")

    if "result" not in result:
        raise RpcError(f"RPC response missing 'result' for {method}")

    return result["result"]


def get_chain_id(rpc_url: str) -> int:
    """Return the node's chain id (``eth_chainId``)."""
    return int(rpc_request(rpc_url, "eth_chainId"), 16)


def network_name_for_chain_id(chain_id: int) -> str:
    """
    Map a chain id to a configured network name.

    Unknown ids map to ``chain-<id>`` so record file names stay unique per chain.
    """
    for name, config in NETWORK_CONFIG.items():
        if config["chain_id"] == chain_id:
            return name
    return f"chain-{chain_id}"


def detect_network(rpc_url: str) -> str:
    """Network name of the node behind ``rpc_url``."""
    return network_name_for_chain_id(get_chain_id(rpc_url))
