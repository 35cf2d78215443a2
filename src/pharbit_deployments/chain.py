"""Chain client interface and its web3.py implementation."""

import logging
from typing import Any, Dict, List, Optional, Protocol

import requests
from eth_account import Account
from eth_utils import to_checksum_address
from web3 import Web3
from web3.exceptions import TimeExhausted, Web3Exception

from .exceptions import DeploymentFailedError, RpcError
from .types import CompiledContract, DeployedContract

logger = logging.getLogger(__name__)


class ChainClient(Protocol):
    """Narrow view of a blockchain node used by the deployment workflow."""

    def get_signers(self) -> List[str]:
        """Addresses able to sign transactions, in preference order."""
        ...

    def get_balance(self, address: str) -> int:
        """Native-token balance of ``address`` in wei."""
        ...

    def deploy(
        self,
        contract: CompiledContract,
        signer: str,
        timeout: Optional[float] = None,
    ) -> DeployedContract:
        """Submit a creation transaction and block until it is confirmed."""
        ...


class Web3DeployedContract(DeployedContract):
    """Deployed contract handle backed by a web3.py contract object."""

    def __init__(
        self,
        client: "Web3ChainClient",
        address: str,
        abi: List[Dict[str, Any]],
        sender: str,
        transaction_hash: Optional[str] = None,
        block_number: Optional[int] = None,
    ):
        super().__init__(address, abi, transaction_hash, block_number)
        self._client = client
        self._sender = sender
        self._contract = client.w3.eth.contract(address=address, abi=abi)

    def call(self, function_name: str, *args: Any) -> Any:
        return getattr(self._contract.functions, function_name)(*args).call()

    def transact(self, function_name: str, *args: Any) -> str:
        function = getattr(self._contract.functions, function_name)(*args)
        return self._client.send_transaction(function, self._sender)


class Web3ChainClient:
    """
    ChainClient over a JSON-RPC node.

    Without a private key the node's own accounts (``eth_accounts``) sign,
    which is how a local Hardhat or Anvil node is used. With a private key
    transactions are signed locally and sent raw.
    """

    def __init__(
        self,
        rpc_url: str,
        private_key: Optional[str] = None,
        poll_latency: float = 0.5,
    ):
        self.rpc_url = rpc_url
        self.w3 = Web3(Web3.HTTPProvider(rpc_url))
        self.account = Account.from_key(private_key) if private_key else None
        self.poll_latency = poll_latency

    def ensure_connected(self) -> None:
        """
        Raises:
            RpcError: If the node does not answer
        """
        if not self.w3.is_connected():
            raise RpcError(f"Could not connect to RPC at {self.rpc_url}")

    def get_signers(self) -> List[str]:
        if self.account is not None:
            return [self.account.address]
        return [to_checksum_address(a) for a in self.w3.eth.accounts]

    def get_balance(self, address: str) -> int:
        return self.w3.eth.get_balance(to_checksum_address(address))

    def send_transaction(self, function: Any, sender: str) -> str:
        """
        Send a contract constructor or function call from ``sender``.

        Returns:
            Transaction hash as 0x-prefixed hex
        """
        if self.account is not None and sender == self.account.address:
            tx = function.build_transaction(
                {
                    "from": sender,
                    "nonce": self.w3.eth.get_transaction_count(sender),
                    "chainId": self.w3.eth.chain_id,
                }
            )
            signed = self.account.sign_transaction(tx)
            tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        else:
            tx_hash = function.transact({"from": sender})
        return Web3.to_hex(tx_hash)

    def wait_for_receipt(self, tx_hash: str, timeout: Optional[float] = None) -> Any:
        """
        Block until ``tx_hash`` is mined.

        Args:
            tx_hash: Transaction hash
            timeout: Seconds to wait; None waits indefinitely

        Raises:
            DeploymentFailedError: If ``timeout`` elapses first
        """
        try:
            return self.w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=float("inf") if timeout is None else timeout,
                poll_latency=self.poll_latency,
            )
        except TimeExhausted as e:
            raise DeploymentFailedError(
                f"Transaction {tx_hash} not confirmed after {timeout} seconds"
            ) from e

    def deploy(
        self,
        contract: CompiledContract,
        signer: str,
        timeout: Optional[float] = None,
    ) -> DeployedContract:
        factory = self.w3.eth.contract(abi=contract.abi, bytecode=contract.bytecode)

        try:
            tx_hash = self.send_transaction(factory.constructor(), signer)
            logger.info("Creation transaction sent: %s", tx_hash)
            receipt = self.wait_for_receipt(tx_hash, timeout)
        except (Web3Exception, ValueError, requests.RequestException, OSError) as e:
            raise DeploymentFailedError(f"{contract.name} deployment rejected: {e}") from e

        if receipt["status"] != 1 or not receipt.get("contractAddress"):
            raise DeploymentFailedError(
                f"{contract.name} deployment reverted in transaction {tx_hash}"
            )

        return Web3DeployedContract(
            self,
            address=to_checksum_address(receipt["contractAddress"]),
            abi=contract.abi,
            sender=signer,
            transaction_hash=tx_hash,
            block_number=receipt["blockNumber"],
        )
