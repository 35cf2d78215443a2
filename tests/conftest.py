"""Shared pytest fixtures for pharbit-deployments tests."""

import json
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from pharbit_deployments.artifacts import read_compiled_artifact
from pharbit_deployments.exceptions import DeploymentFailedError
from pharbit_deployments.types import CompiledContract, DeployedContract
from pharbit_deployments.workflow import RunContext

DEPLOYER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
CONTRACT_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
FIXED_TIME = datetime(2025, 1, 15, 10, 30, 0, tzinfo=timezone.utc)


class FakeDeployedContract(DeployedContract):
    """Deployed contract whose read calls come from a dict of canned values."""

    def __init__(self, address: str, abi: List[Dict[str, Any]], values: Dict[str, Any]):
        super().__init__(address, abi, transaction_hash="0x" + "ab" * 32, block_number=1)
        self.values = values
        self.calls: List[tuple] = []

    def call(self, function_name: str, *args: Any) -> Any:
        self.calls.append((function_name, args))
        value = self.values[function_name]
        if isinstance(value, Exception):
            raise value
        return value

    def transact(self, function_name: str, *args: Any) -> str:
        self.calls.append((function_name, args))
        return "0x" + "cd" * 32


class FakeChainClient:
    """In-memory ChainClient."""

    def __init__(
        self,
        signers: Optional[List[str]] = None,
        balance: int = 10**22,
        address: str = CONTRACT_ADDRESS,
        deploy_error: Optional[Exception] = None,
        call_values: Optional[Dict[str, Any]] = None,
    ):
        self.signers = [DEPLOYER] if signers is None else signers
        self.balance = balance
        self.address = address
        self.deploy_error = deploy_error
        self.call_values = call_values or {
            "owner": DEPLOYER,
            "isAuthorizedManufacturer": True,
            "getTotalDrugs": 0,
        }
        self.deploy_calls: List[tuple] = []
        self.balance_calls: List[str] = []

    def get_signers(self) -> List[str]:
        return list(self.signers)

    def get_balance(self, address: str) -> int:
        self.balance_calls.append(address)
        return self.balance

    def deploy(self, contract: CompiledContract, signer: str, timeout: Optional[float] = None):
        self.deploy_calls.append((contract, signer, timeout))
        if self.deploy_error is not None:
            raise self.deploy_error
        return FakeDeployedContract(self.address, contract.abi, self.call_values)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def hardhat_artifact_sample(fixtures_dir: Path) -> Path:
    """Return path to sample Hardhat artifact."""
    return fixtures_dir / "PharmaTracker.json"


@pytest.fixture
def foundry_artifact_sample(fixtures_dir: Path) -> Path:
    """Return path to sample Foundry artifact."""
    return fixtures_dir / "foundry_PharmaTracker.json"


@pytest.fixture
def sample_record_json(fixtures_dir: Path) -> Dict[str, Any]:
    """Load and return the sample deployment record fixture."""
    with open(fixtures_dir / "addresses.localhost.json") as f:
        return json.load(f)


@pytest.fixture
def project_root(tmp_path: Path, hardhat_artifact_sample: Path) -> Path:
    """Create a project tree with a Hardhat build artifact in place."""
    root = tmp_path / "pharbit-contracts"
    artifact_dir = root / "artifacts" / "contracts" / "PharmaTracker.sol"
    artifact_dir.mkdir(parents=True)
    shutil.copy(hardhat_artifact_sample, artifact_dir / "PharmaTracker.json")
    return root


@pytest.fixture
def compiled_contract(hardhat_artifact_sample: Path) -> CompiledContract:
    return read_compiled_artifact(hardhat_artifact_sample).to_contract()


@pytest.fixture
def fake_client() -> FakeChainClient:
    return FakeChainClient()


@pytest.fixture
def reverting_client() -> FakeChainClient:
    return FakeChainClient(
        deploy_error=DeploymentFailedError("PharmaTracker deployment reverted in transaction 0xdead")
    )


@pytest.fixture
def make_context(project_root: Path, compiled_contract: CompiledContract):
    """Factory building a RunContext around a given client."""

    def _make(client, network: str = "localhost", **kwargs) -> RunContext:
        return RunContext(
            project_root=project_root,
            network=network,
            client=client,
            contract_loader=lambda: compiled_contract,
            clock=lambda: FIXED_TIME,
            **kwargs,
        )

    return _make
