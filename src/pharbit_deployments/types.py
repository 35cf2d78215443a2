"""Data types and dataclasses for pharbit-deployments."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class DeploymentRecord:
    """Summary of one deployment, written verbatim to every record file."""

    network: str  # e.g., "localhost"
    deployer: str  # Checksummed address
    timestamp: str  # ISO-8601, e.g., "2025-01-01T12:00:00.000Z"
    contracts: Dict[str, str]  # Contract name -> checksummed address
    abi: List[Dict[str, Any]]  # Full contract ABI

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready copy, keys in serialization order."""
        return {
            "network": self.network,
            "deployer": self.deployer,
            "timestamp": self.timestamp,
            "contracts": dict(self.contracts),
            "abi": list(self.abi),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeploymentRecord":
        return cls(
            network=data["network"],
            deployer=data["deployer"],
            timestamp=data["timestamp"],
            contracts=dict(data["contracts"]),
            abi=list(data["abi"]),
        )


@dataclass(frozen=True)
class CompiledContract:
    """Contract definition ready for deployment."""

    name: str
    abi: List[Dict[str, Any]]
    bytecode: str  # 0x-prefixed creation bytecode

    # Optional fields
    source_path: Optional[Path] = None
    artifact_format: Optional[str] = None  # "hardhat", "foundry" or "solc"


class DeployedContract(ABC):
    """
    Handle to a confirmed contract deployment.

    Subclasses bind ``call`` and ``transact`` to a concrete chain client.
    """

    def __init__(
        self,
        address: str,
        abi: List[Dict[str, Any]],
        transaction_hash: Optional[str] = None,
        block_number: Optional[int] = None,
    ):
        self.address = address
        self.abi = abi
        self.transaction_hash = transaction_hash
        self.block_number = block_number

    @abstractmethod
    def call(self, function_name: str, *args: Any) -> Any:
        """Run a read-only contract function and return its result."""

    @abstractmethod
    def transact(self, function_name: str, *args: Any) -> str:
        """Send a state-changing contract function, returning the transaction hash."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(address={self.address!r})"


class Stage(Enum):
    """Workflow stages, in execution order."""

    LOAD_CONTRACT = "load-contract"
    RESOLVE_SIGNER = "resolve-signer"
    DEPLOY = "deploy"
    BUILD_RECORD = "build-record"
    WRITE_RECORD = "write-record"
    COPY_ARTIFACT = "copy-artifact"
    SMOKE_TEST = "smoke-test"


# Stages whose failure never stops the run
BEST_EFFORT_STAGES = frozenset({Stage.COPY_ARTIFACT, Stage.SMOKE_TEST})


class StageStatus(Enum):
    OK = "ok"
    WARNING = "warning"
    FAILED = "failed"


@dataclass
class StageResult:
    """Outcome of one stage (or one step of a best-effort stage)."""

    stage: Stage
    status: StageStatus
    message: str = ""
    error: Optional[BaseException] = None
    detail: Any = None

    @property
    def fatal(self) -> bool:
        return self.status is StageStatus.FAILED and self.stage not in BEST_EFFORT_STAGES

    @property
    def ok(self) -> bool:
        return self.status is StageStatus.OK


@dataclass
class RunReport:
    """Everything a deployment run produced."""

    results: List[StageResult] = field(default_factory=list)
    record: Optional[DeploymentRecord] = None
    contract: Optional[DeployedContract] = None
    written_paths: List[Path] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not any(r.fatal for r in self.results)

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1

    @property
    def warnings(self) -> List[StageResult]:
        return [r for r in self.results if r.status is StageStatus.WARNING]

    def results_for(self, stage: Stage) -> List[StageResult]:
        return [r for r in self.results if r.stage is stage]
