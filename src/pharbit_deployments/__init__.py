"""
pharbit-deployments: deploy the PharmaTracker contract and publish its records
"""

from importlib.metadata import PackageNotFoundError, version

from .chain import ChainClient, Web3ChainClient
from .exceptions import (
    CompilationError,
    ContractNotFoundError,
    DeploymentError,
    DeploymentFailedError,
    InvalidArtifactError,
    NetworkNotFoundError,
    NoSignerAvailableError,
    RecordBuildError,
    RecordNotFoundError,
    RecordWriteError,
    RpcError,
)
from .records import DeploymentRecords, build_deployment_record, write_deployment_record
from .types import (
    CompiledContract,
    DeployedContract,
    DeploymentRecord,
    RunReport,
    Stage,
    StageResult,
    StageStatus,
)
from .workflow import RunContext, main, run_deployment

try:
    __version__ = version("pharbit-deployments")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "RunContext",
    "run_deployment",
    "main",
    "ChainClient",
    "Web3ChainClient",
    "DeploymentRecords",
    "build_deployment_record",
    "write_deployment_record",
    "CompiledContract",
    "DeployedContract",
    "DeploymentRecord",
    "RunReport",
    "Stage",
    "StageResult",
    "StageStatus",
    "DeploymentError",
    "NoSignerAvailableError",
    "DeploymentFailedError",
    "RecordBuildError",
    "RecordWriteError",
    "InvalidArtifactError",
    "CompilationError",
    "RecordNotFoundError",
    "NetworkNotFoundError",
    "ContractNotFoundError",
    "RpcError",
]
