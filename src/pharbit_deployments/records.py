"""Deployment record assembly, serialization and lookup."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from eth_utils import is_address, to_checksum_address

from .constants import CONTRACT_NAME, LOCAL_ALIAS
from .exceptions import (
    ContractNotFoundError,
    NetworkNotFoundError,
    RecordBuildError,
    RecordNotFoundError,
    RecordWriteError,
)
from .paths import get_deployments_dir, get_record_paths
from .types import DeploymentRecord

logger = logging.getLogger(__name__)


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """
    Format an instant as ISO-8601 UTC with millisecond precision.

    Matches JavaScript ``Date.toISOString()``, e.g. ``2025-01-01T12:00:00.000Z``.
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _checksum(value: Any, field_name: str) -> str:
    if not value or not is_address(value):
        raise RecordBuildError(f"Deployment record field '{field_name}' is not an address: {value!r}")
    return to_checksum_address(value)


def build_deployment_record(
    network: str,
    deployer: str,
    address: str,
    abi: List[Dict[str, Any]],
    contract_name: str = CONTRACT_NAME,
    timestamp: Optional[str] = None,
) -> DeploymentRecord:
    """
    Assemble the deployment record.

    Args:
        network: Network name
        deployer: Deployer address
        address: Deployed contract address
        abi: Contract ABI
        contract_name: Logical contract name used as the ``contracts`` key
        timestamp: ISO-8601 creation time (defaults to now)

    Returns:
        DeploymentRecord with checksummed addresses

    Raises:
        RecordBuildError: If a required field is missing or malformed
    """
    if not network:
        raise RecordBuildError("Deployment record requires a network name")
    if not contract_name:
        raise RecordBuildError("Deployment record requires a contract name")
    if abi is None:
        raise RecordBuildError("Deployment record requires an ABI")

    return DeploymentRecord(
        network=network,
        deployer=_checksum(deployer, "deployer"),
        timestamp=timestamp or format_timestamp(),
        contracts={contract_name: _checksum(address, f"contracts.{contract_name}")},
        abi=list(abi),
    )


def serialize_record(record: DeploymentRecord) -> str:
    """Pretty-printed JSON, 2-space indent, no trailing newline."""
    return json.dumps(record.to_dict(), indent=2)


def write_deployment_record(record: DeploymentRecord, deployments_dir: Path) -> tuple[Path, Path]:
    """
    Write the record to its network file and the local alias file.

    Both files receive the same bytes; the alias is overwritten on every run.
    The two writes are not atomic together.

    Args:
        record: Record to write
        deployments_dir: Target directory, created if missing

    Returns:
        Tuple of (network_path, alias_path)

    Raises:
        RecordWriteError: If the directory or either file cannot be written
    """
    network_path, alias_path = get_record_paths(deployments_dir, record.network)
    payload = serialize_record(record)

    try:
        deployments_dir.mkdir(parents=True, exist_ok=True)
        for path in (network_path, alias_path):
            path.write_text(payload)
            logger.info("Saved addresses to %s", path)
    except OSError as e:
        raise RecordWriteError(f"Failed to write deployment record to {deployments_dir}: {e}") from e

    return (network_path, alias_path)


class DeploymentRecords:
    """Read access to the ``addresses.<network>.json`` files of a project."""

    def __init__(self, deployments_dir: Optional[Union[Path, str]] = None):
        """
        Args:
            deployments_dir: Directory holding the records
                             If None, uses ./deployments

        Raises:
            RecordNotFoundError: If the directory does not exist
        """
        if deployments_dir is None:
            deployments_dir = get_deployments_dir()

        self.deployments_dir = Path(deployments_dir)
        if not self.deployments_dir.is_dir():
            raise RecordNotFoundError(
                f"Deployments directory not found at {self.deployments_dir}. "
                "Run the deployment first."
            )

    def networks(self) -> List[str]:
        """Sorted network names with a record, the local alias included."""
        names = []
        for path in self.deployments_dir.glob("addresses.*.json"):
            names.append(path.name[len("addresses.") : -len(".json")])
        return sorted(names)

    def has_network(self, network: str) -> bool:
        return get_record_paths(self.deployments_dir, network)[0].exists()

    def record(self, network: str = LOCAL_ALIAS) -> DeploymentRecord:
        """
        Load the record for a network.

        Raises:
            NetworkNotFoundError: If no record exists for ``network``
        """
        path = get_record_paths(self.deployments_dir, network)[0]
        if not path.exists():
            raise NetworkNotFoundError(f"No deployment record for network '{network}'")

        with open(path) as f:
            return DeploymentRecord.from_dict(json.load(f))

    def address(self, contract_name: str = CONTRACT_NAME, network: str = LOCAL_ALIAS) -> str:
        """
        Deployed address of a contract.

        Raises:
            NetworkNotFoundError: If no record exists for ``network``
            ContractNotFoundError: If the record does not list ``contract_name``
        """
        contracts = self.record(network).contracts
        if contract_name not in contracts:
            raise ContractNotFoundError(
                f"Contract '{contract_name}' not found in deployment record for '{network}'"
            )
        return contracts[contract_name]

    def abi(self, network: str = LOCAL_ALIAS) -> List[Dict[str, Any]]:
        return self.record(network).abi
