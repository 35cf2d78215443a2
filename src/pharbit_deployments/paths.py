"""Path management utilities for pharbit-deployments."""

from pathlib import Path
from typing import Iterable, List, Optional, Union

from .constants import CONTRACT_NAME, DEFAULT_CONSUMER_DIRS, LOCAL_ALIAS


def get_default_project_root() -> Path:
    """
    Get default project root (current working directory).

    Returns:
        Absolute path of the current working directory
    """
    return Path.cwd()


def resolve_project_root(project_root: Optional[Union[Path, str]] = None) -> Path:
    """Return ``project_root`` as an absolute path, or the default root if None."""
    if project_root is None:
        return get_default_project_root()
    return Path(project_root).absolute()


def get_deployments_dir(project_root: Optional[Union[Path, str]] = None) -> Path:
    """Directory holding the ``addresses.*.json`` deployment records."""
    return resolve_project_root(project_root) / "deployments"


def get_record_paths(deployments_dir: Path, network: str) -> tuple[Path, Path]:
    """
    Get deployment record file paths.

    Args:
        deployments_dir: Directory holding the records
        network: Network name the record belongs to

    Returns:
        Tuple of (network_path, alias_path)
    """
    network_path = deployments_dir / f"addresses.{network}.json"
    alias_path = deployments_dir / f"addresses.{LOCAL_ALIAS}.json"

    return (network_path, alias_path)


def get_artifact_path(
    project_root: Optional[Union[Path, str]] = None, contract_name: str = CONTRACT_NAME
) -> Path:
    """
    Get the Hardhat build-output artifact path for a contract.

    Returns:
        Path to artifacts/contracts/<Name>.sol/<Name>.json
    """
    root = resolve_project_root(project_root)
    return root / "artifacts" / "contracts" / f"{contract_name}.sol" / f"{contract_name}.json"


def get_source_path(
    project_root: Optional[Union[Path, str]] = None, contract_name: str = CONTRACT_NAME
) -> Path:
    """Solidity source path, contracts/<Name>.sol."""
    return resolve_project_root(project_root) / "contracts" / f"{contract_name}.sol"


def get_consumer_dirs(
    project_root: Optional[Union[Path, str]] = None,
    consumer_dirs: Iterable[Union[Path, str]] = DEFAULT_CONSUMER_DIRS,
) -> List[Path]:
    """Resolve consumer directories against the project root; absolute entries are kept."""
    root = resolve_project_root(project_root)
    return [root / d for d in consumer_dirs]
