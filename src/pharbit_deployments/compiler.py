"""Contract loading: build-output artifact first, py-solc-x compilation as fallback."""

import logging
from pathlib import Path
from typing import Optional, Union

import solcx
from solcx.exceptions import SolcError, SolcInstallationError

from .artifacts import read_compiled_artifact
from .constants import CONTRACT_NAME, DEFAULT_SOLC_VERSION
from .exceptions import CompilationError
from .paths import get_artifact_path, get_source_path
from .types import CompiledContract

logger = logging.getLogger(__name__)


def compile_contract(
    source_path: Path,
    contract_name: str = CONTRACT_NAME,
    solc_version: str = DEFAULT_SOLC_VERSION,
) -> CompiledContract:
    """
    Compile a Solidity source file with solc.

    Installs ``solc_version`` first if it is not already available.

    Raises:
        CompilationError: If the source is missing, solc fails, or the
                          contract is not in the compiler output
    """
    if not source_path.exists():
        raise CompilationError(f"Contract source not found at {source_path}")

    try:
        installed = {str(v) for v in solcx.get_installed_solc_versions()}
        if solc_version not in installed:
            logger.info("Installing solc %s", solc_version)
            solcx.install_solc(solc_version)

        compiled = solcx.compile_files(
            [str(source_path)],
            output_values=["abi", "bin"],
            solc_version=solc_version,
        )
    except (SolcError, SolcInstallationError) as e:
        raise CompilationError(f"Failed to compile {source_path}: {e}") from e

    # Output keys look like "<source path>:<ContractName>"
    for contract_id, contract_interface in compiled.items():
        if contract_id.rsplit(":", 1)[-1] == contract_name:
            bytecode = contract_interface["bin"]
            return CompiledContract(
                name=contract_name,
                abi=contract_interface["abi"],
                bytecode=bytecode if bytecode.startswith("0x") else "0x" + bytecode,
                source_path=source_path,
                artifact_format="solc",
            )

    raise CompilationError(f"Contract '{contract_name}' not found in {source_path}")


def load_compiled_contract(
    project_root: Optional[Union[Path, str]] = None,
    contract_name: str = CONTRACT_NAME,
    solc_version: str = DEFAULT_SOLC_VERSION,
) -> CompiledContract:
    """
    Load the contract definition to deploy.

    Uses the Hardhat build-output artifact when present, otherwise compiles
    contracts/<Name>.sol.

    Raises:
        CompilationError: If neither an artifact with bytecode nor a source exists
        InvalidArtifactError: If the artifact exists but is malformed
    """
    artifact_path = get_artifact_path(project_root, contract_name)
    artifact = read_compiled_artifact(artifact_path)

    if artifact is not None and artifact.bytecode not in ("", "0x"):
        logger.info("Loaded %s from %s", contract_name, artifact_path)
        return artifact.to_contract()

    source_path = get_source_path(project_root, contract_name)
    logger.info("No build artifact at %s, compiling %s", artifact_path, source_path)
    return compile_contract(source_path, contract_name, solc_version)
