"""Compiled artifact readers for pharbit-deployments."""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import InvalidArtifactError
from .types import CompiledContract


class ArtifactFormat(Enum):
    """
    Build-output artifact formats.

    Value strings appear as ``artifact_format`` on loaded contracts:
    - HARDHAT: ``artifacts/contracts/<Name>.sol/<Name>.json``, bytecode as a hex string
    - FOUNDRY: ``out/<Name>.sol/<Name>.json``, bytecode under ``bytecode.object``
    """

    HARDHAT = "hardhat"
    FOUNDRY = "foundry"


@dataclass(frozen=True)
class CompiledArtifact:
    """A parsed build-output artifact and the raw JSON it came from."""

    name: str
    path: Path
    format: ArtifactFormat
    abi: List[Dict[str, Any]]
    bytecode: str
    content: Dict[str, Any]
    text: str  # File contents exactly as read

    def to_contract(self) -> CompiledContract:
        return CompiledContract(
            name=self.name,
            abi=self.abi,
            bytecode=self.bytecode,
            source_path=self.path,
            artifact_format=self.format.value,
        )


def detect_artifact_format(data: Dict[str, Any]) -> Optional[ArtifactFormat]:
    """
    Detect which toolchain produced an artifact.

    Args:
        data: Parsed artifact JSON

    Returns:
        ArtifactFormat.FOUNDRY if bytecode is an object with an ``object`` key
        ArtifactFormat.HARDHAT if bytecode is a string (or absent, for ABI-only artifacts)
        None if the data carries no ABI
    """
    if not isinstance(data, dict) or "abi" not in data:
        return None

    bytecode = data.get("bytecode")
    if isinstance(bytecode, dict) and "object" in bytecode:
        return ArtifactFormat.FOUNDRY

    return ArtifactFormat.HARDHAT


def _normalize_bytecode(bytecode: str) -> str:
    if bytecode and not bytecode.startswith("0x"):
        return "0x" + bytecode
    return bytecode


def read_compiled_artifact(path: Path) -> Optional[CompiledArtifact]:
    """
    Read a compiled artifact from a build-output path.

    Args:
        path: Artifact JSON path

    Returns:
        CompiledArtifact, or None if no file exists at ``path``

    Raises:
        InvalidArtifactError: If the file is unreadable, not JSON, has no ABI,
                              or carries bytecode that is not a hex string
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidArtifactError(f"Artifact at {path} cannot be read: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidArtifactError(f"Artifact at {path} is not valid JSON: {e}") from e

    artifact_format = detect_artifact_format(data)
    if artifact_format is None:
        raise InvalidArtifactError(f"Artifact at {path} has no 'abi' field")
    if not isinstance(data["abi"], list):
        raise InvalidArtifactError(f"Artifact at {path} has a non-list 'abi' field")

    match artifact_format:
        case ArtifactFormat.FOUNDRY:
            bytecode = data["bytecode"]["object"]
        case ArtifactFormat.HARDHAT:
            bytecode = data.get("bytecode", "")

    if not isinstance(bytecode, str):
        raise InvalidArtifactError(f"Artifact at {path} has bytecode that is not a hex string")

    return CompiledArtifact(
        name=data.get("contractName", path.stem),
        path=path,
        format=artifact_format,
        abi=data["abi"],
        bytecode=_normalize_bytecode(bytecode),
        content=data,
        text=text,
    )
