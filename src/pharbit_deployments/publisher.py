"""Best-effort distribution of the compiled artifact to consumer applications."""

import logging
from pathlib import Path
from typing import Iterable, List

from .artifacts import read_compiled_artifact
from .constants import CONTRACT_NAME
from .exceptions import InvalidArtifactError
from .types import Stage, StageResult, StageStatus

logger = logging.getLogger(__name__)


def copy_artifact(
    artifact_path: Path,
    destinations: Iterable[Path],
    contract_name: str = CONTRACT_NAME,
) -> List[StageResult]:
    """
    Copy the compiled artifact verbatim into each consumer directory as <Name>.json.

    Every destination is attempted independently. Nothing here raises:
    failures come back as WARNING results and are logged.

    Args:
        artifact_path: Build-output artifact to copy
        destinations: Consumer directories, created if missing
        contract_name: Output file stem

    Returns:
        One StageResult per destination, or a single WARNING result if the
        source artifact is missing or unreadable
    """
    try:
        artifact = read_compiled_artifact(artifact_path)
    except (InvalidArtifactError, OSError) as e:
        logger.warning("ABI copy failed: %s", e)
        return [StageResult(Stage.COPY_ARTIFACT, StageStatus.WARNING, str(e), error=e)]

    if artifact is None:
        message = f"compiled artifact not found at {artifact_path}"
        logger.warning("ABI copy failed: %s", message)
        return [StageResult(Stage.COPY_ARTIFACT, StageStatus.WARNING, message, detail=artifact_path)]

    payload = artifact.text

    results = []
    for directory in destinations:
        target = Path(directory) / f"{contract_name}.json"
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(payload, encoding="utf-8")
        except OSError as e:
            logger.warning("ABI copy to %s failed: %s", target, e)
            results.append(
                StageResult(Stage.COPY_ARTIFACT, StageStatus.WARNING, str(e), error=e, detail=target)
            )
            continue

        logger.info("Copied ABI to %s", target)
        results.append(StageResult(Stage.COPY_ARTIFACT, StageStatus.OK, f"copied to {target}", detail=target))

    return results
