"""Read-only smoke checks against a freshly deployed PharmaTracker."""

import logging
from typing import Any, List, Tuple

from .types import DeployedContract, Stage, StageResult, StageStatus

logger = logging.getLogger(__name__)


def smoke_checks(deployer: str) -> List[Tuple[str, str, Tuple[Any, ...]]]:
    """(label, function name, arguments) for each check."""
    return [
        ("Contract owner", "owner", ()),
        ("Deployer is authorized manufacturer", "isAuthorizedManufacturer", (deployer,)),
        ("Total drugs registered", "getTotalDrugs", ()),
    ]


def verify_deployment(contract: DeployedContract, deployer: str) -> List[StageResult]:
    """
    Run the smoke checks. Never raises; each failing call becomes a WARNING result.

    Returns:
        One StageResult per check, the call's return value in ``detail``
    """
    logger.info("Testing basic contract functionality...")

    results = []
    for label, function_name, args in smoke_checks(deployer):
        try:
            value = contract.call(function_name, *args)
        except Exception as e:
            logger.warning("Smoke check %s() failed: %s", function_name, e)
            results.append(
                StageResult(Stage.SMOKE_TEST, StageStatus.WARNING, f"{function_name}() failed", error=e)
            )
            continue

        logger.info("%s: %s", label, value)
        results.append(StageResult(Stage.SMOKE_TEST, StageStatus.OK, label, detail=value))

    if all(r.ok for r in results):
        logger.info("Basic functionality test passed")
    return results
